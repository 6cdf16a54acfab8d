"""Pydantic models for inclusion proofs.

A proof is an immutable value: once produced it no longer depends on the
tree it came from and can be handed to any verifier.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from flat_merkle.hashing import HashEngine

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Side(str, Enum):
    """Which side of the running hash the sibling digest sits on."""

    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# Proof models
# ---------------------------------------------------------------------------


class ProofStep(BaseModel):
    """One level of an inclusion proof."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="hex", val_json_bytes="hex")

    digest: bytes = Field(
        ..., strict=True, description="Sibling digest at this level (hex-encoded in JSON)"
    )
    side: Side


class InclusionProof(BaseModel):
    """Inclusion proof for a single leaf, steps ordered from leaf to root."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="hex", val_json_bytes="hex")

    leaf_index: int = Field(..., ge=0)
    tree_size: int = Field(..., ge=1, description="Leaf count of the tree when the proof was made")
    steps: tuple[ProofStep, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.steps)

    @property
    def siblings(self) -> list[bytes]:
        return [step.digest for step in self.steps]

    @property
    def directions(self) -> list[str]:
        return [step.side.value for step in self.steps]

    def verify(self, data: bytes, claimed_root: bytes, engine: HashEngine) -> bool:
        """Shortcut for ``verify_proof(data, self, claimed_root, engine)``."""
        from flat_merkle.verifier import verify_proof

        return verify_proof(data, self, claimed_root, engine)
