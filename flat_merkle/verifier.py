"""Stateless inclusion-proof verification.

Verification needs only the leaf data, the proof and the root it is
claimed against; no tree instance is involved, so this is safe to call
from any thread at any time.
"""

from __future__ import annotations

import hmac
import logging
from collections.abc import Iterable

from flat_merkle.errors import DigestSizeError
from flat_merkle.hashing import Digest, HashEngine
from flat_merkle.schemas import InclusionProof, ProofStep, Side

logger = logging.getLogger(__name__)

ProofLike = InclusionProof | Iterable[ProofStep | tuple]

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _unpack(step: ProofStep | tuple, digest_size: int) -> tuple[Digest, Side]:
    if isinstance(step, ProofStep):
        digest, side = step.digest, step.side
    else:
        digest, side = step
    side = Side(side)
    if not isinstance(digest, _BYTES_LIKE):
        raise TypeError(f"sibling digest must be bytes-like, got {type(digest).__name__}")
    if len(digest) != digest_size:
        raise DigestSizeError(f"sibling digest is {len(digest)} bytes, expected {digest_size}")
    return bytes(digest), side


def verify_proof(
    data: bytes,
    proof: ProofLike,
    claimed_root: Digest,
    engine: HashEngine,
) -> bool:
    """Verify that *data* is a leaf of the tree whose root is *claimed_root*.

    Replays the proof from the leaf upward: a ``RIGHT`` sibling is hashed as
    the right operand, a ``LEFT`` sibling as the left one. The result is
    compared with *claimed_root* in constant time.

    Returns False (never raises) for a non-matching root and for malformed
    input: wrong-size digests, unknown sides, or non-bytes data.
    """
    if not isinstance(data, _BYTES_LIKE) or not isinstance(claimed_root, _BYTES_LIKE):
        logger.debug("Proof rejected: leaf data and root must be bytes-like")
        return False
    if len(claimed_root) != engine.digest_size:
        logger.debug(
            "Proof rejected: root is %d bytes, engine digest size is %d",
            len(claimed_root),
            engine.digest_size,
        )
        return False

    steps = proof.steps if isinstance(proof, InclusionProof) else proof
    current = engine.leaf_digest(data)
    try:
        for step in steps:
            digest, side = _unpack(step, engine.digest_size)
            if side is Side.LEFT:
                current = engine.node_digest(digest, current)
            else:
                current = engine.node_digest(current, digest)
    except (TypeError, ValueError) as exc:
        logger.debug("Proof rejected as malformed: %s", exc)
        return False

    return hmac.compare_digest(current, bytes(claimed_root))
