"""flat-merkle: append-only Merkle tree over a pointer-free flat array."""

from flat_merkle.config import MerkleSettings, settings
from flat_merkle.errors import (
    CapacityError,
    DigestSizeError,
    HashAlgorithmError,
    MerkleError,
    NotFoundError,
    TreeFullError,
)
from flat_merkle.hashing import Digest, HashEngine
from flat_merkle.locking import LockedMerkleTree
from flat_merkle.schemas import InclusionProof, ProofStep, Side
from flat_merkle.tree import MerkleTree
from flat_merkle.verifier import verify_proof

__all__ = [
    # Configuration
    "settings",
    "MerkleSettings",
    # Hashing
    "Digest",
    "HashEngine",
    # Tree + proofs
    "MerkleTree",
    "LockedMerkleTree",
    "InclusionProof",
    "ProofStep",
    "Side",
    "verify_proof",
    # Errors
    "MerkleError",
    "CapacityError",
    "TreeFullError",
    "NotFoundError",
    "DigestSizeError",
    "HashAlgorithmError",
]

__version__ = "0.1.0"
