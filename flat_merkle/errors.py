"""Exception hierarchy for the flat Merkle tree engine."""

from __future__ import annotations


class MerkleError(Exception):
    """Base class for every error raised by ``flat_merkle``."""


class CapacityError(MerkleError, ValueError):
    """Raised at construction when a tree capacity is not supported."""


class TreeFullError(MerkleError):
    """Raised when appending to a tree that already holds ``max_leaves`` leaves.

    The tree is left untouched; the caller must build a larger tree or
    reject the item.
    """

    def __init__(self, capacity: int, max_leaves: int) -> None:
        self.capacity = capacity
        self.max_leaves = max_leaves
        super().__init__(
            f"tree is full: {max_leaves} leaves already stored (capacity={capacity})"
        )


class NotFoundError(MerkleError, LookupError):
    """Raised when a proof or leaf is requested for a leaf that does not exist."""

    def __init__(self, message: str, leaf_index: int | None = None) -> None:
        self.leaf_index = leaf_index
        super().__init__(message)


class DigestSizeError(MerkleError, ValueError):
    """Raised when a digest width does not match the hash engine."""


class HashAlgorithmError(MerkleError, ValueError):
    """Raised when a named hash algorithm is unknown or has no fixed output size."""
