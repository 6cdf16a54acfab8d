"""Lock-serialized access to a Merkle tree shared between threads."""

from __future__ import annotations

import threading

from flat_merkle.hashing import Digest, HashEngine
from flat_merkle.schemas import InclusionProof
from flat_merkle.tree import MerkleTree


class LockedMerkleTree:
    """Serializes every read and write of a ``MerkleTree`` behind one lock.

    ``MerkleTree`` itself has no synchronization; share this wrapper, not
    the bare tree, when several threads append or prove concurrently.
    """

    def __init__(self, tree: MerkleTree | None = None) -> None:
        self._tree = tree if tree is not None else MerkleTree()
        self._lock = threading.Lock()

    @property
    def engine(self) -> HashEngine:
        return self._tree.engine

    @property
    def capacity(self) -> int:
        return self._tree.capacity

    @property
    def leaf_count(self) -> int:
        with self._lock:
            return self._tree.leaf_count

    def append(self, data: bytes) -> tuple[int, Digest]:
        with self._lock:
            return self._tree.append(data)

    def root(self) -> Digest | None:
        with self._lock:
            return self._tree.root()

    def create_proof(self, leaf_index: int) -> InclusionProof:
        with self._lock:
            return self._tree.create_proof(leaf_index)

    def append_and_prove(self, data: bytes) -> tuple[int, Digest, InclusionProof, Digest]:
        """Atomically append *data*, generate its proof, and return the new root.

        The proof is guaranteed to correspond to the tree state immediately
        after this append, even when other threads append concurrently.

        Returns:
            (leaf_index, leaf_hash, proof, root_hash)
        """
        with self._lock:
            idx, leaf_hash = self._tree.append(data)
            proof = self._tree.create_proof(idx)
            return idx, leaf_hash, proof, self._tree.root()
