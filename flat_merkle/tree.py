"""Append-only Merkle tree stored in a fixed-capacity flat array.

Specification (for third-party verifiers)
==========================================

**Hashing:** see ``flat_merkle.hashing`` (leaf ``H(0x00 || data)``,
internal node ``H(0x01 || left || right)``).

**Layout:** see ``flat_merkle.flat_index``. Leaf ``k`` is stored at flat
position ``2k``; an internal node is stored once both of its children are.

**Root:** the leaves ``[0, n)`` are covered by the perfect subtrees given by
the binary decomposition of ``n`` (the *peaks*, largest first). The root is
obtained by bagging the peaks right to left::

    root = peaks[-1]
    for peak in reversed(peaks[:-1]):
        root = H(0x01 || peak || root)

This is the same value as the RFC 6962 §2.1 Merkle Tree Hash for every
leaf count, so a tree that is not a power of two is neither padded nor
rebalanced.

**Proofs:** sibling digests from the leaf up to its peak, then the bagged
digest of all peaks to the right (if any) as a right sibling, then each
peak to the left as a left sibling, nearest first.

**Thread safety:** none. A tree must have a single writer; wrap it in
``flat_merkle.locking.LockedMerkleTree`` to share it between threads.
"""

from __future__ import annotations

import logging

from flat_merkle import flat_index
from flat_merkle.config import settings
from flat_merkle.errors import CapacityError, NotFoundError, TreeFullError
from flat_merkle.hashing import Digest, HashEngine
from flat_merkle.schemas import InclusionProof, ProofStep, Side

logger = logging.getLogger(__name__)


class MerkleTree:
    """Append-only Merkle tree over a flat array of ``capacity`` positions.

    Appending touches only the new leaf and the ancestors it completes,
    so every append and every proof costs O(log n) hashes. Leaves are
    never removed or modified.

    Verification by third parties requires only:
    - The leaf data (to recompute the leaf hash)
    - The proof (from ``create_proof`` / ``create_proof_for``)
    - The root at the time the proof was created

    No access to the tree instance is needed; use
    ``flat_merkle.verify_proof``.
    """

    def __init__(self, capacity: int | None = None, engine: HashEngine | None = None) -> None:
        if capacity is None:
            capacity = settings.default_capacity
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise CapacityError(f"capacity must be an int, got {capacity!r}")
        if capacity < 1 or capacity > settings.max_capacity:
            raise CapacityError(
                f"capacity {capacity} outside supported range [1, {settings.max_capacity}]"
            )

        self._engine = engine if engine is not None else HashEngine.default()
        self._capacity = capacity
        self._max_leaves = flat_index.max_leaves(capacity)
        self._leaf_count = 0
        self._nodes: list[Digest | None] = [None] * capacity

        logger.info(
            "Merkle tree created: capacity=%d max_leaves=%d engine=%s",
            capacity,
            self._max_leaves,
            self._engine.name,
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_leaves(self) -> int:
        return self._max_leaves

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    @property
    def engine(self) -> HashEngine:
        return self._engine

    @property
    def is_full(self) -> bool:
        return self._leaf_count == self._max_leaves

    def __len__(self) -> int:
        return self._leaf_count

    def append(self, data: bytes) -> tuple[int, Digest]:
        """Append *data* as the next leaf.

        Returns:
            (leaf_index, leaf_hash): the index and hash of the new leaf.

        Raises:
            TreeFullError: if the tree already holds ``max_leaves`` leaves.
                The tree is left unchanged.
        """
        if self.is_full:
            logger.warning(
                "Append refused: tree full (leaves=%d capacity=%d)",
                self._leaf_count,
                self._capacity,
            )
            raise TreeFullError(self._capacity, self._max_leaves)

        leaf_hash = self._engine.leaf_digest(data)
        idx = self._leaf_count
        pos = flat_index.leaf_position(idx)
        self._nodes[pos] = leaf_hash
        self._leaf_count += 1

        # Complete every ancestor whose two children are now both present.
        while True:
            parent = flat_index.parent(pos)
            if parent >= self._capacity:
                break
            left = flat_index.left_child(parent)
            right = flat_index.right_child(parent)
            if right >= self._capacity or self._nodes[left] is None or self._nodes[right] is None:
                break
            self._nodes[parent] = self._engine.node_digest(self._nodes[left], self._nodes[right])
            pos = parent

        if settings.log_appends:
            logger.debug(
                "Leaf appended: index=%d hash=%s top=%d",
                idx,
                leaf_hash.hex(),
                pos,
            )
        return idx, leaf_hash

    def root(self) -> Digest | None:
        """Return the current root, or None for an empty tree."""
        if self._leaf_count == 0:
            return None
        return self._bag(self.peaks())

    def peaks(self) -> list[Digest]:
        """Digests of the maximal perfect subtrees covering all leaves, left to right."""
        return [self._nodes[pos] for pos in flat_index.peak_positions(self._leaf_count)]

    def leaf(self, leaf_index: int) -> Digest:
        """Return the stored hash of the leaf at *leaf_index*."""
        self._check_leaf_index(leaf_index)
        return self._nodes[flat_index.leaf_position(leaf_index)]

    def node(self, position: int) -> Digest | None:
        """Raw read of flat position *position*; None until the node is computed."""
        if not 0 <= position < self._capacity:
            raise IndexError(f"position {position} out of range [0, {self._capacity})")
        return self._nodes[position]

    def index_of(self, data: bytes) -> int:
        """Return the index of the first leaf holding *data*."""
        leaf_hash = self._engine.leaf_digest(data)
        for idx in range(self._leaf_count):
            if self._nodes[flat_index.leaf_position(idx)] == leaf_hash:
                return idx
        raise NotFoundError(f"no leaf matches data hash {leaf_hash.hex()}")

    def create_proof(self, leaf_index: int) -> InclusionProof:
        """Generate an inclusion proof for the leaf at *leaf_index*.

        Raises:
            NotFoundError: if no leaf has that index yet.
        """
        self._check_leaf_index(leaf_index)

        peak_positions = flat_index.peak_positions(self._leaf_count)
        steps: list[ProofStep] = []
        pos = flat_index.leaf_position(leaf_index)

        # Inside the peak every node is populated.
        while pos not in peak_positions:
            side = Side.RIGHT if flat_index.is_left_child(pos) else Side.LEFT
            steps.append(ProofStep(digest=self._nodes[flat_index.sibling(pos)], side=side))
            pos = flat_index.parent(pos)

        peaks = [self._nodes[p] for p in peak_positions]
        j = peak_positions.index(pos)
        if j < len(peaks) - 1:
            steps.append(ProofStep(digest=self._bag(peaks[j + 1 :]), side=Side.RIGHT))
        for i in reversed(range(j)):
            steps.append(ProofStep(digest=peaks[i], side=Side.LEFT))

        if settings.log_appends:
            logger.debug(
                "Proof created: leaf=%d tree_size=%d depth=%d",
                leaf_index,
                self._leaf_count,
                len(steps),
            )
        return InclusionProof(leaf_index=leaf_index, tree_size=self._leaf_count, steps=tuple(steps))

    def create_proof_for(self, data: bytes) -> InclusionProof:
        """Generate an inclusion proof for the first leaf holding *data*."""
        return self.create_proof(self.index_of(data))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _bag(self, peaks: list[Digest]) -> Digest:
        acc = peaks[-1]
        for peak in reversed(peaks[:-1]):
            acc = self._engine.node_digest(peak, acc)
        return acc

    def _check_leaf_index(self, leaf_index: int) -> None:
        n = self._leaf_count
        if isinstance(leaf_index, bool) or not isinstance(leaf_index, int):
            raise NotFoundError(f"leaf index must be an int, got {leaf_index!r}")
        if leaf_index < 0 or leaf_index >= n:
            raise NotFoundError(
                f"leaf index {leaf_index} out of range [0, {n})", leaf_index=leaf_index
            )
