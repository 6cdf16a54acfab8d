"""Pointer-free layout of a binary tree in a flat array.

Nodes are stored in in-order sequence: leaf ``k`` lives at position ``2k``
and every internal node sits between the two subtrees it covers, so all
internal positions are odd::

    level 2:              3
    level 1:      1               5
    level 0:  0       2       4       6

The level of a position is the number of trailing one bits in its binary
representation. Every relation (parent, sibling, children, covered leaves)
is plain integer arithmetic on the position, so nothing is ever stored
besides the digests themselves and appending a leaf never relocates an
existing node.
"""

from __future__ import annotations


def _check(position: int) -> None:
    if position < 0:
        raise ValueError(f"flat position must be non-negative, got {position}")


def level(position: int) -> int:
    """Height of *position* above the leaves (0 for every even position)."""
    _check(position)
    return ((position + 1) & -(position + 1)).bit_length() - 1


def is_left_child(position: int) -> bool:
    """Whether *position* is the left child of its parent (bit ``level+1`` clear)."""
    return not (position >> (level(position) + 1)) & 1


def parent(position: int) -> int:
    step = 1 << level(position)
    return position + step if is_left_child(position) else position - step


def sibling(position: int) -> int:
    # Same direction as the parent, twice as far.
    step = 1 << (level(position) + 1)
    return position + step if is_left_child(position) else position - step


def left_child(position: int) -> int:
    height = level(position)
    if height == 0:
        raise ValueError(f"leaf position {position} has no children")
    return position - (1 << (height - 1))


def right_child(position: int) -> int:
    height = level(position)
    if height == 0:
        raise ValueError(f"leaf position {position} has no children")
    return position + (1 << (height - 1))


def leaf_position(leaf_index: int) -> int:
    """Flat position of the leaf with zero-based index *leaf_index*."""
    if leaf_index < 0:
        raise ValueError(f"leaf index must be non-negative, got {leaf_index}")
    return 2 * leaf_index


def leaf_span(position: int) -> range:
    """Half-open range of leaf indices covered by the subtree rooted at *position*."""
    height = level(position)
    first = (position - ((1 << height) - 1)) // 2
    return range(first, first + (1 << height))


def subtree_root(first_leaf: int, height: int) -> int:
    """Position of the perfect subtree covering ``2**height`` leaves from *first_leaf*.

    *first_leaf* must be a multiple of ``2**height``.
    """
    return 2 * first_leaf + (1 << height) - 1


def peak_heights(leaf_count: int) -> list[int]:
    """Heights of the maximal perfect subtrees covering ``leaf_count`` leaves, left to right.

    These are the set bits of *leaf_count*, most significant first.
    """
    return [h for h in reversed(range(leaf_count.bit_length())) if (leaf_count >> h) & 1]


def peak_positions(leaf_count: int) -> list[int]:
    """Flat positions of the peaks covering leaves ``[0, leaf_count)``, left to right."""
    positions: list[int] = []
    first = 0
    for height in peak_heights(leaf_count):
        positions.append(subtree_root(first, height))
        first += 1 << height
    return positions


def max_leaves(capacity: int) -> int:
    """Number of leaves that fit in ``capacity`` flat positions."""
    return (capacity + 1) // 2
