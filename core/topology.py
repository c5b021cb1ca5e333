"""
Tree Topology
=============
Maps positions onto an implicit k-ary tree with 1-based indexing.

Position 1 is the root. Parent q owns the children
(q-1)*B + 2 .. (q-1)*B + B + 1, which is binary-heap indexing
generalized to branch factor B.
"""

from typing import Optional

BRANCH_FACTOR = 6


def parent_of(position: int, branch_factor: int = BRANCH_FACTOR) -> Optional[int]:
    """Parent position of `position`, or None for the root."""
    if position < 1:
        raise ValueError(f"position must be >= 1, got {position}")
    if position == 1:
        return None
    return (position - 2) // branch_factor + 1


def children_of(position: int, branch_factor: int = BRANCH_FACTOR) -> range:
    """Child positions owned by `position`."""
    if position < 1:
        raise ValueError(f"position must be >= 1, got {position}")
    first = (position - 1) * branch_factor + 2
    return range(first, first + branch_factor)
