"""Layout module

Split-tree algebra shared by the workspace tree (group leaves) and the
per-tab pane tree (pane leaves):
- types: Split node, Direction, CycleDirection
- tree: split/close/resize/query operations
"""

from .types import CycleDirection, Direction, Node, Split, even_sizes, is_split
from .tree import (
    close_leaf,
    collect_leaf_ids,
    contains_leaf,
    count_leaves,
    find_leaf,
    find_split,
    iter_leaves,
    iter_splits,
    replace_leaf,
    resize_split,
    split_leaf,
)

__all__ = [
    # Types
    "Split",
    "Node",
    "Direction",
    "CycleDirection",
    "even_sizes",
    "is_split",
    # Operations
    "split_leaf",
    "close_leaf",
    "resize_split",
    "replace_leaf",
    # Queries
    "collect_leaf_ids",
    "count_leaves",
    "contains_leaf",
    "find_leaf",
    "find_split",
    "iter_leaves",
    "iter_splits",
]
