"""Layout module - split trees and snapshots"""

from .snapshot import PaneLocation, Snapshot, TabSnapshot, WindowSnapshot, fetch_snapshot
from .tree import Leaf, Node, Split, collect_leaves, find_leaf, iter_leaves, split_tree_from_proto

__all__ = [
    # Tree
    "Leaf",
    "Split",
    "Node",
    "iter_leaves",
    "find_leaf",
    "collect_leaves",
    "split_tree_from_proto",
    # Snapshot
    "PaneLocation",
    "TabSnapshot",
    "WindowSnapshot",
    "Snapshot",
    "fetch_snapshot",
]
