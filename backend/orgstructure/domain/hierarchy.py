"""Pure classification of a structure's position in the hierarchy."""

from enum import Enum


class HierarchyPosition(str, Enum):
    """Where a node sits in the forest."""

    ROOT = "root"                  # no parent, has children
    STANDALONE = "standalone"      # no parent, no children
    INTERMEDIATE = "intermediate"  # has parent and children
    LEAF = "leaf"                  # has parent, no children


def classify_position(depth: int, has_children: bool) -> HierarchyPosition:
    """Classify a node from its depth (0 = root) and whether it has children."""
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    if depth == 0:
        return HierarchyPosition.ROOT if has_children else HierarchyPosition.STANDALONE
    return HierarchyPosition.INTERMEDIATE if has_children else HierarchyPosition.LEAF
