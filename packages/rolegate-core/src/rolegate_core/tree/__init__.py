"""Generic containment graph."""

from rolegate_core.tree.node import TreeNode

__all__ = ["TreeNode"]
