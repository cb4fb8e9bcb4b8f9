"""Containment graph node with cycle rejection and transitive queries."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from rolegate_core.errors import CircularReferenceError, DuplicateEdgeError, InvalidArgumentError

logger = logging.getLogger(__name__)


class TreeNode:
    """A node whose children form a directed acyclic graph.

    Children are referenced, not owned: the same node may sit under several
    parents. Equality and hashing are by identity, so a node stays a valid
    set member or dict key while its children change.
    """

    def __init__(self, children: Iterable[TreeNode] | None = None) -> None:
        # dict keeps insertion order and gives O(1) membership by identity
        self._children: dict[TreeNode, None] = {}
        self._children_view: tuple[TreeNode, ...] | None = None
        if children is not None:
            seed = list(children)
            for i, child in enumerate(seed):
                if child is None:
                    raise InvalidArgumentError(f"Children set contains None at index {i}")
                self._ensure_node(child)
            for child in seed:
                self._children.setdefault(child, None)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def children(self) -> tuple[TreeNode, ...]:
        """Read-only snapshot of the direct children, in insertion order."""
        if self._children_view is None:
            self._children_view = tuple(self._children)
        return self._children_view

    def has_any_children(self) -> bool:
        return bool(self._children)

    def iter_descendants(self) -> Iterator[TreeNode]:
        """Yield every transitive descendant once, depth first."""
        seen: set[int] = set()
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node
            stack.extend(reversed(node.children))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_child(self, node: TreeNode, recursive: bool = False) -> bool:
        """Return True if *node* is a direct child, or any descendant when *recursive*.

        The walk terminates because ``add_child`` never admits a cycle.
        """
        if node is None:
            raise InvalidArgumentError("Null child")
        if node in self._children:
            return True
        if not recursive:
            return False
        return any(candidate is node for candidate in self.iter_descendants())

    def has_children(self, nodes: Iterable[TreeNode], recursive: bool = False) -> bool:
        """Return True if every node in *nodes* passes ``has_child``.

        An empty collection is vacuously contained.
        """
        if nodes is None:
            raise InvalidArgumentError("Null children set")
        return all(self.has_child(node, recursive) for node in nodes)

    def belongs_to(self, parent: TreeNode, recursive: bool = False) -> bool:
        if parent is None:
            raise InvalidArgumentError("Null parent")
        return parent.has_child(self, recursive)

    def belongs_to_any(self, parents: Iterable[TreeNode], recursive: bool = False) -> bool:
        """True if this node is, or descends from, any member of *parents*."""
        if parents is None:
            raise InvalidArgumentError("Null parent set")
        return any(parent is self or self.belongs_to(parent, recursive) for parent in parents)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_child(self, node: TreeNode) -> None:
        """Attach *node* as a direct child.

        Raises:
            InvalidArgumentError: *node* is None or not a TreeNode.
            CircularReferenceError: *node* is this node or already contains it.
            DuplicateEdgeError: *node* is already a direct child.
        """
        self._check_child(node)
        self._attach(node)

    def remove_child(self, node: TreeNode) -> None:
        """Detach *node*; absent nodes are ignored."""
        if node is None:
            raise InvalidArgumentError("Null child")
        if node in self._children:
            del self._children[node]
            self._children_view = None

    def clear_children(self) -> None:
        if self._children:
            self._children.clear()
            self._children_view = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_node(self, node: object) -> None:
        if not isinstance(node, TreeNode):
            raise InvalidArgumentError(f"Expected a {TreeNode.__name__}, got {type(node).__name__}")

    def _check_child(self, node: TreeNode) -> None:
        if node is None:
            raise InvalidArgumentError("Null child")
        self._ensure_node(node)
        if node is self or node.has_child(self, recursive=True):
            raise CircularReferenceError(self, node)
        if node in self._children:
            raise DuplicateEdgeError(self, node)

    def _attach(self, node: TreeNode) -> None:
        self._children[node] = None
        self._children_view = None
        logger.debug("Linked %s -> %s", self, node)
