"""Named permission nodes.

A role's children are the roles it implies: holding ``RW`` satisfies any
requirement for ``ADD`` once ``RW.add_child("ADD")`` has been called.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from rolegate_core.errors import DuplicateRoleError, InvalidArgumentError, RoleNotFoundError
from rolegate_core.roles.models import RoleSnapshot
from rolegate_core.tree.node import TreeNode

if TYPE_CHECKING:
    from rolegate_core.registry.roles import RoleRegistry

logger = logging.getLogger(__name__)


def resolve_roles(
    items: tuple[Role | str, ...], registry: RoleRegistry | None
) -> list[Role]:
    """Turn a mix of Role objects and role names into Role objects.

    Raises InvalidArgumentError for an empty argument list, None members,
    empty names, or names given without a registry to resolve them, and
    RoleNotFoundError for names the registry does not know.
    """
    if not items:
        raise InvalidArgumentError("Null/Empty roles")
    resolved: list[Role] = []
    for i, item in enumerate(items):
        if item is None:
            raise InvalidArgumentError(f"Null role at index {i}")
        if isinstance(item, str):
            if not item:
                raise InvalidArgumentError(f"Null/Empty role name at index {i}")
            if registry is None:
                raise InvalidArgumentError(f"Cannot resolve role name {item!r}: no registry bound")
            role = registry.get(item)
            if role is None:
                raise RoleNotFoundError(item)
            resolved.append(role)
        elif isinstance(item, Role):
            resolved.append(item)
        else:
            raise InvalidArgumentError(f"Expected a Role or role name at index {i}, got {type(item).__name__}")
    return resolved


class Role(TreeNode):
    """A named node in the role hierarchy.

    Name uniqueness is the registry's concern, not the role's. Roles compare
    by identity; use :meth:`snapshot` for a structural comparison.
    """

    def __init__(
        self,
        name: str,
        children: Iterable[Role] | None = None,
        *,
        registry: RoleRegistry | None = None,
    ) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("Null/Empty name")
        super().__init__(children)
        self._name: str | None = name
        self._registry = registry

    @classmethod
    def aggregate(cls, roles: Iterable[Role]) -> Role:
        """Build an anonymous role whose children are *roles*.

        Used to run containment queries over an arbitrary role set, such as a
        subject's available roles, without touching the subject.
        """
        role = cls.__new__(cls)
        TreeNode.__init__(role, roles)
        role._name = None
        role._registry = None
        return role

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def registry(self) -> RoleRegistry | None:
        return self._registry

    @property
    def is_anonymous(self) -> bool:
        return self._name is None

    def snapshot(self) -> RoleSnapshot:
        """Structural value of this role: its name and its children's snapshots.

        Shared sub-roles are snapshotted once, so diamond-shaped hierarchies
        stay linear in the number of roles.
        """
        return self._snapshot({})

    def _snapshot(self, memo: dict[int, RoleSnapshot]) -> RoleSnapshot:
        snap = memo.get(id(self))
        if snap is None:
            snap = RoleSnapshot(
                name=self._name,
                children=frozenset(child._snapshot(memo) for child in self.children),
            )
            memo[id(self)] = snap
        return snap

    def covers(self, other: Role) -> bool:
        """True if holding this role makes holding *other* redundant.

        Uses the same identity rule as ``has_child``: a distinct role object
        is never redundant just because it looks the same.
        """
        return other is self or self.has_child(other, recursive=True)

    def add_child(self, *roles: Role | str) -> None:  # type: ignore[override]
        """Add one or more implied roles, given as Role objects or names.

        Names resolve through the bound registry. The call is all-or-nothing:
        every candidate is checked before any edge is created.

        Raises:
            InvalidArgumentError: empty call, None member, or unresolvable input.
            RoleNotFoundError: a name the registry does not know.
            DuplicateRoleError: a candidate is already implied by this role.
            CircularReferenceError: a candidate already implies this role.
        """
        candidates = resolve_roles(roles, self._registry)
        staged: list[Role] = []
        for role in candidates:
            for existing in (*self.children, *staged):
                if existing.covers(role):
                    holder = None if existing is role else existing
                    raise DuplicateRoleError(role, holder=holder, owner=self)
            self._check_child(role)
            staged.append(role)
        for role in staged:
            self._attach(role)

    def _bind(self, registry: RoleRegistry) -> None:
        if self._registry is not None and self._registry is not registry:
            raise InvalidArgumentError(f"Role {self} is already bound to another registry")
        self._registry = registry

    def _ensure_node(self, node: object) -> None:
        if not isinstance(node, Role):
            raise InvalidArgumentError(f"Expected a Role, got {type(node).__name__}")

    def __str__(self) -> str:
        if self._name is not None:
            return self._name
        return "<anonymous: " + ", ".join(str(child) for child in self.children) + ">"

    def __repr__(self) -> str:
        if self._name is not None:
            return f"Role({self._name!r})"
        return f"Role.aggregate({list(self.children)!r})"
