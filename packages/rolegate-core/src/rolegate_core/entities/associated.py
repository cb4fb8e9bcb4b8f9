"""Objects that carry a set of directly associated roles."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from rolegate_core.errors import DuplicateRoleError
from rolegate_core.roles.role import Role, resolve_roles

if TYPE_CHECKING:
    from rolegate_core.registry.roles import RoleRegistry

logger = logging.getLogger(__name__)


class RoleAssociated:
    """Base for subjects and guarded operations that own roles.

    A role is refused when a held role already equals it or implies it.
    The reverse is allowed: adding ``RW`` while holding ``ADD`` keeps both.
    """

    def __init__(self, *roles: Role | str, registry: RoleRegistry | None = None) -> None:
        self._roles: dict[Role, None] = {}
        self._roles_view: tuple[Role, ...] | None = None
        self._registry = registry
        if roles:
            self.add_role(*roles)

    @property
    def roles(self) -> tuple[Role, ...]:
        """Read-only snapshot of the directly associated roles."""
        if self._roles_view is None:
            self._roles_view = tuple(self._roles)
        return self._roles_view

    @property
    def registry(self) -> RoleRegistry | None:
        return self._registry

    def add_role(self, *roles: Role | str) -> None:
        """Associate roles, given as Role objects or registry names.

        All-or-nothing: a rejected candidate leaves the role set untouched.
        """
        candidates = resolve_roles(roles, self._registry)
        staged: list[Role] = []
        for role in candidates:
            for held in (*self._roles, *staged):
                if held.covers(role):
                    raise DuplicateRoleError(role, holder=None if held is role else held, owner=self)
            staged.append(role)
        for role in staged:
            self._roles[role] = None
        self._roles_view = None
        logger.debug("Associated %s with %s", ", ".join(map(str, staged)), self)

    def remove_role(self, *roles: Role | str) -> None:
        """Drop roles; roles that are not associated are ignored."""
        for role in resolve_roles(roles, self._registry):
            if role in self._roles:
                del self._roles[role]
                self._roles_view = None

    def clear_roles(self) -> None:
        self._roles.clear()
        self._roles_view = None

    def satisfies(self, required: Iterable[Role]) -> bool:
        """True if the held roles, taken together, imply every role in *required*."""
        return Role.aggregate(self._roles).has_children(required, recursive=True)


class Subject(RoleAssociated):
    """A user, service account or any other caller holding roles."""

    def __init__(
        self,
        *roles: Role | str,
        name: str | None = None,
        registry: RoleRegistry | None = None,
    ) -> None:
        self.name = name
        super().__init__(*roles, registry=registry)

    def __str__(self) -> str:
        return self.name or f"subject[{', '.join(str(r) for r in self.roles)}]"

    def __repr__(self) -> str:
        return f"Subject(name={self.name!r}, roles={[str(r) for r in self.roles]!r})"
