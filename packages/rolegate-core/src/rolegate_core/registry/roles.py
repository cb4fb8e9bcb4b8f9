"""Role registry: creates roles and resolves them by name."""

from __future__ import annotations

import logging

from rolegate_core.errors import DuplicateRegistrationError, InvalidArgumentError, RoleNotFoundError
from rolegate_core.registry.named import NamedRegistry
from rolegate_core.roles.role import Role

logger = logging.getLogger(__name__)


class RoleRegistry(NamedRegistry[Role]):
    """Registry of named roles.

    Construct one per application (or per test) and pass it to whatever
    needs name resolution. Roles created here are bound to this registry, so
    ``role.add_child("OTHER")`` looks ``OTHER`` up in the same place.
    """

    def add(self, role: Role) -> None:
        """Register *role* and bind it to this registry for name lookups.

        A role already bound to a different registry is refused.
        """
        if role is not None:
            if not isinstance(role, Role):
                raise InvalidArgumentError(f"Expected a Role, got {type(role).__name__}")
            if role.registry is not None and role.registry is not self:
                raise InvalidArgumentError(f"Role {role} is bound to another registry")
        super().add(role)
        role._bind(self)

    def create_role(self, name: str) -> Role:
        if self.get(name) is not None:
            raise DuplicateRegistrationError(name)
        role = Role(name, registry=self)
        self.add(role)
        logger.debug("Created role %s", name)
        return role

    def get_or_create(self, name: str) -> Role:
        if not name:
            raise InvalidArgumentError("Null/Empty role name")
        role = self.get(name)
        if role is None:
            role = self.create_role(name)
        return role

    def require(self, name: str) -> Role:
        """Like ``get`` but raises RoleNotFoundError for unknown names."""
        role = self.get(name)
        if role is None:
            raise RoleNotFoundError(name)
        return role
