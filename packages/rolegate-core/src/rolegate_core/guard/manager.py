"""Security manager backed by a role registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from rolegate_core.entities.associated import RoleAssociated
from rolegate_core.interfaces.security import SecurityManager
from rolegate_core.registry.roles import RoleRegistry
from rolegate_core.roles.role import Role

logger = logging.getLogger(__name__)

SubjectProvider = Callable[[], RoleAssociated | None]


class RoleSecurityManager(SecurityManager):
    """Answers ``is_allowed`` for whoever *subject_provider* says is calling.

    Required names resolve through *registry*. A name the registry does not
    know can never be satisfied, so the call is denied.
    """

    def __init__(self, registry: RoleRegistry, subject_provider: SubjectProvider) -> None:
        self._registry = registry
        self._subject_provider = subject_provider

    def is_allowed(self, required_roles: Sequence[str]) -> bool:
        required: list[Role] = []
        for name in required_roles:
            role = self._registry.get(name)
            if role is None:
                logger.warning("Unknown role %r required by a secured call", name)
                return False
            required.append(role)

        subject = self._subject_provider()
        if subject is None:
            return not required
        return subject.satisfies(required)
