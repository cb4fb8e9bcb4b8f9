"""Roles and their structural snapshots."""

from rolegate_core.roles.models import RoleSnapshot
from rolegate_core.roles.role import Role, resolve_roles

__all__ = ["Role", "RoleSnapshot", "resolve_roles"]
