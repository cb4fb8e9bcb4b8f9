"""Named registries."""

from rolegate_core.registry.named import Named, NamedRegistry
from rolegate_core.registry.roles import RoleRegistry

__all__ = ["Named", "NamedRegistry", "RoleRegistry"]
