"""Role-associated entities."""

from rolegate_core.entities.associated import RoleAssociated, Subject

__all__ = ["RoleAssociated", "Subject"]
