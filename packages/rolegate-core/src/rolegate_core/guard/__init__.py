"""Call guarding on top of the SecurityManager contract."""

from rolegate_core.guard.manager import RoleSecurityManager
from rolegate_core.guard.runtime import SecurityRuntime

__all__ = ["RoleSecurityManager", "SecurityRuntime"]
