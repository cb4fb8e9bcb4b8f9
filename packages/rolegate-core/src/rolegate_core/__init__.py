"""Rolegate Core - hierarchical role-based access control engine."""

from rolegate_core.actions import Action, CallableAction, ExecutionStage
from rolegate_core.config import RoleGateConfig, build_registry, load_config
from rolegate_core.entities import RoleAssociated, Subject
from rolegate_core.errors import (
    AuthorizationError,
    CircularReferenceError,
    DuplicateEdgeError,
    DuplicateError,
    DuplicateRegistrationError,
    DuplicateRoleError,
    InsufficientPrivilegesError,
    InvalidArgumentError,
    NotAllowedError,
    RoleGateError,
    RoleNotFoundError,
    UnauthenticatedError,
)
from rolegate_core.guard import RoleSecurityManager, SecurityRuntime
from rolegate_core.interfaces import SecurityManager
from rolegate_core.registry import NamedRegistry, RoleRegistry
from rolegate_core.roles import Role, RoleSnapshot
from rolegate_core.tree import TreeNode

__version__ = "0.1.0"

__all__ = [
    "Action",
    "AuthorizationError",
    "CallableAction",
    "CircularReferenceError",
    "DuplicateEdgeError",
    "DuplicateError",
    "DuplicateRegistrationError",
    "DuplicateRoleError",
    "ExecutionStage",
    "InsufficientPrivilegesError",
    "InvalidArgumentError",
    "NamedRegistry",
    "NotAllowedError",
    "Role",
    "RoleAssociated",
    "RoleGateConfig",
    "RoleGateError",
    "RoleNotFoundError",
    "RoleRegistry",
    "RoleSecurityManager",
    "RoleSnapshot",
    "SecurityManager",
    "SecurityRuntime",
    "Subject",
    "TreeNode",
    "UnauthenticatedError",
    "build_registry",
    "load_config",
]
