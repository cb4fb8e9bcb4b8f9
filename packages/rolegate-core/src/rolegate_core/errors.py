"""Exception hierarchy shared by every rolegate component."""

from __future__ import annotations

from typing import Any


class RoleGateError(Exception):
    """Base class for all rolegate errors."""


class InvalidArgumentError(RoleGateError, ValueError):
    """A null/empty name, a missing role or an empty argument list."""


class InvalidStateError(RoleGateError, RuntimeError):
    """An operation was attempted in a lifecycle state that forbids it."""


class SecurityNotRunningError(InvalidStateError):
    def __init__(self) -> None:
        super().__init__("Security runtime is not running")


class SecurityAlreadyRunningError(InvalidStateError):
    def __init__(self) -> None:
        super().__init__("Security runtime is already running")


class DuplicateError(RoleGateError):
    """Something was added twice."""


class DuplicateRegistrationError(DuplicateError):
    """A registry already holds an object under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"An object with the same name is already registered: {name}")


class DuplicateEdgeError(DuplicateError):
    """A node is already a direct child of the parent."""

    def __init__(self, parent: object, child: object) -> None:
        self.parent = parent
        self.child = child
        super().__init__(f"Child already added: {child}")


class DuplicateRoleError(DuplicateError):
    """A role is already covered, directly or transitively, by a held role.

    ``holder`` is the role that already covers ``role``; when the two are the
    same role it is ``None``.
    """

    def __init__(self, role: object, holder: object | None = None, owner: object | None = None) -> None:
        self.role = role
        self.holder = holder
        self.owner = owner
        if holder is None:
            target = f" to {owner}" if owner is not None else ""
            msg = f"Role already added{target}: {role}"
        else:
            msg = f"Role ({role}) already added as a child of {holder}"
        super().__init__(msg)


class CircularReferenceError(RoleGateError):
    """Adding the edge would make a node its own descendant."""

    def __init__(self, parent: object, child: object) -> None:
        self.parent = parent
        self.child = child
        super().__init__(f"Cannot add {child} as a child of {parent}: circular reference")


class RoleNotFoundError(RoleGateError, LookupError):
    """A role name could not be resolved through the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Role not found: {name}")


class AuthorizationError(RoleGateError):
    """A guarded operation was refused.

    Carries the action, the subject and the call parameters that were denied.
    """

    def __init__(
        self,
        message: str,
        action: object | None = None,
        subject: object | None = None,
        params: tuple[Any, ...] = (),
    ) -> None:
        self.action = action
        self.subject = subject
        self.params = params
        super().__init__(message)


class UnauthenticatedError(AuthorizationError):
    """The action requires roles but no subject was supplied."""


class InsufficientPrivilegesError(AuthorizationError):
    """The subject's roles do not cover every required role."""


class NotAllowedError(AuthorizationError):
    """Raised by the default security manager rejection hook."""

    def __init__(self, message: str = "Not allowed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
