"""Explicit call interception: a decorator that consults a SecurityManager."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from rolegate_core.errors import (
    InvalidArgumentError,
    SecurityAlreadyRunningError,
    SecurityNotRunningError,
)
from rolegate_core.interfaces.security import SecurityManager

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _check_role_names(role_names: tuple[str, ...]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for i, name in enumerate(role_names):
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError(f"Null/Empty role name at index {i}")
        if name != name.strip():
            raise InvalidArgumentError(f"Role name {name!r} has surrounding whitespace")
        if name in seen:
            raise InvalidArgumentError(f"Duplicate definition of {name}")
        seen[name] = None
    return tuple(seen)


class SecurityRuntime:
    """Holds the security manager that ``secured`` functions consult.

    Create one per application and call :meth:`init` during start-up.
    Secured functions fail closed: calling one before ``init`` raises
    SecurityNotRunningError. Initialising with ``None`` disables checks.
    """

    def __init__(self, allow_reinit: bool = False) -> None:
        self._allow_reinit = allow_reinit
        self._running = False
        self._manager: SecurityManager | None = None

    def init(self, manager: SecurityManager | None) -> None:
        if self._running and not self._allow_reinit:
            raise SecurityAlreadyRunningError()
        self._manager = manager
        self._running = True
        logger.info("Security runtime started (manager=%s)", type(manager).__name__ if manager else None)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def security_manager(self) -> SecurityManager | None:
        if not self._running:
            raise SecurityNotRunningError()
        return self._manager

    def secured(self, *role_names: str) -> Callable[[F], F]:
        """Guard a function with the given required role names.

        Each call asks the manager ``is_allowed(role_names)``. When denied,
        ``on_not_allowed()`` runs and the function body is skipped. With no
        role names the function is returned unchanged.
        """
        names = _check_role_names(role_names)

        def decorator(func: F) -> F:
            if not names:
                return func

            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                manager = self.security_manager
                if manager is not None and not manager.is_allowed(names):
                    logger.info("Denied call to %s (requires %s)", func.__qualname__, ", ".join(names))
                    manager.on_not_allowed()
                    return None
                return func(*args, **kwargs)

            wrapper.required_roles = names  # type: ignore[attr-defined]
            return wrapper  # type: ignore[return-value]

        return decorator
