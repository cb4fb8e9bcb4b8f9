"""Guarded operations and the authorization gate that fronts them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from rolegate_core.entities.associated import RoleAssociated
from rolegate_core.errors import InsufficientPrivilegesError, UnauthenticatedError
from rolegate_core.roles.role import Role

if TYPE_CHECKING:
    from rolegate_core.registry.roles import RoleRegistry

logger = logging.getLogger(__name__)


class ExecutionStage(str, Enum):
    """Stages a single ``execute`` call walks through, in order."""

    idle = "idle"
    validating = "validating"
    pre_run = "pre_run"
    run = "run"
    post_run = "post_run"
    done = "done"


class Action(RoleAssociated, ABC):
    """An operation that may only run for subjects holding the required roles.

    The associated role set is read as "roles needed to execute". Subclasses
    implement :meth:`run` and may override :meth:`pre_run` / :meth:`post_run`.
    Each ``execute`` call is independent; nothing is kept between calls.
    """

    def __init__(
        self,
        *required_roles: Role | str,
        name: str | None = None,
        registry: RoleRegistry | None = None,
    ) -> None:
        self.name = name or type(self).__name__
        super().__init__(*required_roles, registry=registry)

    # -- Required roles --------------------------------------------------------

    @property
    def required_roles(self) -> tuple[Role, ...]:
        return self.roles

    def add_required_role(self, *roles: Role | str) -> None:
        self.add_role(*roles)

    def remove_required_role(self, *roles: Role | str) -> None:
        self.remove_role(*roles)

    def clear_required_roles(self) -> None:
        self.clear_roles()

    # -- Hooks -----------------------------------------------------------------

    def pre_run(self, subject: RoleAssociated | None, *params: Any) -> None:
        pass

    @abstractmethod
    def run(self, subject: RoleAssociated | None, *params: Any) -> Any: ...

    def post_run(self, subject: RoleAssociated | None, *params: Any) -> None:
        pass

    # -- Gate ------------------------------------------------------------------

    def is_allowed(self, subject: RoleAssociated | None) -> bool:
        """Answer the authorization question without raising or running hooks."""
        required = self.required_roles
        if subject is None:
            return not required
        return subject.satisfies(required)

    def execute(self, subject: RoleAssociated | None, *params: Any) -> Any:
        """Validate *subject*, then run the pre, main and post hooks.

        Hook exceptions propagate unchanged. Denied calls never reach a hook.

        Raises:
            UnauthenticatedError: roles are required but *subject* is None.
            InsufficientPrivilegesError: *subject* does not cover every required role.
        """
        self._validate(subject, params)
        self._trace(ExecutionStage.pre_run)
        self.pre_run(subject, *params)
        self._trace(ExecutionStage.run)
        result = self.run(subject, *params)
        self._trace(ExecutionStage.post_run)
        self.post_run(subject, *params)
        self._trace(ExecutionStage.done)
        return result

    def _validate(self, subject: RoleAssociated | None, params: tuple[Any, ...]) -> None:
        self._trace(ExecutionStage.validating)
        required = self.required_roles
        if subject is None and required:
            logger.info("Denied %s: no subject supplied", self)
            raise UnauthenticatedError(
                f"Action {self} requires a subject", action=self, subject=None, params=params
            )
        available = () if subject is None else subject.roles
        if not Role.aggregate(available).has_children(required, recursive=True):
            logger.info("Denied %s for %s: insufficient privileges", self, subject)
            raise InsufficientPrivilegesError(
                "Insufficient privileges", action=self, subject=subject, params=params
            )

    def _trace(self, stage: ExecutionStage) -> None:
        logger.debug("%s: %s", self, stage.value)

    def __str__(self) -> str:
        return self.name


class CallableAction(Action):
    """Action whose ``run`` step delegates to a plain function.

    The function receives the subject followed by the call parameters.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        *required_roles: Role | str,
        name: str | None = None,
        registry: RoleRegistry | None = None,
    ) -> None:
        self._func = func
        super().__init__(*required_roles, name=name or getattr(func, "__name__", None), registry=registry)

    def run(self, subject: RoleAssociated | None, *params: Any) -> Any:
        return self._func(subject, *params)
