"""Security manager interface consulted by call interceptors."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from rolegate_core.errors import NotAllowedError


@runtime_checkable
class SecurityManager(Protocol):
    """Decides whether a guarded call may proceed.

    ``on_not_allowed`` runs when ``is_allowed`` answers False. It must raise
    or otherwise stop the guarded call; the default raises NotAllowedError.
    """

    def is_allowed(self, required_roles: Sequence[str]) -> bool: ...

    def on_not_allowed(self) -> None:
        raise NotAllowedError()
