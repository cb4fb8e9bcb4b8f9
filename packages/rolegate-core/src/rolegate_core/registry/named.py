"""Name-keyed object store with uniqueness enforcement."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Generic, Protocol, TypeVar, runtime_checkable

from rolegate_core.errors import DuplicateRegistrationError, InvalidArgumentError

logger = logging.getLogger(__name__)


@runtime_checkable
class Named(Protocol):
    """Anything that exposes a ``name``."""

    @property
    def name(self) -> str | None: ...


T = TypeVar("T", bound=Named)


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("Null/Empty name")


class NamedRegistry(Generic[T]):
    """Maps names to objects; a name may be registered once.

    Lookups of unknown names return None rather than raising. Iteration
    follows registration order.
    """

    def __init__(self) -> None:
        self._objects: dict[str, T] = {}

    def add(self, obj: T) -> None:
        if obj is None:
            raise InvalidArgumentError("Null object")
        name = obj.name
        if not name:
            raise InvalidArgumentError("Null/Empty name")
        if name in self._objects:
            raise DuplicateRegistrationError(name)
        self._objects[name] = obj
        logger.debug("Registered %s", name)

    def remove(self, name: str) -> None:
        """Drop *name*; unknown names are ignored."""
        _check_name(name)
        if self._objects.pop(name, None) is not None:
            logger.debug("Unregistered %s", name)

    def get(self, name: str) -> T | None:
        _check_name(name)
        return self._objects.get(name)

    def contains(self, name: str) -> bool:
        _check_name(name)
        return name in self._objects

    def clear(self) -> None:
        """Forget every entry. Objects already handed out stay usable."""
        self._objects.clear()
        logger.debug("Registry cleared")

    def names(self) -> list[str]:
        return list(self._objects)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._objects

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._objects.values()))

    def __len__(self) -> int:
        return len(self._objects)
