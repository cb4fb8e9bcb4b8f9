"""Value types for the roles subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RoleSnapshot:
    """Immutable picture of a role: its name and the snapshots of its children.

    Two snapshots are equal when they grant the same things, regardless of
    which Role objects produced them.
    """

    name: str | None
    children: frozenset[RoleSnapshot] = field(default_factory=frozenset)
