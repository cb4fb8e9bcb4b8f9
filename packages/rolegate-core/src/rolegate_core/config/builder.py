"""Turn a RoleGateConfig into live registry, subject and action objects."""

from __future__ import annotations

import logging
from typing import Any

from rolegate_core.actions.action import Action, CallableAction
from rolegate_core.entities.associated import Subject
from rolegate_core.registry.roles import RoleRegistry

from .models import RoleGateConfig

logger = logging.getLogger(__name__)


def build_registry(config: RoleGateConfig, registry: RoleRegistry | None = None) -> RoleRegistry:
    """Create every configured role, then wire the implication edges.

    Roles already present in *registry* are reused. A cycle in the config
    surfaces as CircularReferenceError, a redundant child as DuplicateRoleError.
    """
    registry = registry if registry is not None else RoleRegistry()
    for name in config.roles:
        registry.get_or_create(name)
    for name, children in config.roles.items():
        if children:
            registry.require(name).add_child(*children)
    logger.debug("Built registry with %d roles", len(registry))
    return registry


def build_subjects(config: RoleGateConfig, registry: RoleRegistry) -> dict[str, Subject]:
    return {
        name: Subject(*roles, name=name, registry=registry)
        for name, roles in config.subjects.items()
    }


def _noop(subject: Any, *params: Any) -> None:
    return None


def build_actions(config: RoleGateConfig, registry: RoleRegistry) -> dict[str, Action]:
    """Configured actions carry required roles only; their run step does nothing."""
    return {
        name: CallableAction(_noop, *roles, name=name, registry=registry)
        for name, roles in config.actions.items()
    }
