"""Contracts consumed by enforcement layers."""

from rolegate_core.interfaces.security import SecurityManager

__all__ = ["SecurityManager"]
