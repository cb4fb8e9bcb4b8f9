"""Guarded actions."""

from rolegate_core.actions.action import Action, CallableAction, ExecutionStage

__all__ = ["Action", "CallableAction", "ExecutionStage"]
