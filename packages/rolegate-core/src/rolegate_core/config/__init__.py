from .builder import build_actions, build_registry, build_subjects
from .loader import load_config
from .models import RoleGateConfig

__all__ = [
    "RoleGateConfig",
    "build_actions",
    "build_registry",
    "build_subjects",
    "load_config",
]
