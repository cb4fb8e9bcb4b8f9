"""Locate, read and validate rolegate.yaml.

Search order is the ``--config`` path, then ``./rolegate.yaml``, then
``~/.rolegate/config.yaml``; the first non-empty file wins. Role names may be
taken from the environment with ``${VAR}`` or ``${VAR:-fallback}``, in keys as
well as in role lists. A reference to an unset variable without a fallback is
an error, since an empty role name would otherwise surface far from its cause.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import RoleGateConfig

logger = logging.getLogger(__name__)

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    paths = [Path(cli_path)] if cli_path else []
    paths.append(Path("rolegate.yaml"))
    paths.append(Path.home() / ".rolegate" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> RoleGateConfig:
    """Return the first config found on the search path, or the defaults."""
    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            logger.debug("Skipping empty config %s", path)
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: top level must be a mapping")
        try:
            config = RoleGateConfig(**_expand_env_vars(raw, str(path)))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s (%d roles)", path, len(config.roles))
        return config
    return RoleGateConfig()


def _read_yaml(path: Path) -> Any:
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _expand_env_vars(obj: Any, source: str = "config") -> Any:
    """Expand environment references in every string, mapping keys included."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: _lookup(m, source), obj)
    if isinstance(obj, dict):
        return {_expand_env_vars(k, source): _expand_env_vars(v, source) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v, source) for v in obj]
    return obj


def _lookup(match: re.Match[str], source: str) -> str:
    name, fallback = match.group(1), match.group(2)
    value = os.environ.get(name)
    if value is not None:
        return value
    if fallback is not None:
        return fallback
    raise ValueError(f"Environment variable {name} is not set (referenced in {source})")


# Default YAML template for `rolegate config init`
DEFAULT_CONFIG_TEMPLATE = """\
# rolegate.yaml

# Role hierarchy: each role lists the roles it implies
roles:
  AUTHENTICATED: []
  ADD: []
  REMOVE: []
  RW: [ADD, REMOVE]

# Subjects and the roles they hold
subjects:
  alice: [AUTHENTICATED, RW]
  bob: [AUTHENTICATED, REMOVE]

# Actions and the roles they require
actions:
  add-item: [AUTHENTICATED, ADD]
  list-items: []

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
