"""Shared test fixtures for Rolegate."""

import pytest

from rolegate_core.config.models import RoleGateConfig
from rolegate_core.registry import RoleRegistry


@pytest.fixture
def registry():
    """A fresh, empty registry per test."""
    return RoleRegistry()


@pytest.fixture
def crud_registry(registry):
    """AUTHENTICATED, ADD, REMOVE, EXECUTE and RW, where RW implies ADD and REMOVE."""
    registry.create_role("AUTHENTICATED")
    registry.create_role("ADD")
    registry.create_role("REMOVE")
    registry.get_or_create("RW")
    registry.get_or_create("EXECUTE")
    registry.get("RW").add_child("ADD", "REMOVE")
    return registry


@pytest.fixture
def sample_config():
    return RoleGateConfig(
        roles={
            "AUTHENTICATED": [],
            "ADD": [],
            "REMOVE": [],
            "RW": ["ADD", "REMOVE"],
            "ADMIN": ["RW"],
        },
        subjects={
            "alice": ["AUTHENTICATED", "RW"],
            "bob": ["AUTHENTICATED", "REMOVE"],
        },
        actions={
            "add-item": ["AUTHENTICATED", "ADD"],
            "public": [],
        },
    )


@pytest.fixture
def config_file(tmp_path, sample_config):
    """The sample config written to a rolegate.yaml under tmp_path."""
    import yaml

    path = tmp_path / "rolegate.yaml"
    path.write_text(yaml.safe_dump(sample_config.model_dump(exclude={"log_level", "log_format"})))
    return path
