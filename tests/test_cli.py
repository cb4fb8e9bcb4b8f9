"""Tests for the rolegate CLI (check, tree, config show/init)."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from rolegate.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI callback replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def isolated(tmp_path, monkeypatch) -> Path:
    """Empty cwd with no user-global config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
    return tmp_path


def _invoke(config_file: Path, *args: str):
    return runner.invoke(app, ["--config", str(config_file), *args])


# ── rolegate check ───────────────────────────────────────────────────


def test_check_allowed_through_hierarchy(config_file):
    result = _invoke(config_file, "check", "-s", "alice", "-a", "add-item")
    assert result.exit_code == 0
    assert "ALLOWED" in result.output


def test_check_denied(config_file):
    result = _invoke(config_file, "check", "-s", "bob", "-a", "add-item")
    assert result.exit_code == 1
    assert "DENIED" in result.output


def test_check_ci_output(config_file):
    result = _invoke(config_file, "check", "-s", "alice", "-a", "add-item", "--ci")
    assert result.exit_code == 0
    assert result.output.strip() == "ALLOWED add-item alice"


def test_check_ci_denied_without_subject(config_file):
    result = _invoke(config_file, "check", "-a", "add-item", "--ci")
    assert result.exit_code == 1
    assert any(line.startswith("DENIED add-item -:") for line in result.output.splitlines())


def test_check_public_action_without_subject(config_file):
    result = _invoke(config_file, "check", "-a", "public", "--ci")
    assert result.exit_code == 0
    assert result.output.strip() == "ALLOWED public -"


def test_check_adhoc_roles(config_file):
    result = _invoke(config_file, "check", "--roles", "ADMIN", "--requires", "ADD,REMOVE", "--ci")
    assert result.exit_code == 0
    assert "ALLOWED" in result.output


def test_check_adhoc_roles_denied(config_file):
    result = _invoke(config_file, "check", "--roles", "ADD", "--requires", "RW", "--ci")
    assert result.exit_code == 1


def test_check_unknown_subject(config_file):
    result = _invoke(config_file, "check", "-s", "mallory", "-a", "add-item")
    assert result.exit_code == 2
    assert "Unknown subject" in result.output


def test_check_unknown_action(config_file):
    result = _invoke(config_file, "check", "-s", "alice", "-a", "nope")
    assert result.exit_code == 2
    assert "Unknown action" in result.output


def test_check_unknown_adhoc_role(config_file):
    result = _invoke(config_file, "check", "--roles", "GHOST", "-a", "public")
    assert result.exit_code == 2


def test_check_requires_an_action(config_file):
    result = _invoke(config_file, "check", "-s", "alice")
    assert result.exit_code == 2
    assert "--action" in result.output


def test_check_redundant_hierarchy_reported(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"roles": {"ADD": [], "RW": ["ADD"], "ADMIN": ["RW", "ADD"]}}))
    result = _invoke(path, "check", "--requires", "ADD")
    assert result.exit_code == 2
    assert "Invalid role hierarchy" in result.output


def test_invalid_config_exits_with_usage_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("roles:\n  RW: [ADD]\n")
    result = _invoke(path, "tree")
    assert result.exit_code == 2
    assert "Invalid config" in result.output


# ── rolegate tree ────────────────────────────────────────────────────


def test_tree_shows_roots_and_children(config_file):
    result = _invoke(config_file, "tree")
    assert result.exit_code == 0
    for name in ("ADMIN", "RW", "ADD", "REMOVE", "AUTHENTICATED"):
        assert name in result.output


def test_tree_table(config_file):
    result = _invoke(config_file, "tree", "--format", "table")
    assert result.exit_code == 0
    assert "Implies" in result.output
    assert "ADMIN" in result.output


def test_tree_empty(isolated):
    result = runner.invoke(app, ["tree"])
    assert result.exit_code == 0
    assert "No roles configured" in result.output


# ── rolegate config ──────────────────────────────────────────────────


def test_config_show(config_file):
    result = _invoke(config_file, "config", "show")
    assert result.exit_code == 0
    assert "alice" in result.output
    assert "log_level" in result.output


def test_config_init_creates_file(isolated):
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0
    assert "Created" in result.output
    data = yaml.safe_load((isolated / "rolegate.yaml").read_text())
    assert data["roles"]["RW"] == ["ADD", "REMOVE"]


def test_config_init_refuses_overwrite(isolated):
    (isolated / "rolegate.yaml").write_text("log_level: debug\n")
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (isolated / "rolegate.yaml").read_text() == "log_level: debug\n"


def test_config_init_force(isolated):
    (isolated / "rolegate.yaml").write_text("log_level: debug\n")
    result = runner.invoke(app, ["config", "init", "--force"])
    assert result.exit_code == 0
    assert "AUTHENTICATED" in (isolated / "rolegate.yaml").read_text()
