"""CLI entry point for Rolegate."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from rolegate_core.actions import Action, CallableAction
from rolegate_core.config import RoleGateConfig, build_actions, build_registry, build_subjects, load_config
from rolegate_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from rolegate_core.entities import Subject
from rolegate_core.errors import AuthorizationError, RoleGateError
from rolegate_core.registry import RoleRegistry
from rolegate_core.roles import Role

app = typer.Typer(
    name="rolegate",
    help="Hierarchical role-based access control: inspect and check role policies.",
)

config_app = typer.Typer(help="Manage Rolegate configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: RoleGateConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _configure_logging(cfg: RoleGateConfig) -> None:
    handler = logging.StreamHandler()
    if cfg.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_LOG_LEVELS[cfg.log_level])


def _get_config() -> RoleGateConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to rolegate.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2) from e
    _configure_logging(_config)


def _build_registry(cfg: RoleGateConfig) -> RoleRegistry:
    try:
        return build_registry(cfg)
    except RoleGateError as e:
        rprint(f"[red]Invalid role hierarchy:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e


def _split_names(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _noop(subject: Any, *params: Any) -> None:
    return None


def _resolve_subject(
    cfg: RoleGateConfig, registry: RoleRegistry, subject: str | None, roles: str | None
) -> Subject | None:
    if roles is not None:
        return Subject(*_split_names(roles), name="<cli>", registry=registry)
    if subject is None:
        return None
    subjects = build_subjects(cfg, registry)
    if subject not in subjects:
        rprint(f"[red]Unknown subject:[/red] {escape(subject)}")
        raise typer.Exit(2)
    return subjects[subject]


def _resolve_action(
    cfg: RoleGateConfig, registry: RoleRegistry, action: str | None, requires: str | None
) -> Action:
    if requires is not None:
        return CallableAction(_noop, *_split_names(requires), name="<cli>", registry=registry)
    if action is None:
        rprint("[red]Specify --action or --requires.[/red]")
        raise typer.Exit(2)
    actions = build_actions(cfg, registry)
    if action not in actions:
        rprint(f"[red]Unknown action:[/red] {escape(action)}")
        raise typer.Exit(2)
    return actions[action]


@app.command()
def check(
    subject: Annotated[str | None, typer.Option("--subject", "-s", help="Configured subject name")] = None,
    action: Annotated[str | None, typer.Option("--action", "-a", help="Configured action name")] = None,
    roles: Annotated[str | None, typer.Option("--roles", help="Comma-separated roles held (instead of --subject)")] = None,
    requires: Annotated[str | None, typer.Option("--requires", help="Comma-separated roles required (instead of --action)")] = None,
    ci: Annotated[bool, typer.Option("--ci", help="Machine-readable output")] = False,
) -> None:
    """Check whether a subject may execute an action."""
    cfg = _get_config()
    registry = _build_registry(cfg)
    try:
        who = _resolve_subject(cfg, registry, subject, roles)
        what = _resolve_action(cfg, registry, action, requires)
    except RoleGateError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2) from e

    try:
        what.execute(who)
    except AuthorizationError as e:
        if ci:
            typer.echo(f"DENIED {what} {who if who is not None else '-'}: {e}")
        else:
            rprint(f"[red]DENIED[/red] {escape(str(what))} for {escape(str(who)) if who is not None else 'anonymous'}: {escape(str(e))}")
        raise typer.Exit(1) from e

    if ci:
        typer.echo(f"ALLOWED {what} {who if who is not None else '-'}")
    else:
        rprint(f"[green]ALLOWED[/green] {escape(str(what))} for {escape(str(who)) if who is not None else 'anonymous'}")


def _add_branch(branch: Tree, role: Role) -> None:
    for child in role.children:
        _add_branch(branch.add(f"[cyan]{child}[/cyan]"), child)


@app.command()
def tree(
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: tree or table")
    ] = "tree",
) -> None:
    """Show the configured role hierarchy."""
    cfg = _get_config()
    registry = _build_registry(cfg)
    all_roles = list(registry)

    if not all_roles:
        rprint("[yellow]No roles configured.[/yellow]")
        raise typer.Exit(0)

    if format == "table":
        table = Table(title=f"Roles ({len(all_roles)})")
        table.add_column("Role", style="cyan")
        table.add_column("Implies", style="green")
        table.add_column("Implied by", style="yellow")
        for role in all_roles:
            parents = [str(p) for p in all_roles if p.has_child(role)]
            table.add_row(
                str(role),
                ", ".join(str(c) for c in role.children) or "-",
                ", ".join(parents) or "-",
            )
        rprint(table)
        return

    roots = [r for r in all_roles if not any(p.has_child(r) for p in all_roles)]
    view = Tree(f"[bold]Roles[/bold] ({len(all_roles)})")
    for role in roots:
        _add_branch(view.add(f"[bold cyan]{role}[/bold cyan]"), role)
    rprint(view)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default rolegate.yaml in current directory."""
    target = Path("rolegate.yaml")
    if target.exists() and not force:
        rprint("[yellow]rolegate.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
