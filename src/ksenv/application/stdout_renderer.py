"""Render facade results to stdout using rich."""

import json
from collections.abc import Mapping

import yaml
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ksenv.domain.app_metadata import AppSpec
from ksenv.domain.manifests import ManifestObject


def _cell(value: object) -> str:
    return "" if value is None else str(value)


def _manifest_summary(objects: list[ManifestObject]) -> Table:
    table = Table(title="Manifests", box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("apiVersion", overflow="fold")
    table.add_column("kind", overflow="fold")
    table.add_column("namespace", overflow="fold")
    table.add_column("name", overflow="fold")
    for idx, obj in enumerate(objects, start=1):
        table.add_row(
            str(idx),
            _cell(obj.api_version),
            _cell(obj.kind),
            _cell(obj.namespace),
            _cell(obj.name),
        )
    return table


def render_manifests(
    console: Console, objects: list[ManifestObject], *, as_json: bool = False
) -> None:
    """Print manifests as highlighted YAML (or JSON) plus a summary table."""
    if not objects:
        console.print("[dim]No objects rendered.[/dim]")
        return
    if as_json:
        text = json.dumps([obj.to_dict() for obj in objects], indent=2, default=str)
        console.print(Syntax(text, lexer="json", word_wrap=True))
    else:
        text = yaml.safe_dump_all(
            [obj.to_dict() for obj in objects], sort_keys=False, explicit_start=True
        )
        console.print(Syntax(text, lexer="yaml", word_wrap=True))
    console.print(_manifest_summary(objects))


def render_params(
    console: Console, environment: str, params: Mapping[str, str]
) -> None:
    """Print a parameter map as a two-column table."""
    if not params:
        console.print(f"[yellow]No parameters set for {environment}.[/yellow]")
        return
    table = Table(title=f"Parameters ({environment})", box=box.SIMPLE_HEAVY)
    table.add_column("param", overflow="fold")
    table.add_column("value", overflow="fold")
    for name, value in params.items():
        table.add_row(name, value)
    console.print(table)


def render_app(console: Console, root: str, app: AppSpec) -> None:
    """Print application root, metadata and declared environments."""
    lines = [
        f"[bold]root:[/bold] {root}",
        f"[bold]name:[/bold] {_cell(app.name)}",
        f"[bold]version:[/bold] {_cell(app.version)}",
        f"[bold]apiVersion:[/bold] {_cell(app.api_version)}",
    ]
    if app.description:
        lines.append(f"[bold]description:[/bold] {app.description}")
    console.print(Panel("\n".join(lines), title="Application", border_style="blue"))

    if app.registries:
        registries = Table(title="Registries", box=box.SIMPLE_HEAVY)
        registries.add_column("name")
        registries.add_column("protocol")
        registries.add_column("uri", overflow="fold")
        for ref in app.registries.values():
            registries.add_row(ref.name, _cell(ref.protocol), _cell(ref.uri))
        console.print(registries)

    if app.environments:
        environments = Table(title="Environments", box=box.SIMPLE_HEAVY)
        environments.add_column("name")
        environments.add_column("server", overflow="fold")
        environments.add_column("namespace")
        for env in app.environments.values():
            environments.add_row(env.name, _cell(env.server), _cell(env.namespace))
        console.print(environments)
