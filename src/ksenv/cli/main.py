"""CLI entrypoint for the ks environment facade."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

import typer
from rich.console import Console
from rich.markup import escape

from ksenv.application import EnvironmentAdapter
from ksenv.application.stdout_renderer import (
    render_app,
    render_manifests,
    render_params,
)
from ksenv.config import load_config
from ksenv.errors import KsenvError
from ksenv.logging_config import LOG_LEVELS, configure_logging

app = typer.Typer(
    name="ksenv",
    help="Inspect and update ksonnet application environments",
    no_args_is_help=True,
    add_completion=False,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()

_APP_DIR_HELP = (
    "Directory inside the ksonnet application (defaults to KSENV_APP_DIR or cwd)."
)


def _resolve_version() -> str:
    """Return installed package version or local fallback."""
    try:
        return package_version("ksenv")
    except PackageNotFoundError:
        return "0.1.0"


@app.callback()
def callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level for ksenv records (overrides KSENV_LOG_LEVEL).",
    ),
) -> None:
    """Handle global CLI options."""
    if version:
        console.print(f"ksenv {_resolve_version()}")
        raise typer.Exit(code=0)
    config = load_config()
    level = (log_level or config.log_level).upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"unknown log level {level!r}, use one of {', '.join(LOG_LEVELS)}",
            param_hint="--log-level",
        )
    configure_logging(level)
    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=0)


def _adapter(app_dir: str | None) -> EnvironmentAdapter:
    return EnvironmentAdapter.from_config(load_config(), app_dir)


def _handle_error(exc: KsenvError) -> None:
    """Convert facade exceptions to CLI exit codes."""
    console.print(f"[red]ERROR:[/red] {escape(str(exc))}")
    raise typer.Exit(code=2) from exc


@app.command("show")
def show_command(
    environment: str = typer.Argument(..., help="Environment to render."),
    app_dir: str | None = typer.Option(None, "--app-dir", "-d", help=_APP_DIR_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print objects as JSON."),
) -> None:
    """Render the manifests ks would apply to an environment."""
    try:
        objects = _adapter(app_dir).show(environment)
    except KsenvError as exc:
        _handle_error(exc)
    else:
        render_manifests(console, objects, as_json=as_json)


@app.command("params")
def params_command(
    environment: str = typer.Argument(..., help="Environment to inspect."),
    app_dir: str | None = typer.Option(None, "--app-dir", "-d", help=_APP_DIR_HELP),
) -> None:
    """List component parameters for an environment."""
    try:
        params = _adapter(app_dir).list_env_params(environment)
    except KsenvError as exc:
        _handle_error(exc)
    else:
        render_params(console, environment, params)


@app.command("set-param")
def set_param_command(
    environment: str = typer.Argument(..., help="Environment to modify."),
    component: str = typer.Argument(..., help="Component name."),
    param: str = typer.Argument(..., help="Parameter name."),
    value: str = typer.Argument(..., help="New parameter value."),
    app_dir: str | None = typer.Option(None, "--app-dir", "-d", help=_APP_DIR_HELP),
) -> None:
    """Set a component parameter in an environment."""
    try:
        _adapter(app_dir).set_component_params(environment, component, param, value)
    except KsenvError as exc:
        _handle_error(exc)
    else:
        console.print(f"[green]Set[/green] {component}.{param} in {environment}")


@app.command("info")
def info_command(
    app_dir: str | None = typer.Option(None, "--app-dir", "-d", help=_APP_DIR_HELP),
) -> None:
    """Print the application root and app.yaml metadata."""
    try:
        adapter = _adapter(app_dir)
    except KsenvError as exc:
        _handle_error(exc)
    else:
        render_app(console, str(adapter.root), adapter.application)


def main() -> None:
    """Project entrypoint for `ksenv` script."""
    app()


if __name__ == "__main__":
    main()
