"""Command-line interface for apple-mail-mcp."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from apple_mail_mcp.config import Settings
from apple_mail_mcp.jxa.errors import StartupCheckError
from apple_mail_mcp.jxa.executor import JXAExecutor
from apple_mail_mcp.jxa.startup import startup_check, troubleshooting_hint
from apple_mail_mcp.logging import get_logger, setup_logging

app = typer.Typer(
    name="apple-mail-mcp",
    help="MCP server for Apple Mail on macOS",
    no_args_is_help=True,
)
# stdout carries the MCP protocol in stdio mode
console = Console(stderr=True)


def get_settings(**overrides: Any) -> Settings:
    """Load application settings, applying CLI overrides that were given."""
    try:
        return Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(1)


def build_executor(settings: Settings) -> JXAExecutor:
    """Create the executor shared by the startup check and all tools."""
    setup_logging(
        log_level=settings.log_level,
        debug=settings.debug,
        log_dir=settings.log_dir,
        max_bytes=settings.log_rotation_bytes,
        backup_count=settings.log_backup_count,
    )
    return JXAExecutor(
        osascript=settings.osascript_path,
        timeout=settings.script_timeout,
        logger=get_logger(settings.debug),
    )


def run_startup_check(settings: Settings, executor: JXAExecutor) -> dict[str, Any]:
    """Run the connectivity check, exiting with status 1 on failure."""
    console.print("Running Mail.app connectivity check...")
    try:
        data = asyncio.run(startup_check(executor, timeout=settings.startup_timeout))
    except StartupCheckError as e:
        console.print(str(e), style="red", markup=False)
        console.print()
        console.print(troubleshooting_hint(e), style="yellow", markup=False)
        raise typer.Exit(1)

    console.print("[green]Mail.app is accessible and ready[/green]")
    return data


@app.command()
def version() -> None:
    """Show version information."""
    from apple_mail_mcp import __version__

    console.print(f"apple-mail-mcp v{__version__}")


@app.command()
def serve(
    transport: Annotated[
        str | None,
        typer.Option("--transport", "-t", help="Transport type: stdio or http"),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("--host", help="HTTP host (only used with --transport=http)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="HTTP port (only used with --transport=http)"),
    ] = None,
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Log tool calls, results and script logs to stderr"),
    ] = None,
    log_dir: Annotated[
        Path | None,
        typer.Option("--log-dir", help="Also write a rotating log file to this directory"),
    ] = None,
) -> None:
    """Check Mail.app connectivity, then run the MCP server."""
    from apple_mail_mcp import __version__
    from apple_mail_mcp.server import create_server, run_server

    settings = get_settings(
        transport=transport, host=host, port=port, debug=debug, log_dir=log_dir
    )
    executor = build_executor(settings)

    data = run_startup_check(settings, executor)
    if settings.debug and isinstance(data.get("properties"), dict):
        console.print("[dim]Mail.app properties:[/dim]")
        console.print_json(json.dumps(data["properties"]))

    console.print(f"Apple Mail MCP Server v{__version__} initialized")
    server = create_server(settings, executor)

    if settings.transport == "http":
        console.print(f"Starting HTTP server on http://{settings.host}:{settings.port}")
    else:
        console.print("Using STDIO transport")

    run_server(server, settings)


@app.command()
def check(
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Show script logs"),
    ] = None,
) -> None:
    """Verify that Mail.app is running and scriptable."""
    settings = get_settings(debug=debug)
    executor = build_executor(settings)
    data = run_startup_check(settings, executor)

    table = Table(title="Mail.app")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("running", "✓" if data.get("running") else "✗")
    table.add_row("version", escape(str(data.get("version", ""))))
    table.add_row("accounts", str(data.get("accountCount", "")))

    properties = data.get("properties")
    if isinstance(properties, dict):
        for name, value in sorted(properties.items()):
            table.add_row(name, "[dim]n/a[/dim]" if value is None else escape(str(value)))

    console.print(table)


if __name__ == "__main__":
    app()
