"""
Rinku CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from rinku import __version__
from rinku.cli import lookup, migrate, req, verify
from rinku.cli.errors import ExitCode
from rinku.core.config import load_env_files
from rinku.utils.project import resolve_project_dir

# Help panel names for command grouping
PANEL_LIBRARIES = "Find Library Equivalents"
PANEL_MIGRATION = "Run a Migration"

app = typer.Typer(
    name="rinku",
    help="Go to Rust library mapper and migration guide",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Rinku - find Rust equivalents for Go libraries and guide a migration.

    Quick Start:
        rinku lookup https://github.com/spf13/cobra
        rinku scan go.mod
        rinku convert go.mod -o Cargo.toml

    Migration Workflow:
        rinku migrate                 # Read the introduction
        rinku migrate --start 1       # Begin a step
        rinku req set api/cli "..."   # Capture a requirement
        rinku migrate --finish 1      # Complete the step
        rinku verify gate "*/cli"     # Check requirements are done
    """
    setup_logging(debug)

    # Precedence: OS env > project .env.local > project .env > user .env
    load_env_files(resolve_project_dir())

    ctx.obj = {"debug": debug}


# =============================================================================
# Find Library Equivalents
# =============================================================================

app.command(name="lookup", rich_help_panel=PANEL_LIBRARIES)(lookup.lookup)
app.command(name="scan", rich_help_panel=PANEL_LIBRARIES)(lookup.scan)
app.command(name="convert", rich_help_panel=PANEL_LIBRARIES)(lookup.convert)
app.command(name="analyze", rich_help_panel=PANEL_LIBRARIES)(lookup.analyze)


# =============================================================================
# Run a Migration
# =============================================================================

app.command(name="migrate", rich_help_panel=PANEL_MIGRATION)(migrate.migrate)
app.add_typer(req.app, name="req", rich_help_panel=PANEL_MIGRATION)
app.add_typer(verify.app, name="verify", rich_help_panel=PANEL_MIGRATION)


@app.command()
def version() -> None:
    """Show rinku version and exit."""
    console.print(f"rinku version {__version__}")
    raise typer.Exit(ExitCode.SUCCESS)


__all__ = ["app"]
