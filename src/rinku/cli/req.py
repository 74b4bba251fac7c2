"""
Rinku CLI - Requirement commands.

Capture the behaviors the migrated project has to reproduce and track which
of them are implemented.
"""

import sys
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from rinku.cli.context import get_context
from rinku.cli.errors import ExitCode, print_error
from rinku.core.progress import ProgressError
from rinku.core.requirements import (
    RequirementNotFoundError,
    RequirementsError,
    RequirementsStore,
    UnsafePathError,
)

app = typer.Typer(
    name="req",
    help="Manage migration requirements",
    no_args_is_help=True,
)

console = Console()

# Errors a requirement command can report without a traceback
REQ_ERRORS = (RequirementsError, UnsafePathError, ProgressError)


def _get_store() -> RequirementsStore:
    """Requirements store of the current project."""
    return get_context().requirements_store()


def _fail(error: Exception) -> NoReturn:
    if isinstance(error, RequirementNotFoundError):
        print_error(str(error), reason=error.hint, solution="rinku req list")
    else:
        print_error(str(error))
    raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.command("set")
def set_requirement(
    path: str = typer.Argument(..., help="Requirement path (e.g. api/cli)"),
    content: str | None = typer.Argument(
        None,
        help="Requirement content (read from stdin if omitted)",
    ),
) -> None:
    """
    Create or update a requirement.

    Examples:
        rinku req set api/cli "--port PORT (default: 8080)"
        rinku req set api/web/routes < routes.md
    """
    if content is None:
        content = sys.stdin.read().strip()

    if not content.strip():
        print_error(
            "content is required",
            solution="provide it as an argument or via stdin",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    store = _get_store()
    try:
        store.set(path, content)
    except REQ_ERRORS as e:
        _fail(e)

    console.print(f"[green]Set[/green] {escape(path)}")


@app.command("get")
def get_requirement(
    path: str = typer.Argument(..., help="Requirement path"),
) -> None:
    """
    Print a requirement's content.

    Examples:
        rinku req get api/cli
    """
    store = _get_store()
    try:
        requirement = store.get(path)
        if requirement is None:
            raise RequirementNotFoundError(path, store.state_dir)
    except REQ_ERRORS as e:
        _fail(e)

    sys.stdout.write(requirement.content)
    if not requirement.content.endswith("\n"):
        sys.stdout.write("\n")


@app.command("list")
def list_requirements(
    prefix: str = typer.Argument(
        "",
        help="Prefix (api/) or segment pattern (*/cli) to filter by",
    ),
) -> None:
    """
    List requirements with their done state.

    Examples:
        rinku req list
        rinku req list api/
        rinku req list "*/cli"
    """
    store = _get_store()
    try:
        paths = store.list(prefix)
        if not paths:
            console.print("No requirements found.")
            return

        for req_path in paths:
            requirement = store.get(req_path)
            marker = "[x]" if requirement is not None and requirement.done else "[ ]"
            console.print(escape(f"{marker} {req_path}"))
    except REQ_ERRORS as e:
        _fail(e)


@app.command("done")
def mark_done(
    path: str = typer.Argument(..., help="Requirement path"),
) -> None:
    """
    Mark a requirement as implemented.

    Examples:
        rinku req done api/cli
    """
    store = _get_store()
    try:
        store.done(path)
    except REQ_ERRORS as e:
        _fail(e)

    console.print(f"[green]Marked[/green] {escape(path)} as done")


@app.command("delete")
def delete_requirement(
    path: str = typer.Argument(..., help="Requirement path"),
) -> None:
    """
    Delete a requirement. Deleting a missing requirement is not an error.

    Examples:
        rinku req delete api/cli
    """
    store = _get_store()
    try:
        removed = store.delete(path)
    except REQ_ERRORS as e:
        _fail(e)

    if removed:
        console.print(f"[green]Deleted[/green] {escape(path)}")
    else:
        console.print(f"[yellow]Nothing to delete at[/yellow] {escape(path)}")
