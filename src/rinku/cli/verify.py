"""
Rinku CLI - Verify commands.

Check captured requirements against what a project needs, and gate on
whether they are implemented. Each command exits 1 when its check fails.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rinku.cli.context import get_context
from rinku.cli.errors import ExitCode, print_error
from rinku.cli.lookup import GO_MOD_ARGUMENT, get_index, read_go_mod
from rinku.core.requirements import RequirementsError, RequirementsStore
from rinku.core.verify import (
    check_coverage,
    check_implementation,
    project_tags,
    requirement_status,
)

app = typer.Typer(
    name="verify",
    help="Check requirement coverage and implementation",
    no_args_is_help=True,
)

console = Console()


def _get_store() -> RequirementsStore:
    return get_context().requirements_store()


@app.command("coverage")
def coverage(path: Path = GO_MOD_ARGUMENT) -> None:
    """
    Check that requirements were captured for every category go.mod implies.

    A project using cobra is expected to have "*/cli" requirements, one
    using gorm "db" requirements, and so on.

    Examples:
        rinku verify coverage go.mod
    """
    module = read_go_mod(path)
    tags = project_tags(module.direct_dependencies(), get_index())
    store = _get_store()

    try:
        results = check_coverage(store, tags)
    except RequirementsError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not results:
        console.print("No requirement categories expected for this project.")
        return

    table = Table(title="Requirement Coverage")
    table.add_column("Category", style="cyan")
    table.add_column("Pattern")
    table.add_column("Captured", justify="right")
    table.add_column("Done", justify="right")

    for status in results:
        captured = str(status.count) if status.has_requirements else "[red]missing[/red]"
        table.add_row(
            escape(status.category),
            escape(status.pattern),
            captured,
            f"{status.done_count}/{status.count}",
        )
    console.print(table)

    missing = [status for status in results if not status.has_requirements]
    if missing:
        console.print(f"[yellow]{len(missing)} categories have no requirements[/yellow]")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print("[green]All expected categories have requirements[/green]")


@app.command("impl")
def implementation() -> None:
    """
    Report which requirements are implemented.

    Examples:
        rinku verify impl
    """
    store = _get_store()
    try:
        done, pending = check_implementation(store)
    except RequirementsError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    total = len(done) + len(pending)
    console.print(f"Implemented: {len(done)}/{total} requirements")

    if pending:
        console.print()
        console.print("[bold]Pending:[/bold]")
        for req_path in pending:
            console.print(f"  {escape(req_path)}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.command("gate")
def gate(
    pattern: str = typer.Argument(..., help="Requirement pattern (e.g. '*/cli' or db)"),
) -> None:
    """
    Pass only if every requirement matching a pattern is done.

    A pattern without any matching requirement passes.

    Examples:
        rinku verify gate "*/cli"
        rinku verify gate db
    """
    store = _get_store()
    try:
        all_done, pending = requirement_status(store, pattern)
    except RequirementsError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if all_done:
        console.print(f"[green]✓[/green] All requirements under {escape(pattern)} are done")
        return

    console.print(f"[red]✗[/red] {len(pending)} pending under {escape(pattern)}:")
    for req_path in pending:
        console.print(f"  {escape(req_path)}")
    raise typer.Exit(ExitCode.GENERAL_ERROR)
