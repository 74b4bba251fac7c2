"""
Rinku CLI - Migrate command.

Walks the operator through the steps of the migration prompt and records
progress in .rinku/progress.json.
"""

import sys

import typer
from rich.console import Console
from rich.markup import escape

from rinku.cli.context import get_context
from rinku.cli.errors import ExitCode, print_error
from rinku.core.progress import MigrationProgress, ProgressError, StepStatus
from rinku.core.workflow import MigrationWorkflow, WorkflowError, create_workflow

console = Console()

STATUS_SYMBOLS = {
    StepStatus.COMPLETED: "[x]",
    StepStatus.IN_PROGRESS: "[>]",
    StepStatus.SKIPPED: "[-]",
    StepStatus.PENDING: "[ ]",
}


def _get_workflow() -> MigrationWorkflow:
    """Build the workflow for the current project."""
    ctx = get_context()
    try:
        return create_workflow(
            ctx.project_dir,
            ctx.config.resolve_prompt_path(ctx.project_dir),
            ctx.state_dir,
        )
    except WorkflowError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _write(text: str) -> None:
    sys.stdout.write(text)
    if not text.endswith("\n"):
        sys.stdout.write("\n")


def show_status(progress: MigrationProgress) -> None:
    """Print progress with one line per step."""
    done, total = progress.progress()
    console.print(f"[bold]Migration Progress:[/bold] {done}/{total} steps")
    console.print(f"Current step: {escape(progress.current_step)}")
    console.print(f"Started: {progress.started_at.strftime('%Y-%m-%d %H:%M:%S')}")
    console.print()

    for step in progress.ordered_steps():
        line = f"  {escape(STATUS_SYMBOLS[step.status])} Step {escape(step.id)}"
        if step.status == StepStatus.COMPLETED and step.completed_at:
            line += f" [dim](completed {step.completed_at.strftime('%b %d %H:%M')})[/dim]"
        console.print(line)
        if step.notes:
            console.print(f"      Note: {escape(step.notes)}")


def migrate(
    step: str | None = typer.Argument(
        None,
        help="Step ID to show (default: the introduction)",
    ),
    start: str | None = typer.Option(
        None,
        "--start",
        help="Mark a step in progress and print its instructions",
    ),
    finish: str | None = typer.Option(
        None,
        "--finish",
        help="Mark a step completed",
    ),
    note: str = typer.Option(
        "",
        "--note",
        help="Note to record when finishing a step",
    ),
    status: bool = typer.Option(
        False,
        "--status",
        help="Show migration progress",
    ),
    reset: bool = typer.Option(
        False,
        "--reset",
        help="Delete migration progress",
    ),
) -> None:
    """
    Output migration workflow steps and track progress.

    Without options, prints the introduction (or the named step) without
    changing progress.

    Examples:
        rinku migrate                      # Introduction
        rinku migrate --start 1            # Begin step 1
        rinku migrate --finish 1 --note "inventory in NOTES.md"
        rinku migrate --status             # Progress overview
        rinku migrate --reset              # Start over
    """
    workflow = _get_workflow()

    try:
        if reset:
            workflow.reset()
            console.print("Migration progress reset.")
            return

        if status:
            show_status(workflow.status())
            return

        if start:
            _write(workflow.start(start))
            return

        if finish:
            workflow.finish(finish, note)
            console.print(f"[green]Completed[/green] step {escape(finish)}")
            return

        _write(workflow.show(step))
    except ProgressError as e:
        print_error(str(e), solution="rinku migrate --status")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
