"""
Project context shared by CLI commands.

Resolves the project root and its configuration once per command, turning
configuration problems into a CLI error.
"""

from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError

from rinku.cli.errors import ExitCode, print_error
from rinku.core.config import RinkuConfig, load_config
from rinku.core.progress import ProgressStore
from rinku.core.requirements import RequirementsStore
from rinku.utils.project import resolve_project_dir


@dataclass
class ProjectContext:
    """Project root plus its resolved configuration."""

    project_dir: Path
    config: RinkuConfig

    @property
    def state_dir(self) -> str:
        return self.config.state_dir

    def progress_store(self) -> ProgressStore:
        return ProgressStore(self.project_dir, self.state_dir)

    def requirements_store(self) -> RequirementsStore:
        return RequirementsStore(self.project_dir, self.state_dir, self.progress_store())


def get_context() -> ProjectContext:
    """
    Resolve the project directory and load its configuration.

    Raises:
        typer.Exit: If the configuration is invalid
    """
    project_dir = resolve_project_dir()
    try:
        config = load_config(project_dir)
    except ValidationError as e:
        print_error("Invalid rinku configuration", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    return ProjectContext(project_dir=project_dir, config=config)
