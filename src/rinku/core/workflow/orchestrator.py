"""
Migration workflow orchestration.

MigrationWorkflow ties the parsed prompt to the progress store. Every action
is a short load -> mutate -> persist cycle; nothing is kept between calls.
"""

import logging
from pathlib import Path

from rinku.core.progress import (
    DEFAULT_STATE_DIR,
    MigrationProgress,
    ProgressStore,
    StepNotFoundError,
)
from rinku.core.prompt import Prompt, PromptParseError, load_migration_prompt

logger = logging.getLogger(__name__)


class WorkflowError(Exception):
    """Raised when the workflow cannot be set up (e.g. the prompt is unusable)."""

    pass


class MigrationWorkflow:
    """
    Drives the operator through the steps of a prompt.

    Example:
        >>> workflow = MigrationWorkflow(Path.cwd(), load_migration_prompt())
        >>> print(workflow.start("1"))
        >>> workflow.finish("1", note="inventory done")
        >>> workflow.status().progress()
        (1, 7)
    """

    def __init__(
        self,
        project_dir: Path,
        prompt: Prompt,
        progress_store: ProgressStore | None = None,
    ) -> None:
        """
        Initialize the workflow.

        Args:
            project_dir: Project root the migration applies to
            prompt: Parsed step prompt
            progress_store: Store for progress (defaults to one in project_dir)
        """
        self.project_dir = Path(project_dir)
        self.prompt = prompt
        self.progress_store = progress_store or ProgressStore(self.project_dir)

    def _load_or_create(self) -> MigrationProgress:
        progress = self.progress_store.load()
        if progress is None:
            progress = MigrationProgress.initialize(str(self.project_dir), self.prompt.steps())
            self.progress_store.save(progress)
            logger.info("Started new migration with %d steps", len(progress.step_order))
        return progress

    def show(self, step_id: str | None = None) -> str:
        """
        Get the text for a step without changing progress.

        With no step id, returns the introduction, or the first step when
        the prompt has no introduction.

        Raises:
            StepNotFoundError: If the step is not in the prompt
        """
        if not step_id:
            if self.prompt.introduction:
                return self.prompt.introduction
            step_id = self.prompt.first_step

        content = self.prompt.get_step(step_id)
        if content is None:
            raise StepNotFoundError(step_id)
        return content

    def render_step(self, step_id: str) -> str:
        """Step content wrapped in the prompt's before/after sections."""
        content = self.show(step_id)
        parts = [self.prompt.before, content, self.prompt.after]
        return "\n\n".join(part for part in parts if part)

    def start(self, step_id: str) -> str:
        """
        Mark a step in progress and return its rendered instructions.

        Raises:
            StepNotFoundError: If the step is unknown
        """
        progress = self._load_or_create()
        # Render first so an id missing from the prompt leaves progress untouched
        text = self.render_step(step_id)
        progress.start(step_id)
        self.progress_store.save(progress)
        logger.info("Started step %s", step_id)
        return text

    def finish(self, step_id: str, note: str = "") -> MigrationProgress:
        """
        Mark a step completed.

        Returns:
            Updated progress

        Raises:
            StepNotFoundError: If the step is unknown
        """
        progress = self._load_or_create()
        progress.complete(step_id, note)
        self.progress_store.save(progress)
        logger.info("Completed step %s", step_id)
        return progress

    def status(self) -> MigrationProgress:
        """Current progress, creating and saving it on first use."""
        return self._load_or_create()

    def reset(self) -> bool:
        """
        Delete saved progress.

        Returns:
            True if progress existed and was removed
        """
        return self.progress_store.delete()

    def bootstrap(self, command: str = "rinku migrate") -> str:
        """One-line instruction pointing at the first step."""
        return self.prompt.bootstrap(command)


def create_workflow(
    project_dir: Path,
    prompt_path: Path | None = None,
    state_dir: str = DEFAULT_STATE_DIR,
) -> MigrationWorkflow:
    """
    Build a MigrationWorkflow for a project.

    Args:
        project_dir: Project root directory
        prompt_path: Custom prompt document (defaults to the bundled prompt)
        state_dir: Name of the state directory under project_dir

    Raises:
        WorkflowError: If the prompt cannot be read or has no steps
    """
    try:
        prompt = load_migration_prompt(prompt_path)
    except (OSError, PromptParseError) as e:
        raise WorkflowError(f"failed to load migration prompt: {e}") from e
    return MigrationWorkflow(project_dir, prompt, ProgressStore(project_dir, state_dir))
