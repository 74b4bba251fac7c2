"""
Progress store for reading/writing .rinku/progress.json.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from rinku.core.progress.models import MigrationProgress, ProgressError
from rinku.core.storage import atomic_write_json, read_json, remove_file

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = ".rinku"
PROGRESS_FILE = "progress.json"


class ProgressStoreError(ProgressError):
    """Error reading or writing the progress file."""

    pass


class ProgressStore:
    """
    Store for migration progress in a project directory.

    Example:
        >>> store = ProgressStore(Path.cwd())
        >>> progress = store.load()  # None if the migration never started
        >>> store.save(progress)
    """

    def __init__(self, project_dir: Path, state_dir: str = DEFAULT_STATE_DIR) -> None:
        """
        Initialize ProgressStore.

        Args:
            project_dir: Project root the migration applies to
            state_dir: Name of the state directory under project_dir
        """
        self.project_dir = Path(project_dir)
        self.state_dir = state_dir

    @property
    def path(self) -> Path:
        """Path to progress.json."""
        return self.project_dir / self.state_dir / PROGRESS_FILE

    def exists(self) -> bool:
        """Check if a progress file exists."""
        return self.path.exists()

    def load(self) -> MigrationProgress | None:
        """
        Load progress from disk.

        Returns:
            MigrationProgress, or None if no progress has been saved yet

        Raises:
            ProgressStoreError: If the file cannot be read or is corrupt
        """
        try:
            data = read_json(self.path)
        except (OSError, json.JSONDecodeError) as e:
            raise ProgressStoreError(f"Failed to read progress {self.path}: {e}") from e

        if data is None:
            return None

        try:
            return MigrationProgress.model_validate(data)
        except ValidationError as e:
            raise ProgressStoreError(f"Invalid progress file {self.path}: {e}") from e

    def save(self, progress: MigrationProgress) -> Path:
        """
        Atomically write progress to disk.

        Returns:
            Path to progress.json

        Raises:
            ProgressStoreError: If the file cannot be written
        """
        data = progress.model_dump(mode="json", exclude_none=True)
        try:
            atomic_write_json(self.path, data)
        except OSError as e:
            raise ProgressStoreError(f"Failed to save progress {self.path}: {e}") from e
        logger.debug("Saved progress (current step %r)", progress.current_step)
        return self.path

    def delete(self) -> bool:
        """
        Remove the progress file. Removing absent progress is not an error.

        Returns:
            True if a file was removed

        Raises:
            ProgressStoreError: If the file exists but cannot be removed
        """
        try:
            removed = remove_file(self.path)
        except OSError as e:
            raise ProgressStoreError(f"Failed to delete progress {self.path}: {e}") from e
        if removed:
            logger.info("Reset migration progress in %s", self.project_dir)
        return removed

    def current_step(self) -> str:
        """Current step of saved progress, or empty string if none is saved."""
        progress = self.load()
        return progress.current_step if progress else ""
