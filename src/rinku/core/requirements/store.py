"""
Requirements store for reading/writing .rinku/requirements/.

One JSON document per requirement; the logical path maps onto nested
directories, so "api/web/routes" lives at
.rinku/requirements/api/web/routes.json.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from rinku.core.progress.store import DEFAULT_STATE_DIR, ProgressStore
from rinku.core.requirements.models import Requirement
from rinku.core.requirements.paths import (
    DOCUMENT_SUFFIX,
    PATH_SEPARATOR,
    WILDCARD,
    SafeRequirementPath,
    matches_filter,
)
from rinku.core.storage import atomic_write_json, read_json, remove_file

logger = logging.getLogger(__name__)

REQUIREMENTS_DIR = "requirements"


class RequirementsError(Exception):
    """Base exception for requirements errors."""

    pass


class RequirementNotFoundError(RequirementsError, KeyError):
    """Raised when an operation needs a requirement that does not exist."""

    def __init__(self, req_path: str, state_dir: str = DEFAULT_STATE_DIR) -> None:
        self.req_path = req_path
        self.state_dir = state_dir
        super().__init__(req_path)

    def __str__(self) -> str:
        return f"requirement '{self.req_path}' not found"

    @property
    def hint(self) -> str:
        return (
            f"Requirements are stored in {self.state_dir}/ - "
            "are you in the correct project directory?"
        )


class EmptyContentError(RequirementsError, ValueError):
    """Raised when a requirement is written without content."""

    pass


class RequirementsStoreError(RequirementsError):
    """Error reading or writing a requirement document."""

    pass


class RequirementsStore:
    """
    Store for requirement documents in a project directory.

    Every method that takes a requirement path validates it through
    SafeRequirementPath before any disk access.

    Example:
        >>> store = RequirementsStore(Path.cwd())
        >>> store.set("api/cli", "--port PORT (default: 8080)")
        >>> store.list("*/cli")
        ['api/cli']
        >>> store.done("api/cli")
    """

    def __init__(
        self,
        project_dir: Path,
        state_dir: str = DEFAULT_STATE_DIR,
        progress_store: ProgressStore | None = None,
    ) -> None:
        """
        Initialize RequirementsStore.

        Args:
            project_dir: Project root directory
            state_dir: Name of the state directory under project_dir
            progress_store: Source of the current step used to tag new writes
                (defaults to the progress store of the same project)
        """
        self.project_dir = Path(project_dir)
        self.state_dir = state_dir
        self.progress_store = progress_store or ProgressStore(self.project_dir, state_dir)

    @property
    def requirements_dir(self) -> Path:
        """Root directory of all requirement documents."""
        return self.project_dir / self.state_dir / REQUIREMENTS_DIR

    def _safe_path(self, req_path: str) -> Path:
        return SafeRequirementPath(self.requirements_dir, req_path).path

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def get(self, req_path: str) -> Requirement | None:
        """
        Get a requirement by path.

        Returns:
            Requirement, or None if nothing is stored at that path

        Raises:
            UnsafePathError: If the path escapes the requirements directory
            RequirementsStoreError: If the document cannot be read or is corrupt
        """
        file_path = self._safe_path(req_path)
        try:
            data = read_json(file_path)
        except (OSError, json.JSONDecodeError) as e:
            raise RequirementsStoreError(f"Failed to read requirement {file_path}: {e}") from e

        if data is None:
            return None

        try:
            return Requirement.model_validate(data)
        except ValidationError as e:
            raise RequirementsStoreError(f"Invalid requirement {file_path}: {e}") from e

    def set(self, req_path: str, content: str) -> Requirement:
        """
        Create or update a requirement.

        An update keeps the original created_at. Every write is tagged with
        the migration's current step (empty if no migration has started). The
        stored path is normalized, so "api/" and "api//cli" are kept as "api"
        and "api/cli".

        Args:
            req_path: Requirement path (e.g. "api/cli")
            content: Requirement text; must not be blank

        Returns:
            The stored Requirement

        Raises:
            EmptyContentError: If content is blank
            UnsafePathError: If the path escapes the requirements directory
            RequirementsStoreError: If the document cannot be read or written
        """
        if not content.strip():
            raise EmptyContentError("content is required")

        # Validate before consulting anything else
        logical = SafeRequirementPath(self.requirements_dir, req_path).logical_path

        existing = self.get(logical)
        now = self._now()
        requirement = Requirement(
            path=logical,
            content=content,
            step=self.progress_store.current_step(),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._save(requirement)
        logger.info("%s requirement %s", "Updated" if existing else "Created", logical)
        return requirement

    def done(self, req_path: str) -> Requirement:
        """
        Mark a requirement as done.

        Returns:
            The updated Requirement

        Raises:
            RequirementNotFoundError: If no requirement exists at req_path
            UnsafePathError: If the path escapes the requirements directory
        """
        requirement = self.get(req_path)
        if requirement is None:
            raise RequirementNotFoundError(req_path, self.state_dir)

        now = self._now()
        requirement.done = True
        requirement.done_at = now
        requirement.updated_at = now
        self._save(requirement)
        logger.info("Marked requirement %s as done", req_path)
        return requirement

    def delete(self, req_path: str) -> bool:
        """
        Delete a requirement. Deleting an absent path is not an error.

        Returns:
            True if a document was removed

        Raises:
            UnsafePathError: If the path escapes the requirements directory
            RequirementsStoreError: If the document exists but cannot be removed
        """
        file_path = self._safe_path(req_path)
        try:
            removed = remove_file(file_path)
        except OSError as e:
            raise RequirementsStoreError(f"Failed to delete requirement {file_path}: {e}") from e
        if removed:
            logger.info("Deleted requirement %s", req_path)
        return removed

    def list(self, prefix: str = "") -> list[str]:
        """
        List requirement paths, sorted.

        Args:
            prefix: Literal prefix ("api/"), segment pattern ("*/cli",
                "api/*/users"), or empty for everything

        Returns:
            Sorted list of matching requirement paths

        Raises:
            RequirementsStoreError: If the directory cannot be walked
        """
        base = self.requirements_dir
        if not base.is_dir():
            return []

        paths: list[str] = []
        try:
            for file_path in base.rglob(f"*{DOCUMENT_SUFFIX}"):
                if not file_path.is_file():
                    continue
                relative = file_path.relative_to(base).as_posix()
                req_path = relative[: -len(DOCUMENT_SUFFIX)]
                if matches_filter(prefix, req_path):
                    paths.append(req_path)
        except OSError as e:
            raise RequirementsStoreError(f"Failed to list requirements in {base}: {e}") from e

        return sorted(paths)

    def expand_wildcard_pattern(self, pattern: str) -> list[str]:
        """
        Expand a wildcard pattern into the concrete prefixes it matches.

        "*/cli" over {api/cli, worker/cli/flags} gives ["api/cli", "worker/cli"].
        A pattern without a wildcard is returned as-is.

        Returns:
            Sorted, de-duplicated concrete prefixes
        """
        if WILDCARD not in pattern:
            return [pattern]

        pattern_parts = pattern.split(PATH_SEPARATOR)
        prefixes: set[str] = set()
        for req_path in self.list():
            path_parts = req_path.split(PATH_SEPARATOR)
            if len(path_parts) < len(pattern_parts):
                continue
            expanded: list[str] = []
            for pattern_part, path_part in zip(pattern_parts, path_parts):
                if pattern_part == WILDCARD or pattern_part == path_part:
                    expanded.append(path_part)
                else:
                    break
            else:
                prefixes.add(PATH_SEPARATOR.join(expanded))

        return sorted(prefixes)

    def _save(self, requirement: Requirement) -> Path:
        file_path = self._safe_path(requirement.path)
        data = requirement.model_dump(mode="json", exclude_none=True)
        try:
            return atomic_write_json(file_path, data)
        except OSError as e:
            raise RequirementsStoreError(f"Failed to save requirement {file_path}: {e}") from e
