"""
Migration progress models.

MigrationProgress is the single persisted record of one migration run:
one StepRecord per step of the prompt, the step order, and the step the
operator is currently positioned at.

Step lifecycle:
    pending -> in_progress  (start)
    any     -> completed    (complete)

SKIPPED is a terminal state kept for forward compatibility; no public
transition produces it.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, model_validator

CURRENT_VERSION = 1


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StepStatus(str, Enum):
    """Lifecycle state of a migration step."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"

    @property
    def is_done(self) -> bool:
        """Check if this status counts as done for aggregate progress."""
        return self in (StepStatus.COMPLETED, StepStatus.SKIPPED)


class ProgressError(Exception):
    """Base exception for progress errors."""

    pass


class StepNotFoundError(ProgressError, KeyError):
    """Raised when a step id is not part of the migration."""

    def __init__(self, step_id: str) -> None:
        self.step_id = step_id
        super().__init__(step_id)

    def __str__(self) -> str:
        return f"step '{self.step_id}' not found"


class StepRecord(BaseModel):
    """
    State of a single step.

    Invariants (checked on construction and load):
    - pending records carry no timestamps
    - in_progress records have started_at
    - completed records have completed_at
    """

    id: str
    status: StepStatus = StepStatus.PENDING
    started_at: datetime | None = None
    completed_at: datetime | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_timestamps(self) -> "StepRecord":
        if self.status == StepStatus.PENDING and (self.started_at or self.completed_at):
            raise ValueError(f"pending step '{self.id}' must not have timestamps")
        if self.status == StepStatus.IN_PROGRESS and self.started_at is None:
            raise ValueError(f"in_progress step '{self.id}' requires started_at")
        if self.status == StepStatus.COMPLETED and self.completed_at is None:
            raise ValueError(f"completed step '{self.id}' requires completed_at")
        return self

    def mark_started(self, at: datetime) -> None:
        """Move to in_progress, resetting the start time."""
        self.started_at = at
        self.status = StepStatus.IN_PROGRESS

    def mark_completed(self, at: datetime, notes: str = "") -> None:
        """Move to completed; a non-empty note replaces any earlier note."""
        self.completed_at = at
        self.status = StepStatus.COMPLETED
        if notes:
            self.notes = notes


class MigrationProgress(BaseModel):
    """
    Progress of one migration run.

    Example:
        >>> progress = MigrationProgress.initialize("/work/app", ["1", "2"])
        >>> progress.start("1")
        >>> progress.complete("1", "done")
        >>> progress.progress()
        (1, 2)
    """

    version: int = CURRENT_VERSION
    started_at: datetime = Field(default_factory=_now)
    project_path: str
    current_step: str = ""
    steps: dict[str, StepRecord] = Field(default_factory=dict)
    step_order: list[str] = Field(default_factory=list)

    @classmethod
    def initialize(cls, project_path: str, step_order: list[str]) -> "MigrationProgress":
        """
        Create progress with every step pending.

        Args:
            project_path: Root directory the migration applies to
            step_order: Step ids in display order

        Returns:
            New MigrationProgress positioned at the first step
        """
        order = list(step_order)
        return cls(
            version=CURRENT_VERSION,
            started_at=_now(),
            project_path=str(project_path),
            current_step=order[0] if order else "",
            steps={step_id: StepRecord(id=step_id) for step_id in order},
            step_order=order,
        )

    def _get(self, step_id: str) -> StepRecord:
        try:
            return self.steps[step_id]
        except KeyError:
            raise StepNotFoundError(step_id) from None

    def start(self, step_id: str) -> None:
        """
        Mark a step in_progress and make it the current step.

        Starting an already started or completed step is allowed; its
        started_at is reset.

        Raises:
            StepNotFoundError: If the step does not exist
        """
        step = self._get(step_id)
        step.mark_started(_now())
        self.current_step = step_id

    def complete(self, step_id: str, notes: str = "") -> None:
        """
        Mark a step completed.

        The step does not have to be the current one, and current_step is
        left where it is. An empty note keeps any earlier note.

        Raises:
            StepNotFoundError: If the step does not exist
        """
        step = self._get(step_id)
        step.mark_completed(_now(), notes)

    def progress(self) -> tuple[int, int]:
        """Return (done, total), counting completed and skipped steps as done."""
        done = sum(1 for step in self.steps.values() if step.status.is_done)
        return done, len(self.steps)

    def is_complete(self) -> bool:
        """Check if every step is completed or skipped."""
        done, total = self.progress()
        return done == total

    def ordered_steps(self) -> list[StepRecord]:
        """Step records in step_order, skipping ids without a record."""
        return [self.steps[step_id] for step_id in self.step_order if step_id in self.steps]

    def current(self) -> StepRecord | None:
        """Record of the current step, or None when there is none."""
        return self.steps.get(self.current_step)
