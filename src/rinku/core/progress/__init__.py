"""
Migration progress tracking.

Holds the step lifecycle state machine and its durable store.
"""

from .models import (
    CURRENT_VERSION,
    MigrationProgress,
    ProgressError,
    StepNotFoundError,
    StepRecord,
    StepStatus,
)
from .store import DEFAULT_STATE_DIR, PROGRESS_FILE, ProgressStore, ProgressStoreError

__all__ = [
    "CURRENT_VERSION",
    "DEFAULT_STATE_DIR",
    "PROGRESS_FILE",
    "MigrationProgress",
    "ProgressError",
    "ProgressStore",
    "ProgressStoreError",
    "StepNotFoundError",
    "StepRecord",
    "StepStatus",
]
