"""
Requirement documents captured during a migration.

Requirements are key-addressed text documents persisted one per file under
.rinku/requirements/, with traversal-safe path handling.
"""

from .models import Requirement
from .paths import (
    SafeRequirementPath,
    UnsafePathError,
    filter_by_pattern,
    is_wildcard_pattern,
    match_pattern,
    matches_filter,
)
from .store import (
    REQUIREMENTS_DIR,
    EmptyContentError,
    RequirementNotFoundError,
    RequirementsError,
    RequirementsStore,
    RequirementsStoreError,
)

__all__ = [
    "REQUIREMENTS_DIR",
    "EmptyContentError",
    "Requirement",
    "RequirementNotFoundError",
    "RequirementsError",
    "RequirementsStore",
    "RequirementsStoreError",
    "SafeRequirementPath",
    "UnsafePathError",
    "filter_by_pattern",
    "is_wildcard_pattern",
    "match_pattern",
    "matches_filter",
]
