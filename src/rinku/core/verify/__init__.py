"""
Verification of captured requirements.

Public API:
- project_tags: tags of a project's dependencies
- check_coverage: expected categories vs captured requirements
- check_implementation: done/pending split
- requirement_status: gate on a pattern
"""

from rinku.core.verify.service import (
    TAG_TO_CATEGORY,
    CategoryStatus,
    check_coverage,
    check_implementation,
    project_tags,
    requirement_status,
)

__all__ = [
    "TAG_TO_CATEGORY",
    "CategoryStatus",
    "check_coverage",
    "check_implementation",
    "project_tags",
    "requirement_status",
]
