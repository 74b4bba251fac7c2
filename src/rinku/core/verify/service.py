"""
Requirement coverage and gating checks.

Provides high-level operations for:
- Checking which expected requirement categories have been captured
- Splitting requirements into done and pending
- Gating on whether everything under a pattern is done
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from rinku.core.library import LibraryIndex
from rinku.core.manifest import Dependency, module_path_to_github_url
from rinku.core.requirements import RequirementsStore, filter_by_pattern

logger = logging.getLogger(__name__)

# Project tags (from library data) -> requirement path patterns expected for them.
# "*" stands for the binary name.
TAG_TO_CATEGORY: dict[str, list[str]] = {
    "cli": ["*/cli"],
    "web": ["*/api"],
    "templating": ["*/templates"],
    "sql": ["db"],
    "orm": ["db"],
    "codegen:protobuf": ["codegen/protobuf"],
    "codegen:ent": ["codegen/ent"],
    "codegen:templ": ["codegen/templ"],
    "codegen:wire": ["codegen/wire"],
    "codegen:sqlc": ["codegen/sqlc"],
    "codegen:gqlgen": ["codegen/gqlgen"],
}


def project_tags(deps: Iterable[Dependency], index: LibraryIndex) -> list[str]:
    """
    Tags of the libraries a project depends on.

    Args:
        deps: Go dependencies, usually GoModule.direct_dependencies()
        index: Library index holding the tags

    Returns:
        Sorted, de-duplicated tags
    """
    tags: set[str] = set()
    for dep in deps:
        tags.update(index.tags(module_path_to_github_url(dep.path)))
    return sorted(tags)


@dataclass
class CategoryStatus:
    """
    Coverage of one expected requirement category.

    Contains the tag that made the category expected, the pattern checked,
    and the requirements found under it.
    """

    category: str
    pattern: str
    paths: list[str] = field(default_factory=list)
    done_count: int = 0

    @property
    def count(self) -> int:
        """Number of requirements matching the pattern."""
        return len(self.paths)

    @property
    def has_requirements(self) -> bool:
        """Check if at least one requirement matches."""
        return bool(self.paths)

    @property
    def is_done(self) -> bool:
        """Check if requirements exist and all of them are done."""
        return self.has_requirements and self.done_count == self.count


def _is_done(store: RequirementsStore, req_path: str) -> bool:
    requirement = store.get(req_path)
    return requirement is not None and requirement.done


def check_coverage(store: RequirementsStore, tags: Iterable[str]) -> list[CategoryStatus]:
    """
    Compare expected categories for a set of project tags against captured requirements.

    Tags without a category are ignored. When two tags share a pattern
    ("sql" and "orm" both expect "db"), the last tag wins.

    Args:
        store: Requirements of the project
        tags: Project tags, usually from LibraryIndex.tags()

    Returns:
        One CategoryStatus per expected pattern, sorted by pattern

    Raises:
        RequirementsStoreError: If a requirement cannot be read
    """
    expected: dict[str, str] = {}
    for tag in tags:
        for pattern in TAG_TO_CATEGORY.get(tag, []):
            expected[pattern] = tag

    all_paths = store.list()
    results = []
    for pattern in sorted(expected):
        matching = filter_by_pattern(all_paths, pattern)
        done_count = sum(1 for path in matching if _is_done(store, path))
        results.append(
            CategoryStatus(
                category=expected[pattern],
                pattern=pattern,
                paths=matching,
                done_count=done_count,
            )
        )

    logger.debug("Checked coverage for %d categories", len(results))
    return results


def check_implementation(store: RequirementsStore) -> tuple[list[str], list[str]]:
    """
    Split all requirements into done and pending.

    Returns:
        (done paths, pending paths), each sorted

    Raises:
        RequirementsStoreError: If a requirement cannot be read
    """
    done: list[str] = []
    pending: list[str] = []
    for req_path in store.list():
        requirement = store.get(req_path)
        if requirement is None:
            continue
        if requirement.done:
            done.append(req_path)
        else:
            pending.append(req_path)
    return done, pending


def requirement_status(store: RequirementsStore, pattern: str) -> tuple[bool, list[str]]:
    """
    Check whether every requirement matching a pattern is done.

    A pattern with no matching requirements is considered satisfied.

    Args:
        store: Requirements of the project
        pattern: Segment pattern such as "*/cli" or "db"

    Returns:
        (all done, pending paths)
    """
    matching = filter_by_pattern(store.list(), pattern)
    pending = [path for path in matching if not _is_done(store, path)]
    return not pending, pending
