"""
Path handling for requirement documents.

SafeRequirementPath is the only way the store turns a user-supplied
requirement path into a file location. The check is purely lexical and runs
on the raw input every time, before anything touches the filesystem.

Pattern helpers implement segment wildcards: "*" matches exactly one path
segment, so "*/cli" matches "api/cli" and "worker/cli" but not
"api/web/routes".
"""

import os
from pathlib import Path

PATH_SEPARATOR = "/"
WILDCARD = "*"
DOCUMENT_SUFFIX = ".json"


class UnsafePathError(ValueError):
    """Raised when a requirement path would escape the requirements directory."""

    def __init__(self, req_path: str) -> None:
        self.req_path = req_path
        super().__init__(f"invalid path: {req_path}")


class SafeRequirementPath:
    """
    A requirement file location proven to lie inside the requirements directory.

    Constructing one validates the raw requirement path; there is no other
    way to obtain an instance, and nothing is cached between calls.

    Example:
        >>> safe = SafeRequirementPath(Path("/p/.rinku/requirements"), "api/cli")
        >>> safe.path
        PosixPath('/p/.rinku/requirements/api/cli.json')
        >>> SafeRequirementPath(Path("/p/.rinku/requirements"), "../../etc/passwd")
        Traceback (most recent call last):
        ...
        UnsafePathError: invalid path: ../../etc/passwd
    """

    __slots__ = ("_path", "_logical")

    def __init__(self, base_dir: Path, req_path: str) -> None:
        if not req_path or "\x00" in req_path:
            raise UnsafePathError(req_path)

        base = os.path.normpath(os.fspath(base_dir))
        # os.path.join discards base for absolute req_path; the prefix check catches it
        full = os.path.normpath(os.path.join(base, os.path.normpath(req_path))) + DOCUMENT_SUFFIX

        if not full.startswith(base + os.sep):
            raise UnsafePathError(req_path)

        self._path = Path(full)
        self._logical = Path(os.path.relpath(full, base)).as_posix()[: -len(DOCUMENT_SUFFIX)]

    @property
    def path(self) -> Path:
        """The validated file path."""
        return self._path

    @property
    def logical_path(self) -> str:
        """Normalized requirement path, as list() reports it ("api/" becomes "api")."""
        return self._logical

    def __repr__(self) -> str:
        return f"SafeRequirementPath({str(self._path)!r})"


def is_wildcard_pattern(pattern: str) -> bool:
    """Check if any segment of pattern is exactly "*"."""
    return WILDCARD in pattern.split(PATH_SEPARATOR)


def match_pattern(pattern: str, path: str) -> bool:
    """
    Check if a requirement path matches a segment pattern.

    Each pattern segment must equal the path segment at the same position,
    except "*" which matches any single segment. The pattern may be shorter
    than the path (segment-wise prefix), never longer.
    """
    pattern_parts = pattern.split(PATH_SEPARATOR)
    path_parts = path.split(PATH_SEPARATOR)

    if len(pattern_parts) > len(path_parts):
        return False

    for pattern_part, path_part in zip(pattern_parts, path_parts):
        if pattern_part != WILDCARD and pattern_part != path_part:
            return False
    return True


def matches_filter(filter_value: str, path: str) -> bool:
    """
    Apply a list filter: empty matches all, wildcard patterns match by
    segment, anything else is a literal string prefix.
    """
    if not filter_value:
        return True
    if is_wildcard_pattern(filter_value):
        return match_pattern(filter_value, path)
    return path.startswith(filter_value)


def filter_by_pattern(paths: list[str], pattern: str) -> list[str]:
    """Return the paths that match a segment pattern, preserving order."""
    return [path for path in paths if match_pattern(pattern, path)]
