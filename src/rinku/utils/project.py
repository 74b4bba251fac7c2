"""
Project root discovery utilities for rinku.

A project root is the nearest directory (searching upward) that holds one of
the marker files: .rinku/, .rinku.json, go.mod, or .git/.
"""

from pathlib import Path

# Markers that indicate a project root, in order of priority
PROJECT_ROOT_MARKERS = [
    ".rinku",  # Migration state directory
    ".rinku.json",  # Project configuration file
    "go.mod",  # Go module being migrated
    ".git",  # Git repository
]


def find_project_root(start: Path | None = None) -> Path | None:
    """
    Find the project root directory by searching upward for marker files.

    Args:
        start: Directory to start searching from. Defaults to current working directory.

    Returns:
        Path to the project root directory, or None if not found.

    Example:
        >>> find_project_root(Path("/project/cmd/server"))
        PosixPath('/project')
    """
    if start is None:
        start = Path.cwd()

    current = start.resolve()
    for directory in (current, *current.parents):
        for marker in PROJECT_ROOT_MARKERS:
            if (directory / marker).exists():
                return directory

    return None


def resolve_project_dir(start: Path | None = None) -> Path:
    """
    Project root if one can be found, otherwise the start directory.

    Commands that create state use this so that running outside any marked
    project still works (state lands in the working directory).
    """
    root = find_project_root(start)
    if root is not None:
        return root
    return (start or Path.cwd()).resolve()
