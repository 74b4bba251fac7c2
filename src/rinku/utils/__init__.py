"""Utility modules for rinku."""

from .project import find_project_root, resolve_project_dir

__all__ = [
    "find_project_root",
    "resolve_project_dir",
]
