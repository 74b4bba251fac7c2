"""
Library-equivalence lookup.

Maps libraries between languages (e.g. Go -> Rust) using bundled data.
"""

from .index import (
    LibraryDataError,
    LibraryIndex,
    build_indexes,
    load_default_index,
    load_library_data,
)
from .models import Library, LibsFile, Mapping, MappingsFile, RequiredDep
from .url import normalize_url

__all__ = [
    "Library",
    "LibraryDataError",
    "LibraryIndex",
    "LibsFile",
    "Mapping",
    "MappingsFile",
    "RequiredDep",
    "build_indexes",
    "load_default_index",
    "load_library_data",
    "normalize_url",
]
