"""
Bidirectional library-equivalence index.

The index is built once from library and mapping data and then only read.
Keys combine a language with a normalized URL:

    forward:  "<target_lang>:<normalized source url>" -> target urls
    reverse:  "<source_lang>:<normalized target url>" -> source urls

Each direction has a safe variant (no unsafe library on either side) and
an "all" variant.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from rinku.core.library.models import (
    NO_TARGET,
    Library,
    LibsFile,
    Mapping,
    MappingsFile,
    RequiredDep,
)
from rinku.core.library.url import normalize_url

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent.parent / "data"
LIBS_FILE = DATA_DIR / "libs.json"
MAPPINGS_FILE = DATA_DIR / "mappings.json"


class LibraryDataError(Exception):
    """Raised when library data files cannot be loaded."""

    pass


def _key(lang: str, url: str) -> str:
    return f"{lang.lower()}:{normalize_url(url)}"


@dataclass(frozen=True)
class LibraryIndex:
    """
    Read-only lookup tables for library equivalents.

    Instances are passed to whatever needs lookups; build one with
    build_indexes() or load_default_index().
    """

    forward: dict[str, list[str]] = field(default_factory=dict)
    forward_all: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    reverse_all: dict[str, list[str]] = field(default_factory=dict)
    crate_names: dict[str, str] = field(default_factory=dict)
    tag_map: dict[str, list[str]] = field(default_factory=dict)
    required: dict[str, list[RequiredDep]] = field(default_factory=dict)
    unsafe_count: int = 0
    mappings_count: int = 0
    libraries_count: int = 0

    def lookup(self, source_url: str, target_lang: str, include_unsafe: bool = False) -> list[str]:
        """
        Find target-language equivalents of a library.

        Args:
            source_url: Repository URL of the source library
            target_lang: Language to find equivalents in (e.g. "rust")
            include_unsafe: Include libraries flagged as unsafe

        Returns:
            Target library URLs (empty if none are known)
        """
        table = self.forward_all if include_unsafe else self.forward
        return list(table.get(_key(target_lang, source_url), []))

    def reverse_lookup(
        self, target_url: str, source_lang: str, include_unsafe: bool = False
    ) -> list[str]:
        """Find source-language libraries that map to a target library."""
        table = self.reverse_all if include_unsafe else self.reverse
        return list(table.get(_key(source_lang, target_url), []))

    def crate_name(self, rust_url: str) -> str:
        """Known crate name for a Rust library URL, or empty string."""
        return self.crate_names.get(normalize_url(rust_url), "")

    def tags(self, library_url: str) -> list[str]:
        """Tags configured for a library URL."""
        return list(self.tag_map.get(normalize_url(library_url), []))

    def required_deps(self, source_url: str, target_lang: str) -> list[RequiredDep]:
        """Extra dependencies a mapping needs, keyed like lookup()."""
        return list(self.required.get(_key(target_lang, source_url), []))


def build_indexes(libs: dict[str, Library], mappings: list[Mapping]) -> LibraryIndex:
    """
    Build lookup tables from library and mapping data.

    Mappings whose source or target id is unknown are skipped, as are
    "<None>" placeholder targets.

    Args:
        libs: Library id -> Library
        mappings: Equivalence mappings referencing library ids

    Returns:
        Populated LibraryIndex
    """
    forward: dict[str, list[str]] = {}
    forward_all: dict[str, list[str]] = {}
    reverse: dict[str, list[str]] = {}
    reverse_all: dict[str, list[str]] = {}
    crate_names: dict[str, str] = {}
    tag_map: dict[str, list[str]] = {}
    required: dict[str, list[RequiredDep]] = {}
    unsafe_count = 0

    for lib in libs.values():
        if lib.is_unsafe:
            unsafe_count += 1
        normalized = normalize_url(lib.url)
        if lib.lang == "rust" and lib.crate_name:
            crate_names[normalized] = lib.crate_name
        if lib.tags:
            tag_map[normalized] = list(lib.tags)

    for mapping in mappings:
        source = libs.get(mapping.source)
        if source is None:
            logger.debug("Skipping mapping with unknown source %r", mapping.source)
            continue

        for target_id in mapping.targets:
            if target_id == NO_TARGET:
                continue
            target = libs.get(target_id)
            if target is None:
                logger.debug("Skipping unknown target %r for %r", target_id, mapping.source)
                continue

            both_safe = not source.is_unsafe and not target.is_unsafe

            forward_key = _key(target.lang, source.url)
            forward_all.setdefault(forward_key, []).append(target.url)
            if both_safe:
                forward.setdefault(forward_key, []).append(target.url)

            reverse_key = _key(source.lang, target.url)
            reverse_all.setdefault(reverse_key, []).append(source.url)
            if both_safe:
                reverse.setdefault(reverse_key, []).append(source.url)

            # Every target of a mapping shares its requires; record each crate once
            if mapping.requires:
                known = required.setdefault(forward_key, [])
                for dep in mapping.requires:
                    if all(existing.crate != dep.crate for existing in known):
                        known.append(dep)

    return LibraryIndex(
        forward=forward,
        forward_all=forward_all,
        reverse=reverse,
        reverse_all=reverse_all,
        crate_names=crate_names,
        tag_map=tag_map,
        required=required,
        unsafe_count=unsafe_count,
        mappings_count=len(mappings),
        libraries_count=len(libs),
    )


def load_library_data(
    libs_path: Path = LIBS_FILE, mappings_path: Path = MAPPINGS_FILE
) -> tuple[dict[str, Library], list[Mapping]]:
    """
    Load and validate library data files.

    Raises:
        LibraryDataError: If a file is missing, not JSON, or fails validation
    """
    try:
        with libs_path.open(encoding="utf-8") as f:
            libs_file = LibsFile.model_validate(json.load(f))
        with mappings_path.open(encoding="utf-8") as f:
            mappings_file = MappingsFile.model_validate(json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise LibraryDataError(f"Failed to load library data: {e}") from e

    return libs_file.libs, mappings_file.mappings


def load_default_index() -> LibraryIndex:
    """Build a LibraryIndex from the bundled data files."""
    libs, mappings = load_library_data()
    index = build_indexes(libs, mappings)
    logger.debug(
        "Loaded %d libraries and %d mappings (%d unsafe)",
        index.libraries_count,
        index.mappings_count,
        index.unsafe_count,
    )
    return index
