"""
Parser for go.mod files.

Only the directives rinku needs are read: module, go, and require (both the
single-line and the block form). Everything else is ignored.

Example:
    >>> module = parse_go_mod_text("module example.com/app\\ngo 1.22\\n"
    ...                            "require github.com/spf13/cobra v1.8.0\\n")
    >>> module.module
    'example.com/app'
    >>> [d.path for d in module.direct_dependencies()]
    ['github.com/spf13/cobra']
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

MAX_DEPENDENCIES = 10000

_MODULE_RE = re.compile(r"^module\s+(\S+)")
_GO_VERSION_RE = re.compile(r"^go\s+(\S+)")
_REQUIRE_SINGLE_RE = re.compile(r"^require\s+(\S+)\s+(\S+)(.*)")
_REQUIRE_BLOCK_RE = re.compile(r"^require\s*\(")
_DEP_LINE_RE = re.compile(r"^\s*(\S+)\s+(\S+)(.*)")

_INDIRECT_MARKER = "// indirect"


class ManifestParseError(Exception):
    """Base exception for manifest parsing errors."""

    pass


class TooManyDependenciesError(ManifestParseError):
    """Raised when a manifest lists more dependencies than MAX_DEPENDENCIES."""

    def __init__(self) -> None:
        super().__init__(f"too many dependencies (limit: {MAX_DEPENDENCIES})")


class UnclosedRequireBlockError(ManifestParseError):
    """Raised when a require ( block never closes."""

    def __init__(self) -> None:
        super().__init__("unclosed require block")


@dataclass
class Dependency:
    """A required module."""

    path: str
    version: str
    indirect: bool = False


@dataclass
class GoModule:
    """Result of parsing a go.mod file."""

    module: str = ""
    go_version: str = ""
    dependencies: list[Dependency] = field(default_factory=list)

    def direct_dependencies(self) -> list[Dependency]:
        """Dependencies not marked // indirect."""
        return [dep for dep in self.dependencies if not dep.indirect]


def parse_go_mod_text(content: str) -> GoModule:
    """
    Parse go.mod content.

    Raises:
        TooManyDependenciesError: If the dependency limit is reached
        UnclosedRequireBlockError: If a require block is not closed
    """
    result = GoModule()
    in_block = False

    def add(match: re.Match[str]) -> None:
        result.dependencies.append(
            Dependency(
                path=match.group(1),
                version=match.group(2),
                indirect=_INDIRECT_MARKER in match.group(3),
            )
        )
        if len(result.dependencies) >= MAX_DEPENDENCIES:
            raise TooManyDependenciesError()

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("//"):
            continue

        if in_block and line == ")":
            in_block = False
            continue

        if match := _MODULE_RE.match(line):
            result.module = match.group(1)
            continue

        if match := _GO_VERSION_RE.match(line):
            result.go_version = match.group(1)
            continue

        if _REQUIRE_BLOCK_RE.match(line):
            in_block = True
            continue

        if match := _REQUIRE_SINGLE_RE.match(line):
            add(match)
            continue

        if in_block and (match := _DEP_LINE_RE.match(line)):
            add(match)

    if in_block:
        raise UnclosedRequireBlockError()

    return result


def parse_go_mod(path: Path) -> GoModule:
    """
    Parse a go.mod file.

    Raises:
        OSError: If the file cannot be read
        ManifestParseError: If the content is invalid
    """
    return parse_go_mod_text(Path(path).read_text(encoding="utf-8"))
