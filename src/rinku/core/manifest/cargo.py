"""
Cargo.toml generation from Go dependencies.

Maps each Go module to Rust crates through a LibraryIndex and renders a
Cargo manifest; modules without an equivalent become TODO comments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol

from rinku.core.library.models import RequiredDep
from rinku.core.library.url import normalize_url
from rinku.core.manifest.gomod import Dependency

_VERSION_SUFFIX_RE = re.compile(r"/v\d+$")

# Crates whose name differs from what the repository name suggests
KNOWN_CRATE_NAMES = {
    "github.com/serde-rs/json": "serde_json",
    "github.com/serde-rs/serde": "serde",
    "github.com/dtolnay/anyhow": "anyhow",
    "github.com/rust-lang/regex": "regex",
    "github.com/chronotope/chrono": "chrono",
    "github.com/rayon-rs/rayon": "rayon",
    "github.com/rustls/rustls": "rustls",
    "github.com/hyperium/hyper": "hyper",
    "github.com/hyperium/tonic": "tonic",
    "github.com/redis-rs/redis-rs": "redis",
    "github.com/rust-random/rand": "rand",
    "github.com/mongodb/mongo-rust-driver": "mongodb",
}


class Lookup(Protocol):
    """What map_dependencies needs from a library index."""

    def lookup(self, source_url: str, target_lang: str, include_unsafe: bool = False) -> list[str]:
        ...

    def crate_name(self, rust_url: str) -> str:
        ...

    def required_deps(self, source_url: str, target_lang: str) -> list[RequiredDep]:
        ...


@dataclass
class MappedDependency:
    """A Go dependency with one or more Rust equivalents."""

    go_dep: Dependency
    rust_targets: list[str] = field(default_factory=list)
    crate_names: list[str] = field(default_factory=list)
    required: list[RequiredDep] = field(default_factory=list)


@dataclass
class MappingResult:
    """Go dependencies split into mapped and unmapped."""

    mapped: list[MappedDependency] = field(default_factory=list)
    unmapped: list[Dependency] = field(default_factory=list)


def module_path_to_github_url(path: str) -> str:
    """
    Convert a Go module path to the repository URL used for lookups.

    golang.org/x/<pkg> maps to github.com/golang/<pkg>; a trailing /vN
    major-version suffix is dropped from github.com paths.
    """
    if path.startswith("golang.org/x/"):
        pkg = path[len("golang.org/x/"):].split("/", 1)[0]
        return f"https://github.com/golang/{pkg}"

    if path.startswith("github.com/"):
        return "https://" + _VERSION_SUFFIX_RE.sub("", path)

    return "https://" + path


def extract_crate_name(github_url: str) -> str:
    """
    Guess a crate name from a Rust repository URL.

    Known repositories use KNOWN_CRATE_NAMES; otherwise the repository name
    (or the last component of a /tree/ subpath) is used with a trailing
    "-rs" removed and hyphens turned into underscores.

    Returns:
        Crate name, or empty string for non-GitHub URLs
    """
    normalized = normalize_url(github_url)
    if normalized in KNOWN_CRATE_NAMES:
        return KNOWN_CRATE_NAMES[normalized]

    parts = normalized.split("/")
    if len(parts) < 3 or parts[0] != "github.com":
        return ""

    repo_name = parts[2]
    if len(parts) >= 5 and parts[3] == "tree":
        repo_name = parts[-1]

    if repo_name.endswith("-rs"):
        repo_name = repo_name[: -len("-rs")]
    return repo_name.replace("-", "_")


def map_dependencies(
    deps: list[Dependency],
    index: Lookup,
    include_unsafe: bool = False,
    target_lang: str = "rust",
) -> MappingResult:
    """
    Look up Rust equivalents for Go dependencies.

    Args:
        deps: Go dependencies (usually the direct ones)
        index: Library lookup
        include_unsafe: Include libraries flagged as unsafe
        target_lang: Language to map to

    Returns:
        MappingResult with mapped and unmapped dependencies
    """
    result = MappingResult()
    for dep in deps:
        source_url = module_path_to_github_url(dep.path)
        targets = index.lookup(source_url, target_lang, include_unsafe)
        if not targets:
            result.unmapped.append(dep)
            continue

        result.mapped.append(
            MappedDependency(
                go_dep=dep,
                rust_targets=targets,
                crate_names=[index.crate_name(t) or extract_crate_name(t) for t in targets],
                required=index.required_deps(source_url, target_lang),
            )
        )
    return result


def _format_required(dep: RequiredDep) -> str:
    if dep.features:
        features = ", ".join(f'"{f}"' for f in dep.features)
        return f'{dep.crate} = {{ version = "*", features = [{features}] }}'
    return f'{dep.crate} = "*"'


def generate_cargo_toml(module_name: str, result: MappingResult) -> str:
    """
    Render a Cargo.toml for the mapped dependencies.

    Mapped crates are sorted by name; crates required by a mapping are added
    once each; unmapped Go modules are listed as TODO comments.

    Args:
        module_name: Original Go module path (recorded in the header)
        result: Output of map_dependencies

    Returns:
        Manifest text
    """
    lines = [
        "# Generated by rinku",
        f"# Original Go module: {module_name}",
        "",
        "[package]",
        'name = "converted_project"',
        'version = "0.1.0"',
        'edition = "2021"',
        "",
        "[dependencies]",
    ]

    seen: set[str] = set()
    mapped = sorted(result.mapped, key=lambda m: m.crate_names[0] if m.crate_names else "")
    for entry in mapped:
        for crate, target in zip(entry.crate_names, entry.rust_targets):
            if crate in seen:
                continue
            seen.add(crate)
            lines.append(f'{crate} = "*"  # from {entry.go_dep.path} -> {target}')

    for entry in mapped:
        for dep in entry.required:
            if dep.crate in seen:
                continue
            seen.add(dep.crate)
            comment = f"  # {dep.reason}" if dep.reason else ""
            lines.append(_format_required(dep) + comment)

    if result.unmapped:
        lines.append("")
        lines.append("# TODO: Find equivalents for these Go dependencies:")
        for dep in result.unmapped:
            lines.append(f"# TODO: find equivalent for {dep.path}")

    return "\n".join(lines) + "\n"
