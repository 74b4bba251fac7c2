"""
Dependency manifests: go.mod parsing and Cargo.toml generation.
"""

from .cargo import (
    MappedDependency,
    MappingResult,
    extract_crate_name,
    generate_cargo_toml,
    map_dependencies,
    module_path_to_github_url,
)
from .gomod import (
    MAX_DEPENDENCIES,
    Dependency,
    GoModule,
    ManifestParseError,
    TooManyDependenciesError,
    UnclosedRequireBlockError,
    parse_go_mod,
    parse_go_mod_text,
)

__all__ = [
    "MAX_DEPENDENCIES",
    "Dependency",
    "GoModule",
    "ManifestParseError",
    "MappedDependency",
    "MappingResult",
    "TooManyDependenciesError",
    "UnclosedRequireBlockError",
    "extract_crate_name",
    "generate_cargo_toml",
    "map_dependencies",
    "module_path_to_github_url",
    "parse_go_mod",
    "parse_go_mod_text",
]
