"""
Rinku CLI - Library lookup commands.

Find Rust equivalents for Go libraries, for a single URL or for every
dependency in a go.mod file.
"""

import os
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from rinku.cli.context import get_context
from rinku.cli.errors import ExitCode, print_error
from rinku.core.library import LibraryDataError, LibraryIndex, load_default_index
from rinku.core.manifest import (
    GoModule,
    ManifestParseError,
    extract_crate_name,
    generate_cargo_toml,
    map_dependencies,
    module_path_to_github_url,
    parse_go_mod,
)
from rinku.core.verify import project_tags

console = Console()
err_console = Console(stderr=True)

GO_MOD_ARGUMENT = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="Path to go.mod file",
)


def get_index() -> LibraryIndex:
    """Load the bundled library index, exiting on broken data."""
    try:
        return load_default_index()
    except LibraryDataError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def read_go_mod(path: Path) -> GoModule:
    """Parse a go.mod file, exiting with an error if it is unusable."""
    try:
        return parse_go_mod(path)
    except (OSError, ManifestParseError) as e:
        print_error(f"failed to parse go.mod: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def validate_output_path(path: str) -> None:
    """
    Reject output paths outside the working directory.

    Raises:
        ValueError: If the path is absolute or climbs out with ".."
    """
    if os.path.isabs(path):
        raise ValueError(f"absolute paths not allowed: {path}")
    normalized = os.path.normpath(path)
    if normalized == ".." or normalized.startswith(".." + os.sep):
        raise ValueError(f"path traversal not allowed: {path}")


def lookup(
    url: str = typer.Argument(..., help="Repository URL of the Go library"),
    language: str | None = typer.Argument(
        None,
        help="Target language (default: from config, usually rust)",
    ),
    unsafe: bool = typer.Option(
        False,
        "--unsafe",
        help="Include libraries with known vulnerabilities",
    ),
) -> None:
    """
    Look up equivalents for a single library.

    Examples:
        rinku lookup https://github.com/spf13/cobra
        rinku lookup https://github.com/sirupsen/logrus rust
    """
    if not url.startswith(("http://", "https://")):
        print_error("invalid URL: must start with http:// or https://")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    config = get_context().config
    target = language or config.target_language
    results = get_index().lookup(url, target, unsafe or config.include_unsafe)

    if not results:
        print_error(f"no {target} equivalent found for {url}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    for result in results:
        sys.stdout.write(result + "\n")


def scan(
    path: Path = GO_MOD_ARGUMENT,
    unsafe: bool = typer.Option(
        False,
        "--unsafe",
        help="Include libraries with known vulnerabilities",
    ),
) -> None:
    """
    List Rust equivalents for every direct dependency in go.mod.

    Examples:
        rinku scan go.mod
    """
    module = read_go_mod(path)
    index = get_index()
    include_unsafe = unsafe or get_context().config.include_unsafe

    deps = module.direct_dependencies()
    console.print(f"Module: {escape(module.module)}")
    console.print(f"Go version: {escape(module.go_version)}")
    console.print(f"Direct dependencies: {len(deps)}")
    console.print()

    mapped = 0
    for dep in deps:
        rust_urls = index.lookup(module_path_to_github_url(dep.path), "rust", include_unsafe)
        console.print(f"[bold]{escape(dep.path)}[/bold]")
        if not rust_urls:
            console.print("  -> [dim](no mapping found)[/dim]")
            continue
        mapped += 1
        for rust_url in rust_urls:
            crate = index.crate_name(rust_url) or extract_crate_name(rust_url)
            console.print(f"  -> {escape(crate)} ({escape(rust_url)})")

    console.print()
    console.print(f"Mapped {mapped}/{len(deps)} direct dependencies")


def convert(
    path: Path = GO_MOD_ARGUMENT,
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: stdout)",
    ),
    unsafe: bool = typer.Option(
        False,
        "--unsafe",
        help="Include libraries with known vulnerabilities",
    ),
) -> None:
    """
    Generate a Cargo.toml from go.mod.

    Examples:
        rinku convert go.mod
        rinku convert go.mod -o Cargo.toml
    """
    if output is not None and output != "-":
        try:
            validate_output_path(output)
        except ValueError as e:
            print_error(str(e))
            raise typer.Exit(ExitCode.GENERAL_ERROR)

    module = read_go_mod(path)
    include_unsafe = unsafe or get_context().config.include_unsafe
    deps = module.direct_dependencies()
    result = map_dependencies(deps, get_index(), include_unsafe)
    manifest = generate_cargo_toml(module.module, result)

    if output is None or output == "-":
        sys.stdout.write(manifest)
        return

    try:
        Path(output).write_text(manifest, encoding="utf-8")
    except OSError as e:
        print_error(f"failed to write {output}: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    err_console.print(
        f"Generated {escape(output)} with {len(deps)} dependencies "
        f"({len(result.mapped)} mapped, {len(result.unmapped)} unmapped)"
    )


def analyze(path: Path = GO_MOD_ARGUMENT) -> None:
    """
    Print the project type tags detected from go.mod, one per line.

    Examples:
        rinku analyze go.mod
    """
    module = read_go_mod(path)
    for tag in project_tags(module.direct_dependencies(), get_index()):
        sys.stdout.write(tag + "\n")
