"""
Pytest configuration and shared fixtures.

Provides fixtures for isolated project directories, sample prompt documents,
and store instances used across the test suite.
"""

from pathlib import Path

import pytest

from rinku.core.config import clear_cache
from rinku.core.progress import ProgressStore
from rinku.core.requirements import RequirementsStore

SAMPLE_PROMPT = """\
Preamble that is not part of any section.

# Introduction

Welcome to the migration.

# Before

Read the notes first.

# Step 1

Inventory the project.

## Details

List every binary.

# Step Find Tests

Locate the test suites.

# After

Run `rinku migrate --status` when done.
"""


# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """
    Isolate configuration for every test.

    Points XDG_CONFIG_HOME at an empty temporary directory, removes RINKU_*
    overrides from the environment, and clears the config cache.
    """
    config_home = tmp_path / "xdg-config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in ("RINKU_STATE_DIR", "RINKU_PROMPT", "RINKU_TARGET_LANG", "RINKU_UNSAFE"):
        monkeypatch.delenv(name, raising=False)

    clear_cache()
    yield config_home
    clear_cache()


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary project directory.

    Creates:
    - .git/ directory (project root marker)
    """
    project = tmp_path / "project"
    project.mkdir()
    (project / ".git").mkdir()
    return project


@pytest.fixture
def in_project(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change into the temporary project directory."""
    monkeypatch.chdir(project_dir)
    return project_dir


# ==============================================================================
# Store Fixtures
# ==============================================================================


@pytest.fixture
def progress_store(project_dir: Path) -> ProgressStore:
    """ProgressStore rooted at the temporary project."""
    return ProgressStore(project_dir)


@pytest.fixture
def requirements_store(project_dir: Path, progress_store: ProgressStore) -> RequirementsStore:
    """RequirementsStore rooted at the temporary project."""
    return RequirementsStore(project_dir, progress_store=progress_store)


# ==============================================================================
# Sample Data Fixtures
# ==============================================================================


@pytest.fixture
def sample_prompt_text() -> str:
    """Prompt document with every section type."""
    return SAMPLE_PROMPT


@pytest.fixture
def sample_prompt_file(tmp_path: Path) -> Path:
    """Prompt document written to disk."""
    path = tmp_path / "prompt.md"
    path.write_text(SAMPLE_PROMPT, encoding="utf-8")
    return path


@pytest.fixture
def go_mod(project_dir: Path) -> Path:
    """go.mod mixing mapped and unmapped dependencies."""
    path = project_dir / "go.mod"
    path.write_text(
        """\
module example.com/shop

go 1.22

require (
\tgithub.com/spf13/cobra v1.8.0
\tgithub.com/gin-gonic/gin v1.9.1
\tgorm.io/gorm v1.25.5
\tgithub.com/inconshreveable/mousetrap v1.1.0 // indirect
)
""",
        encoding="utf-8",
    )
    return path
