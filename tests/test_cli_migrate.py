"""Tests for the migrate CLI command."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rinku import __version__
from rinku.cli import app
from rinku.cli.errors import ExitCode
from rinku.core.progress import ProgressStore, StepStatus

runner = CliRunner()


@pytest.fixture
def prompt_project(in_project: Path, sample_prompt_text: str) -> Path:
    """Project configured to use the sample prompt."""
    (in_project / "prompt.md").write_text(sample_prompt_text)
    (in_project / ".rinku.json").write_text(json.dumps({"prompt_path": "prompt.md"}))
    return in_project


class TestMigrateShow:
    """Tests for printing steps."""

    def test_introduction(self, prompt_project: Path) -> None:
        """Test no arguments prints the introduction."""
        result = runner.invoke(app, ["migrate"])

        assert result.exit_code == 0
        assert result.output == "Welcome to the migration.\n"

    def test_named_step(self, prompt_project: Path) -> None:
        """Test a step id prints its bare content without touching progress."""
        result = runner.invoke(app, ["migrate", "Find Tests"])

        assert result.exit_code == 0
        assert result.output == "Locate the test suites.\n"
        assert not (prompt_project / ".rinku").exists()

    def test_unknown_step(self, prompt_project: Path) -> None:
        """Test an unknown step exits 1."""
        result = runner.invoke(app, ["migrate", "42"])

        assert result.exit_code == 1
        assert "step '42' not found" in result.output

    def test_bundled_prompt(self, in_project: Path) -> None:
        """Test the bundled prompt is used without configuration."""
        result = runner.invoke(app, ["migrate", "1"])

        assert result.exit_code == 0
        assert result.output.strip()

    def test_missing_prompt_file(self, in_project: Path) -> None:
        """Test a configured prompt that does not exist is an error."""
        (in_project / ".rinku.json").write_text(json.dumps({"prompt_path": "nope.md"}))

        result = runner.invoke(app, ["migrate"])

        assert result.exit_code == 1
        assert "failed to load migration prompt" in result.output


class TestMigrateProgress:
    """Tests for --start, --finish, --status and --reset."""

    def test_start(self, prompt_project: Path) -> None:
        """Test --start prints the wrapped step and records progress."""
        result = runner.invoke(app, ["migrate", "--start", "1"])

        assert result.exit_code == 0
        assert result.output.startswith("Read the notes first.\n\nInventory the project.")
        assert result.output.endswith("Run `rinku migrate --status` when done.\n")

        progress = ProgressStore(prompt_project).load()
        assert progress.steps["1"].status == StepStatus.IN_PROGRESS

    def test_finish_with_note(self, prompt_project: Path) -> None:
        """Test --finish completes the step and stores the note."""
        runner.invoke(app, ["migrate", "--start", "1"])
        result = runner.invoke(app, ["migrate", "--finish", "1", "--note", "see NOTES.md"])

        assert result.exit_code == 0
        assert "Completed step 1" in result.output

        progress = ProgressStore(prompt_project).load()
        assert progress.steps["1"].status == StepStatus.COMPLETED
        assert progress.steps["1"].notes == "see NOTES.md"

    def test_status(self, prompt_project: Path) -> None:
        """Test --status lists every step with its marker."""
        runner.invoke(app, ["migrate", "--finish", "1", "--note", "done"])
        runner.invoke(app, ["migrate", "--start", "Find Tests"])

        result = runner.invoke(app, ["migrate", "--status"])

        assert result.exit_code == 0
        assert "Migration Progress: 1/2 steps" in result.output
        assert "Current step: Find Tests" in result.output
        assert "[x] Step 1" in result.output
        assert "[>] Step Find Tests" in result.output
        assert "Note: done" in result.output

    def test_reset(self, prompt_project: Path) -> None:
        """Test --reset removes progress."""
        runner.invoke(app, ["migrate", "--start", "1"])

        result = runner.invoke(app, ["migrate", "--reset"])

        assert result.exit_code == 0
        assert "Migration progress reset." in result.output
        assert not ProgressStore(prompt_project).exists()

    def test_custom_state_dir(self, prompt_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test RINKU_STATE_DIR moves the progress file."""
        monkeypatch.setenv("RINKU_STATE_DIR", ".migration")

        result = runner.invoke(app, ["migrate", "--start", "1"])

        assert result.exit_code == 0
        assert (prompt_project / ".migration" / "progress.json").exists()


class TestAppBasics:
    """Tests for top-level app behavior."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == ExitCode.SUCCESS
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("lookup", "convert", "migrate", "req", "verify"):
            assert command in result.output
