"""Tests for requirement CLI commands."""

from pathlib import Path

from typer.testing import CliRunner

from rinku.cli import app
from rinku.core.requirements import RequirementsStore

runner = CliRunner()


class TestReqSet:
    """Tests for rinku req set."""

    def test_set_argument(self, in_project: Path) -> None:
        """Test content given as an argument is stored."""
        result = runner.invoke(app, ["req", "set", "api/cli", "PORT flag"])

        assert result.exit_code == 0
        assert "Set api/cli" in result.output
        assert RequirementsStore(in_project).get("api/cli").content == "PORT flag"

    def test_set_from_stdin(self, in_project: Path) -> None:
        """Test content is read from stdin and trimmed."""
        result = runner.invoke(app, ["req", "set", "api/web/routes"], input="GET /health\n\n")

        assert result.exit_code == 0
        assert RequirementsStore(in_project).get("api/web/routes").content == "GET /health"

    def test_set_empty(self, in_project: Path) -> None:
        """Test blank content is refused."""
        result = runner.invoke(app, ["req", "set", "api/cli"], input="   \n")

        assert result.exit_code == 1
        assert "content is required" in result.output
        assert not (in_project / ".rinku").exists()

    def test_set_traversal(self, in_project: Path) -> None:
        """Test escaping paths are rejected."""
        result = runner.invoke(app, ["req", "set", "../../etc/passwd", "x"])

        assert result.exit_code == 1
        assert "invalid path" in result.output


class TestReqReadCommands:
    """Tests for get, list, done and delete."""

    def test_get(self, in_project: Path) -> None:
        RequirementsStore(in_project).set("db", "users table")

        result = runner.invoke(app, ["req", "get", "db"])

        assert result.exit_code == 0
        assert result.output == "users table\n"

    def test_get_missing(self, in_project: Path) -> None:
        """Test a missing requirement exits 1 with a hint."""
        result = runner.invoke(app, ["req", "get", "db"])

        assert result.exit_code == 1
        assert "requirement 'db' not found" in result.output

    def test_list(self, in_project: Path) -> None:
        """Test list shows done markers in sorted order."""
        store = RequirementsStore(in_project)
        store.set("worker/cli", "flags")
        store.set("api/cli", "flags")
        store.set("db", "schema")
        store.done("api/cli")

        result = runner.invoke(app, ["req", "list"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "[x] api/cli",
            "[ ] db",
            "[ ] worker/cli",
        ]

    def test_list_wildcard(self, in_project: Path) -> None:
        store = RequirementsStore(in_project)
        store.set("worker/cli", "flags")
        store.set("db", "schema")

        result = runner.invoke(app, ["req", "list", "*/cli"])

        assert result.output.splitlines() == ["[ ] worker/cli"]

    def test_list_empty(self, in_project: Path) -> None:
        result = runner.invoke(app, ["req", "list"])

        assert result.exit_code == 0
        assert "No requirements found." in result.output

    def test_done(self, in_project: Path) -> None:
        RequirementsStore(in_project).set("db", "schema")

        result = runner.invoke(app, ["req", "done", "db"])

        assert result.exit_code == 0
        assert "Marked db as done" in result.output
        assert RequirementsStore(in_project).get("db").done is True

    def test_done_missing(self, in_project: Path) -> None:
        result = runner.invoke(app, ["req", "done", "db"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete(self, in_project: Path) -> None:
        """Test delete succeeds whether or not the requirement exists."""
        RequirementsStore(in_project).set("db", "schema")

        first = runner.invoke(app, ["req", "delete", "db"])
        second = runner.invoke(app, ["req", "delete", "db"])

        assert first.exit_code == 0
        assert "Deleted db" in first.output
        assert second.exit_code == 0
        assert "Nothing to delete at db" in second.output

    def test_step_recorded(self, in_project: Path) -> None:
        """Test requirements written during a step record that step."""
        runner.invoke(app, ["migrate", "--start", "1"])
        runner.invoke(app, ["req", "set", "api/cli", "flags"])

        assert RequirementsStore(in_project).get("api/cli").step == "1"
