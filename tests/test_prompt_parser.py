"""
Unit tests for the multi-step prompt parser.

Tests header recognition, section accumulation, reserved sections,
and the bundled migration prompt.
"""

from pathlib import Path

import pytest

from rinku.core.prompt import (
    BUNDLED_PROMPT,
    NoStepsFoundError,
    PromptParseError,
    load_migration_prompt,
    parse,
    parse_file,
)


class TestParseSteps:
    """Test step header recognition and ordering."""

    def test_steps_in_document_order(self):
        """Test step ids come back in document order, not sorted."""
        prompt = parse("# Step 3\nthree\n# Step 1\none\n# Step 2\ntwo")
        assert prompt.steps() == ["3", "1", "2"]
        assert len(prompt) == 3

    def test_step_content(self):
        """Test each step holds the lines up to the next header."""
        prompt = parse("# Step 1\nfirst line\nsecond line\n# Step 2\nother")
        assert prompt.get_step("1") == "first line\nsecond line"
        assert prompt.get_step("2") == "other"

    def test_step_id_with_spaces(self):
        """Test multi-word step ids keep their case."""
        prompt = parse("# Step Find Tests\nlook around")
        assert prompt.steps() == ["Find Tests"]
        assert "Find Tests" in prompt

    def test_step_label_is_case_insensitive(self):
        """Test lowercase and uppercase step labels both match."""
        prompt = parse("# step 1\na\n# STEP 2\nb")
        assert prompt.steps() == ["1", "2"]

    def test_leading_whitespace_before_marker(self):
        """Test indentation before '#' still opens a section."""
        prompt = parse("   # Step 1\ncontent")
        assert prompt.get_step("1") == "content"

    def test_subheaders_are_content(self):
        """Test '##' headings stay inside the current step."""
        prompt = parse("# Step 1\nintro\n## Details\nmore")
        assert prompt.steps() == ["1"]
        assert prompt.get_step("1") == "intro\n## Details\nmore"

    @pytest.mark.parametrize(
        "line",
        ["##Step 1", "## Step 1", "# Steps 3", "# Step", "# Step   ", "#Step 1"],
    )
    def test_invalid_step_headers(self, line: str):
        """Test near-miss headers never produce a step."""
        prompt = parse(f"# Step real\nbody\n{line}\ntail")
        assert prompt.steps() == ["real"]
        assert prompt.get_step("real") == f"body\n{line}\ntail"

    def test_unknown_header_is_content(self):
        """Test an unrecognized '# Label' is ordinary content."""
        prompt = parse("# Step 1\nbefore\n# Notes\nafter")
        assert prompt.get_step("1") == "before\n# Notes\nafter"

    def test_content_before_first_header_is_discarded(self):
        """Test preamble text does not end up anywhere."""
        prompt = parse("preamble\n\n# Step 1\nbody")
        assert prompt.get_step("1") == "body"
        assert prompt.introduction == ""

    def test_blank_lines_are_trimmed(self):
        """Test leading and trailing blank lines are dropped, inner ones kept."""
        prompt = parse("# Step 1\n\n\nfirst\n\nsecond\n\n\n# Step 2\nx")
        assert prompt.get_step("1") == "first\n\nsecond"

    def test_duplicate_step_keeps_first_position(self):
        """Test a repeated step id keeps its first position, later content wins."""
        prompt = parse("# Step 1\nold\n# Step 2\ntwo\n# Step 1\nnew")
        assert prompt.steps() == ["1", "2"]
        assert prompt.get_step("1") == "new"

    def test_missing_step_returns_none(self):
        """Test looking up an unknown step is not an error."""
        prompt = parse("# Step 1\nbody")
        assert prompt.get_step("2") is None
        assert "2" not in prompt


class TestParseReservedSections:
    """Test introduction/before/after handling."""

    def test_reserved_sections(self, sample_prompt_text: str):
        """Test reserved sections are exposed and not listed as steps."""
        prompt = parse(sample_prompt_text)

        assert prompt.introduction == "Welcome to the migration."
        assert prompt.before == "Read the notes first."
        assert prompt.after == "Run `rinku migrate --status` when done."
        assert prompt.steps() == ["1", "Find Tests"]

    def test_reserved_names_are_case_insensitive(self):
        """Test '# INTRODUCTION' is the introduction."""
        prompt = parse("# INTRODUCTION\nhello\n# Step 1\nbody")
        assert prompt.introduction == "hello"

    def test_absent_sections_are_empty(self):
        """Test missing reserved sections read as empty strings."""
        prompt = parse("# Step 1\nbody")
        assert prompt.introduction == ""
        assert prompt.before == ""
        assert prompt.after == ""


class TestParseErrors:
    """Test documents without steps."""

    def test_empty_document(self):
        """Test an empty document has no steps."""
        with pytest.raises(NoStepsFoundError, match="no steps found"):
            parse("")

    def test_no_valid_headers(self):
        """Test text without any header fails the same way."""
        with pytest.raises(NoStepsFoundError):
            parse("just some text\n## Step 1\n# Steps")

    def test_reserved_sections_only(self):
        """Test reserved sections alone are not enough."""
        with pytest.raises(NoStepsFoundError):
            parse("# Introduction\nhello\n# After\nbye")

    def test_is_parse_error(self):
        """Test NoStepsFoundError belongs to the parse error family."""
        assert issubclass(NoStepsFoundError, PromptParseError)


class TestPromptAccessors:
    """Test the Prompt accessor API."""

    def test_steps_returns_copy(self):
        """Test mutating the returned list does not change the prompt."""
        prompt = parse("# Step 1\na\n# Step 2\nb")
        steps = prompt.steps()
        steps.append("3")
        steps.clear()
        assert prompt.steps() == ["1", "2"]

    def test_first_step(self):
        """Test first_step is the first step in document order."""
        prompt = parse("# Step b\nx\n# Step a\ny")
        assert prompt.first_step == "b"

    def test_bootstrap(self):
        """Test the bootstrap instruction points at the first step."""
        prompt = parse("# Step 1\nx")
        assert prompt.bootstrap("rinku migrate") == (
            "Execute 'rinku migrate 1'. This will return instructions. "
            "Execute those instructions."
        )


class TestParseFile:
    """Test reading prompt documents from disk."""

    def test_parse_file(self, sample_prompt_file: Path):
        """Test parse_file reads and parses the document."""
        prompt = parse_file(sample_prompt_file)
        assert prompt.steps() == ["1", "Find Tests"]

    def test_parse_missing_file(self, tmp_path: Path):
        """Test a missing file raises OSError."""
        with pytest.raises(OSError):
            parse_file(tmp_path / "missing.md")

    def test_bundled_prompt(self):
        """Test the bundled migration prompt parses with all sections."""
        assert BUNDLED_PROMPT.exists()
        prompt = load_migration_prompt()

        assert prompt.steps() == ["1", "2a", "2b", "3", "4", "5", "6"]
        assert prompt.introduction
        assert prompt.before
        assert prompt.after

    def test_custom_prompt(self, sample_prompt_file: Path):
        """Test load_migration_prompt accepts a custom document."""
        prompt = load_migration_prompt(sample_prompt_file)
        assert prompt.first_step == "1"
