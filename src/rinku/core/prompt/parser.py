"""
Parser for multi-step migration prompt documents.

A prompt document is markdown split into sections by level-one headings:

    # Introduction
    Entry point shown when no step is requested.

    # Before
    Shown before every step when it is started.

    # Step 1
    Instructions for step 1.

    # Step Find Tests
    Instructions for the step with id "Find Tests".

    # After
    Shown after every step when it is started.

Only headings with exactly one '#' followed by whitespace open a section.
Deeper headings ("## Details") and unrecognized labels ("# Notes") are kept
as ordinary content of the section that is currently open. Content before the
first section heading is discarded.

Example:
    >>> prompt = parse("# Step 1\\nDo the thing\\n# Step 2\\nDo the next thing")
    >>> prompt.steps()
    ['1', '2']
    >>> prompt.get_step("2")
    'Do the next thing'
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

# One '#' then at least one whitespace char; a second '#' fails the \s match
_HEADER_RE = re.compile(r"^#\s+(\S.*)$")
# "step" followed by a literal space, then the id
_STEP_LABEL_RE = re.compile(r"^step (.*)$", re.IGNORECASE)

INTRODUCTION = "introduction"
BEFORE = "before"
AFTER = "after"
RESERVED_SECTIONS = (INTRODUCTION, BEFORE, AFTER)


class PromptParseError(Exception):
    """Base exception for prompt parsing errors."""

    pass


class NoStepsFoundError(PromptParseError):
    """Raised when a document contains no step headers."""

    def __init__(self, message: str = "no steps found") -> None:
        super().__init__(message)


class Prompt:
    """
    Parsed prompt: an ordered set of steps plus reserved sections.

    Step ids keep document order of first appearance. Accessors never expose
    internal state, so callers can freely mutate what they get back.
    """

    def __init__(
        self,
        steps: dict[str, str],
        order: list[str],
        introduction: str = "",
        before: str = "",
        after: str = "",
    ) -> None:
        self._steps = dict(steps)
        self._order = list(order)
        self._introduction = introduction
        self._before = before
        self._after = after

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._steps

    def __len__(self) -> int:
        return len(self._order)

    def get_step(self, step_id: str) -> str | None:
        """
        Get the content of a step.

        Args:
            step_id: Step identifier (e.g. "1" or "Find Tests")

        Returns:
            Step content, or None if no such step exists
        """
        return self._steps.get(step_id)

    def steps(self) -> list[str]:
        """Return all step ids in document order (a fresh copy)."""
        return list(self._order)

    @property
    def first_step(self) -> str:
        """Id of the first step, or empty string if there are none."""
        return self._order[0] if self._order else ""

    @property
    def introduction(self) -> str:
        """Content of the "# Introduction" section (empty if absent)."""
        return self._introduction

    @property
    def before(self) -> str:
        """Content of the "# Before" section (empty if absent)."""
        return self._before

    @property
    def after(self) -> str:
        """Content of the "# After" section (empty if absent)."""
        return self._after

    def bootstrap(self, command: str) -> str:
        """
        Build the initial instruction for an operator or LLM.

        Args:
            command: Command that prints a step (e.g. "rinku migrate")

        Returns:
            One-line instruction pointing at the first step, or empty string
        """
        first = self.first_step
        if not first:
            return ""
        return (
            f"Execute '{command} {first}'. This will return instructions. "
            "Execute those instructions."
        )


def _parse_header(line: str) -> tuple[str, str] | None:
    """
    Classify a line as a section header.

    Returns:
        ("reserved", name) for introduction/before/after,
        ("step", id) for step headers, or None for ordinary content
    """
    match = _HEADER_RE.match(line.strip())
    if not match:
        return None

    label = match.group(1).strip()
    lowered = label.lower()
    if lowered in RESERVED_SECTIONS:
        return ("reserved", lowered)

    step_match = _STEP_LABEL_RE.match(label)
    if step_match:
        step_id = step_match.group(1).strip()
        if step_id:
            return ("step", step_id)

    return None


def _trim_blank_lines(lines: list[str]) -> str:
    """Drop leading and trailing blank lines and join the rest."""
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(line.rstrip("\r") for line in lines[start:end])


def parse(content: str) -> Prompt:
    """
    Parse a prompt document into steps and reserved sections.

    Args:
        content: Markdown text of the prompt

    Returns:
        Parsed Prompt

    Raises:
        NoStepsFoundError: If the document has no step headers
    """
    steps: dict[str, str] = {}
    order: list[str] = []
    reserved: dict[str, str] = {}

    # (kind, name) of the open section; None until the first header
    current: tuple[str, str] | None = None
    buffer: list[str] = []

    def flush() -> None:
        if current is None:
            return
        kind, name = current
        text = _trim_blank_lines(buffer)
        if kind == "step":
            steps[name] = text
        else:
            reserved[name] = text

    for line in content.split("\n"):
        header = _parse_header(line)
        if header is None:
            if current is not None:
                buffer.append(line)
            continue

        flush()
        current = header
        buffer = []
        kind, name = header
        if kind == "step":
            if name in order:
                logger.debug("Duplicate step header %r, later content wins", name)
            else:
                order.append(name)

    flush()

    if not order:
        raise NoStepsFoundError()

    logger.debug("Parsed prompt with %d step(s)", len(order))
    return Prompt(
        steps=steps,
        order=order,
        introduction=reserved.get(INTRODUCTION, ""),
        before=reserved.get(BEFORE, ""),
        after=reserved.get(AFTER, ""),
    )


def parse_file(path: Path) -> Prompt:
    """
    Parse a prompt document from a file.

    Args:
        path: Path to the markdown prompt

    Returns:
        Parsed Prompt

    Raises:
        OSError: If the file cannot be read
        NoStepsFoundError: If the document has no step headers
    """
    return parse(Path(path).read_text(encoding="utf-8"))
