"""
Multi-step prompt parsing.

Turns a markdown document into ordered steps plus the reserved
introduction/before/after sections.
"""

from .migration import BUNDLED_PROMPT, load_migration_prompt
from .parser import (
    NoStepsFoundError,
    Prompt,
    PromptParseError,
    parse,
    parse_file,
)

__all__ = [
    "BUNDLED_PROMPT",
    "NoStepsFoundError",
    "Prompt",
    "PromptParseError",
    "load_migration_prompt",
    "parse",
    "parse_file",
]
