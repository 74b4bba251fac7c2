"""
Loading of the migration workflow prompt.

The default prompt ships inside the package (rinku/data/migration-prompt.md).
Projects can point config.prompt_path at their own document instead.
"""

import logging
from pathlib import Path

from rinku.core.prompt.parser import Prompt, parse_file

logger = logging.getLogger(__name__)

BUNDLED_PROMPT = Path(__file__).parent.parent.parent / "data" / "migration-prompt.md"


def load_migration_prompt(prompt_path: Path | None = None) -> Prompt:
    """
    Load and parse the migration workflow prompt.

    Args:
        prompt_path: Custom prompt document; defaults to the bundled one

    Returns:
        Parsed Prompt

    Raises:
        OSError: If the prompt file cannot be read
        NoStepsFoundError: If the prompt has no steps
    """
    path = Path(prompt_path) if prompt_path is not None else BUNDLED_PROMPT
    logger.debug("Loading migration prompt from %s", path)
    return parse_file(path)
