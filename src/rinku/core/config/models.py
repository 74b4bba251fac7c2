"""
Configuration data models for rinku.

These models define the structure of .rinku.json and
~/.config/rinku/config.json files, with validation via Pydantic.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RinkuConfig(BaseModel):
    """
    Top-level rinku configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = RinkuConfig(state_dir=".migration", include_unsafe=True)
        >>> config.target_language
        'rust'
    """

    state_dir: str = Field(
        default=".rinku",
        description="Directory under the project root holding progress and requirements",
    )
    prompt_path: Optional[Path] = Field(
        default=None,
        description="Alternative step prompt (defaults to the bundled migration prompt)",
    )
    target_language: str = Field(
        default="rust",
        min_length=1,
        description="Language library lookups map to",
    )
    include_unsafe: bool = Field(
        default=False,
        description="Include libraries flagged as unsafe in lookups",
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )

    @field_validator("state_dir")
    @classmethod
    def validate_state_dir(cls, v: str) -> str:
        """State directory must be a single relative path segment."""
        if not v or v in (".", "..") or "/" in v or "\\" in v or "\x00" in v:
            raise ValueError(f"state_dir must be a single directory name, got {v!r}")
        return v

    @field_validator("target_language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        return v.lower()

    def resolve_prompt_path(self, project_dir: Path) -> Path | None:
        """Prompt path made absolute against project_dir, or None for the bundled prompt."""
        if self.prompt_path is None:
            return None
        if self.prompt_path.is_absolute():
            return self.prompt_path
        return project_dir / self.prompt_path
