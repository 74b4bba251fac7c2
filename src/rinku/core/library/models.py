"""
Library mapping data models.

These models define the structure of the bundled libs.json and
mappings.json files, validated via Pydantic.
"""

from pydantic import BaseModel, Field

NO_TARGET = "<None>"


class Library(BaseModel):
    """A library in some language, identified by its repository URL."""

    url: str
    lang: str
    unsafe: str = Field(
        default="",
        description="Reason the library is considered unsafe (empty if safe)",
    )
    crate_name: str = Field(default="", description="Explicit crate name for Rust libraries")
    tags: list[str] = Field(default_factory=list)

    @property
    def is_unsafe(self) -> bool:
        return bool(self.unsafe)


class RequiredDep(BaseModel):
    """An extra crate a mapping needs in the generated manifest."""

    crate: str
    features: list[str] = Field(default_factory=list)
    reason: str = ""


class Mapping(BaseModel):
    """Equivalence between a source library and its target libraries."""

    source: str
    targets: list[str]
    category: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    requires: list[RequiredDep] = Field(default_factory=list)


class LibsFile(BaseModel):
    """Contents of libs.json: library id -> Library."""

    libs: dict[str, Library] = Field(default_factory=dict)


class MappingsFile(BaseModel):
    """Contents of mappings.json."""

    mappings: list[Mapping] = Field(default_factory=list)
