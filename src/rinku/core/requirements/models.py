"""
Requirement data model.

A requirement is a piece of behavior the migrated project must reproduce,
addressed by a slash-separated path such as "api/cli" or "db/models/user".
Paths form a flat namespace: "/" only groups requirements for display and
filtering, and there is no parent/child relationship between documents.
"""

from datetime import datetime

from pydantic import BaseModel, model_validator


class Requirement(BaseModel):
    """
    A captured requirement.

    Attributes:
        path: Logical path identifying the requirement
        content: Requirement text
        step: Migration step that was current when it was written (may be empty)
        created_at: First write; preserved across updates
        updated_at: Last write
        done: Whether the requirement has been implemented
        done_at: When it was marked done
    """

    path: str
    content: str
    step: str = ""
    created_at: datetime
    updated_at: datetime
    done: bool = False
    done_at: datetime | None = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "Requirement":
        if self.done and self.done_at is None:
            raise ValueError(f"requirement '{self.path}' is done but has no done_at")
        if self.updated_at < self.created_at:
            raise ValueError(f"requirement '{self.path}' updated_at precedes created_at")
        return self
