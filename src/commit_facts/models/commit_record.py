"""Commit record model for a single repository commit."""

from datetime import datetime
from typing import Optional

import git
from pydantic import BaseModel


class CommitRecord(BaseModel):
    """Normalized, immutable view of one repository commit."""

    id: str
    authored_at: datetime  # aware, in the commit's own offset
    message: str
    parent_id: Optional[str] = None  # primary parent; None for root commits

    model_config = {"frozen": True}

    @property
    def is_root(self) -> bool:
        """Check if the commit has no parent."""
        return self.parent_id is None

    @classmethod
    def from_git(cls, commit: git.Commit) -> "CommitRecord":
        """Build a record from a GitPython commit."""
        return cls(
            id=commit.hexsha,
            authored_at=commit.authored_datetime,
            message=commit.message,
            parent_id=commit.parents[0].hexsha if commit.parents else None,
        )
