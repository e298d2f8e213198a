"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WorktreeRecord:
    """One entry of `git worktree list --porcelain`."""

    path: str
    branch: Optional[str] = None  # None means detached HEAD

    @property
    def is_detached(self) -> bool:
        return self.branch is None

    def matches(self, branch: str) -> bool:
        """A detached record never matches a branch lookup."""
        return self.branch is not None and self.branch == branch

    def __str__(self) -> str:
        """String representation of worktree."""
        label = self.branch if self.branch else "(detached)"
        return f"{label} @ {self.path}"
