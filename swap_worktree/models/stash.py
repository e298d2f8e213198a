"""Stash snapshot models."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional


@dataclass(frozen=True)
class StashSnapshot:
    """Uncommitted and untracked state of one worktree saved in the stash store.

    ``content_hash`` identifies the stash commit and never changes.
    ``stash_ref`` is the positional reference (``stash@{N}``) found right after
    the push. The stash list is shared by every worktree of a repository, so
    the slot shifts whenever another entry is pushed or dropped.
    """

    content_hash: str
    stash_ref: Optional[str]
    origin_branch: str

    def __str__(self) -> str:
        ref = self.stash_ref or "unknown ref"
        return f"{self.content_hash} ({ref}, from {self.origin_branch})"


class ReapplyStatus(Enum):
    """Outcome of applying a snapshot to its new worktree."""

    NOTHING_TO_APPLY = "nothing"
    APPLIED = "applied"
    APPLIED_NOT_DROPPED = "applied-not-dropped"
    APPLY_FAILED = "apply-failed"


@dataclass
class ReapplyResult:
    """Result of StashManager.apply_and_retire for one worktree."""

    directory: Path
    snapshot: Optional[StashSnapshot]
    status: ReapplyStatus
    dropped_ref: Optional[str] = None
    warning: Optional[str] = None

    @property
    def left_behind(self) -> bool:
        """True when the snapshot is still in the stash store."""
        return self.status in (ReapplyStatus.APPLIED_NOT_DROPPED, ReapplyStatus.APPLY_FAILED)


def describe_kept_snapshots(snapshots: Iterable[Optional[StashSnapshot]]) -> str:
    """Build the recovery note listing snapshots left in the stash store."""
    kept = [snapshot for snapshot in snapshots if snapshot is not None]
    if not kept:
        return ""
    lines = ["Your changes are kept in the stash store:"]
    for snapshot in kept:
        lines.append(f"  {snapshot.content_hash} (from '{snapshot.origin_branch}')")
    lines.append("Restore them with 'git stash apply <hash>' in the matching worktree.")
    return "\n".join(lines)
