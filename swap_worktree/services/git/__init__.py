"""Git-related services for swap-worktree."""

from .executor import GitExecutor, GitOutput
from .resolver import WorktreeResolver
from .worktrees import WorktreeLocator, parse_worktree_records, parse_worktree_branches
from .stash import StashManager

__all__ = [
    "GitExecutor",
    "GitOutput",
    "WorktreeResolver",
    "WorktreeLocator",
    "parse_worktree_records",
    "parse_worktree_branches",
    "StashManager",
]
