"""Core swap protocol for swap-worktree."""

from .swapper import WorktreeSwapper

__all__ = ["WorktreeSwapper"]
