"""Services for swap-worktree."""

from .display_service import DisplayService

__all__ = ["DisplayService"]
