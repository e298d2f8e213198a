"""
swap-worktree - Swap branches (and uncommitted state) between two Git worktrees
"""

from .__version__ import __version__
from .core import WorktreeSwapper
from .cli.main import main

__all__ = ["WorktreeSwapper", "main", "__version__"]
