"""Data models for swap-worktree."""

from .worktree import WorktreeRecord
from .stash import StashSnapshot, ReapplyStatus, ReapplyResult, describe_kept_snapshots
from .swap import SwapOutcome, SwapStep, EventLevel, SwapEvent, SwapPlan, SwapResult

__all__ = [
    "WorktreeRecord",
    "StashSnapshot",
    "ReapplyStatus",
    "ReapplyResult",
    "describe_kept_snapshots",
    "SwapOutcome",
    "SwapStep",
    "EventLevel",
    "SwapEvent",
    "SwapPlan",
    "SwapResult",
]
