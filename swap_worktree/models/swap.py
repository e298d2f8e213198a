"""Swap protocol models: plan, events and results."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from swap_worktree.models.stash import ReapplyResult, StashSnapshot


class SwapOutcome(Enum):
    """Terminal states of one swap invocation."""

    SUCCESS = "success"
    ABORTED_UNCHANGED = "aborted-unchanged"
    ABORTED_PARTIALLY_DETACHED = "aborted-partially-detached"
    CRITICAL_INCONSISTENT = "critical-inconsistent"


class SwapStep(Enum):
    """Protocol steps, in execution order."""

    VALIDATE = "validate"
    CAPTURE = "capture"
    DETACH = "detach"
    SWITCH = "switch"
    REAPPLY = "reapply"
    COMPLETE = "complete"


class EventLevel(Enum):
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class SwapEvent:
    """A human-readable progress record emitted by the swapper."""

    step: SwapStep
    message: str
    level: EventLevel = EventLevel.INFO

    @property
    def is_warning(self) -> bool:
        return self.level is EventLevel.WARNING


@dataclass
class SwapPlan:
    """Both sides of a swap, filled in as the protocol advances."""

    destination: Path
    destination_branch: str
    source: Path
    source_branch: str
    repo_root: Path
    destination_stash: Optional[StashSnapshot] = None
    source_stash: Optional[StashSnapshot] = None

    @property
    def snapshots(self) -> List[Optional[StashSnapshot]]:
        return [self.destination_stash, self.source_stash]


@dataclass
class SwapResult:
    """Returned by a swap that reached its primary goal."""

    destination: Path
    source: Path
    destination_branch: str  # branch the destination held before the swap
    source_branch: str  # branch the source held before the swap
    repo_root: Path
    reapplied: List[ReapplyResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    outcome: SwapOutcome = SwapOutcome.SUCCESS

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def summary(self) -> str:
        return (
            f"Swap complete: '{self.destination}' -> '{self.source_branch}', "
            f"'{self.source}' -> '{self.destination_branch}'."
        )
