"""Custom exceptions for swap-worktree"""

from pathlib import Path
from typing import Iterable, List, Optional

from swap_worktree.models.stash import StashSnapshot, describe_kept_snapshots
from swap_worktree.models.swap import SwapOutcome


class SwapWorktreeError(Exception):
    """Base exception for all swap-worktree errors.

    ``outcome`` names the terminal state the repository is left in.
    """

    outcome = SwapOutcome.ABORTED_UNCHANGED


class InputError(SwapWorktreeError):
    """Exception raised for invalid user input."""
    pass


class PathNotFoundError(InputError):
    """Exception raised when a directory argument does not exist."""

    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"Destination directory '{path}' does not exist.")


class NotADirectoryPathError(InputError):
    """Exception raised when a directory argument is a file or other non-directory."""

    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"'{path}' is not a directory.")


class IdenticalWorktreeError(InputError):
    """Exception raised when destination and source are the same worktree."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__("Source and destination directories are the same. Nothing to swap.")


class GitOperationError(SwapWorktreeError):
    """Exception raised when a git command fails."""

    def __init__(
        self,
        context: str,
        command: Optional[str] = None,
        stdout: str = "",
        stderr: str = "",
        status: Optional[int] = None,
    ):
        self.context = context
        self.command = command
        self.stdout = stdout
        self.stderr = stderr
        self.status = status

        error_msg = context
        if command:
            error_msg += f"\nCommand: {command}"
            error_msg += f"\nstdout: {stdout.strip()}"
            error_msg += f"\nstderr: {stderr.strip()}"

        super().__init__(error_msg)


class DiscoveryError(SwapWorktreeError):
    """Exception raised when worktree or branch discovery fails."""
    pass


class NotAWorktreeError(DiscoveryError):
    """Exception raised when a directory is not inside a git working tree."""

    def __init__(self, path: Path, detail: Optional[str] = None):
        self.path = path
        self.detail = detail
        error_msg = f"'{path}' is not inside a git worktree."
        if detail:
            error_msg += f"\n{detail}"
        super().__init__(error_msg)


class DetachedHeadError(DiscoveryError):
    """Exception raised when the destination worktree is not on a named branch."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Could not determine branch for '{path}'. Is HEAD detached?")


class BranchNotFoundError(DiscoveryError):
    """Exception raised when no worktree has the requested branch checked out."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Could not find worktree for branch '{branch}'.")


class StaleWorktreeError(DiscoveryError):
    """Exception raised when git lists a worktree whose directory is gone."""

    def __init__(self, branch: str, path: Path):
        self.branch = branch
        self.path = path
        super().__init__(
            f"Source directory '{path}' (for branch '{branch}') does not exist. "
            f"Run 'git worktree prune' to clean up stale worktree metadata."
        )


class WorktreeQueryError(GitOperationError, DiscoveryError):
    """Exception raised when git cannot be queried about branches or worktrees."""
    pass


class StashError(SwapWorktreeError):
    """Exception raised when creating or locating a stash fails."""

    def __init__(self, message: str, kept: Iterable[Optional[StashSnapshot]] = ()):
        self.kept: List[StashSnapshot] = [snapshot for snapshot in kept if snapshot is not None]
        note = describe_kept_snapshots(self.kept)
        super().__init__(f"{message}\n{note}" if note else message)


class SwapError(SwapWorktreeError):
    """Exception raised when moving branches between worktrees fails."""

    def __init__(
        self,
        message: str,
        kept: Iterable[Optional[StashSnapshot]] = (),
        outcome: SwapOutcome = SwapOutcome.ABORTED_UNCHANGED,
    ):
        self.outcome = outcome
        self.kept: List[StashSnapshot] = [snapshot for snapshot in kept if snapshot is not None]
        note = describe_kept_snapshots(self.kept)
        super().__init__(f"{message}\n{note}" if note else message)


class RecoverableSwapError(SwapError):
    """A detach or first switch failed; original branches were restored where possible."""

    def __init__(self, message: str, restored: bool, kept: Iterable[Optional[StashSnapshot]] = ()):
        self.restored = restored
        super().__init__(message, kept, SwapOutcome.ABORTED_PARTIALLY_DETACHED)


class CriticalSwapError(SwapError):
    """The second switch failed; manual recovery is required."""

    def __init__(
        self,
        message: str,
        recovery_commands: List[str],
        kept: Iterable[Optional[StashSnapshot]] = (),
    ):
        self.recovery_commands = recovery_commands
        lines = [message, "Please manually run:"]
        lines.extend(f"  {command}" for command in recovery_commands)
        super().__init__("\n".join(lines), kept, SwapOutcome.CRITICAL_INCONSISTENT)
