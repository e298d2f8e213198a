"""Stash capture and reapplication for swap-worktree."""

from pathlib import Path
from typing import Optional

from swap_worktree.constants import DEFAULT_STASH_MESSAGE_PREFIX, NO_LOCAL_CHANGES, STASH_LIST_FORMAT
from swap_worktree.exceptions import GitOperationError, StashError
from swap_worktree.logging_config import get_logger
from swap_worktree.models.stash import ReapplyResult, ReapplyStatus, StashSnapshot
from swap_worktree.services.git.executor import GitExecutor

logger = get_logger(__name__)


class StashManager:
    """Saves a worktree's local changes and restores them somewhere else.

    All worktrees of one repository share a single stash list. Snapshots are
    therefore applied by commit hash, and the ``stash@{N}`` slot used to drop
    one is looked up again right before dropping it.
    """

    def __init__(self, executor: GitExecutor, message_prefix: str = DEFAULT_STASH_MESSAGE_PREFIX):
        self.executor = executor
        self.message_prefix = message_prefix

    def capture(self, ref: Path, branch: str) -> Optional[StashSnapshot]:
        """Stash tracked and untracked changes in ``ref``.

        Returns:
            The snapshot, or None when there was nothing to save.

        Raises:
            StashError: if git could not create or identify the stash
        """
        message = f"{self.message_prefix}{branch}"
        output = self.executor.run(ref, "stash", "push", "-u", "-m", message)
        if output.combined.strip() == NO_LOCAL_CHANGES:
            logger.debug(f"No local changes in {ref}")
            return None
        if not output.ok:
            raise StashError(f"Failed to create stash in '{ref}': {output.combined}")

        rev = self.executor.run(ref, "rev-parse", "stash@{0}")
        if not rev.ok or not rev.stdout.strip():
            raise StashError(
                f"Stash was created in '{ref}' but its commit could not be determined: "
                f"{rev.combined}\nLook for '{message}' in 'git stash list'."
            )
        content_hash = rev.stdout.strip()

        stash_ref = self.locate(ref, content_hash)
        logger.info(f"Stashed {ref} ({branch}) as {content_hash} [{stash_ref}]")
        return StashSnapshot(content_hash=content_hash, stash_ref=stash_ref, origin_branch=branch)

    def locate(self, ref: Path, content_hash: str) -> Optional[str]:
        """Current ``stash@{N}`` slot of the entry whose commit is ``content_hash``.

        Raises:
            StashError: if the stash list cannot be read
        """
        output = self.executor.run(ref, "stash", "list", STASH_LIST_FORMAT)
        if not output.ok:
            raise StashError(f"Failed to list stashes in '{ref}': {output.combined}")

        for line in output.stdout.splitlines():
            commit, sep, reference = line.partition(":")
            if sep and commit.strip() == content_hash:
                return reference.strip() or None
        return None

    def apply_and_retire(self, ref: Path, snapshot: Optional[StashSnapshot]) -> ReapplyResult:
        """Apply ``snapshot`` in ``ref`` and drop it once applied.

        Never raises. A snapshot is only dropped after it applied cleanly;
        in every other case it stays in the stash list and the result
        carries a warning for the operator.
        """
        if snapshot is None:
            return ReapplyResult(ref, None, ReapplyStatus.NOTHING_TO_APPLY)

        try:
            output = self.executor.run(ref, "stash", "apply", snapshot.content_hash)
        except GitOperationError as e:
            return self._apply_failed(
                ref, snapshot, f"Warning: Failed to apply stash {snapshot.content_hash} to '{ref}': {e}"
            )
        if not output.ok:
            return self._apply_failed(
                ref,
                snapshot,
                f"Warning: Failed to apply stash {snapshot.content_hash} to '{ref}'.\nOutput: {output.combined}",
            )
        logger.info(f"Applied {snapshot.content_hash} in {ref}")

        try:
            current_ref = self.locate(ref, snapshot.content_hash)
        except (StashError, GitOperationError) as e:
            logger.debug(f"Could not re-read stash list in {ref}: {e}")
            current_ref = None
        if current_ref is None:
            warning = (
                f"Warning: Could not determine stash reference for {snapshot.content_hash}. "
                f"The stash remains in the list."
            )
            return ReapplyResult(ref, snapshot, ReapplyStatus.APPLIED_NOT_DROPPED, warning=warning)
        if snapshot.stash_ref and current_ref != snapshot.stash_ref:
            logger.debug(f"{snapshot.content_hash} moved from {snapshot.stash_ref} to {current_ref}")

        try:
            dropped = self.executor.run(ref, "stash", "drop", current_ref)
        except GitOperationError as e:
            warning = f"Warning: Failed to drop applied stash {current_ref}: {e}"
            return ReapplyResult(ref, snapshot, ReapplyStatus.APPLIED_NOT_DROPPED, warning=warning)
        if not dropped.ok:
            warning = (
                f"Warning: Failed to drop applied stash {current_ref}: "
                f"git stash drop {current_ref} failed: {dropped.combined}"
            )
            return ReapplyResult(ref, snapshot, ReapplyStatus.APPLIED_NOT_DROPPED, warning=warning)

        return ReapplyResult(ref, snapshot, ReapplyStatus.APPLIED, dropped_ref=current_ref)

    def _apply_failed(self, ref: Path, snapshot: StashSnapshot, message: str) -> ReapplyResult:
        warning = f"{message}\nThe stash has been kept. Please resolve manually in '{ref}'."
        logger.info(f"Stash {snapshot.content_hash} left in place for {ref}")
        return ReapplyResult(ref, snapshot, ReapplyStatus.APPLY_FAILED, warning=warning)
