"""Swap the checked-out branches (and local changes) of two worktrees.

The protocol runs strictly in order:

1. validate the destination and find the worktree holding the source branch
2. refuse to swap a worktree with itself
3. stash both worktrees (destination first)
4. detach both HEADs, which frees both branch names
5. switch each worktree to the other's branch
6. apply each stash in its new home and drop it

Nothing is modified before step 3, and steps 3 and 4 can be undone. Once
the destination has switched in step 5 a failure cannot be repaired
automatically; the error names the commands that restore a consistent state.
"""

from pathlib import Path
from typing import Callable, List, Optional, Union

from swap_worktree.config import Config
from swap_worktree.constants import STEP_SEPARATOR
from swap_worktree.exceptions import (
    CriticalSwapError,
    GitOperationError,
    IdenticalWorktreeError,
    RecoverableSwapError,
    StashError,
    SwapError,
)
from swap_worktree.logging_config import get_logger
from swap_worktree.models.stash import ReapplyResult, ReapplyStatus
from swap_worktree.models.swap import EventLevel, SwapEvent, SwapPlan, SwapResult, SwapStep
from swap_worktree.services.git.executor import GitExecutor
from swap_worktree.services.git.resolver import WorktreeResolver
from swap_worktree.services.git.stash import StashManager
from swap_worktree.services.git.worktrees import WorktreeLocator, normalize_branch_name

logger = get_logger(__name__)

Reporter = Callable[[SwapEvent], None]


class WorktreeSwapper:
    """Runs the swap protocol against a git executor.

    Progress is reported as SwapEvent objects passed to ``reporter``; the
    swapper itself never writes to the terminal.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        executor: Optional[GitExecutor] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.config = config or Config()
        self.executor = executor or GitExecutor()
        self.reporter = reporter
        self.resolver = WorktreeResolver(self.executor)
        self.locator = WorktreeLocator(self.executor)
        self.stash_manager = StashManager(self.executor, self.config.stash_message_prefix)
        self.events: List[SwapEvent] = []

    def _emit(self, step: SwapStep, message: str, level: EventLevel = EventLevel.INFO) -> None:
        event = SwapEvent(step, message, level)
        self.events.append(event)
        if level is EventLevel.WARNING:
            logger.debug(f"[{step.value}] warning: {message}")
        else:
            logger.debug(f"[{step.value}] {message}")
        if self.reporter is not None:
            self.reporter(event)

    def _separator(self, step: SwapStep) -> None:
        self._emit(step, STEP_SEPARATOR)

    def swap(self, destination: Union[str, Path], source_branch: str) -> SwapResult:
        """Give ``destination`` the branch ``source_branch`` and vice versa.

        Args:
            destination: Directory of the worktree that should receive source_branch
            source_branch: Branch currently checked out in some other worktree

        Returns:
            SwapResult describing the swap, including any stash left behind

        Raises:
            InputError: bad path or destination and source are the same worktree
            DiscoveryError: not a worktree, detached HEAD, branch not found
            StashError: a stash could not be created; no branch has moved
            SwapError: detaching or switching failed; see its ``outcome``
        """
        plan = self._validate(destination, source_branch)
        self._capture(plan)
        self._detach(plan)
        self._switch(plan)
        reapplied = self._reapply(plan)

        warnings = [result.warning for result in reapplied if result.warning]
        return SwapResult(
            destination=plan.destination,
            source=plan.source,
            destination_branch=plan.destination_branch,
            source_branch=plan.source_branch,
            repo_root=plan.repo_root,
            reapplied=reapplied,
            warnings=warnings,
        )

    def _validate(self, destination: Union[str, Path], source_branch: str) -> SwapPlan:
        dest_dir = self.resolver.resolve(destination)
        self.resolver.ensure_is_worktree(dest_dir)
        dest_dir = self.resolver.worktree_root(dest_dir)

        repo_root = self.resolver.repo_root(dest_dir)
        self._emit(SwapStep.VALIDATE, f"Operating in repository: {repo_root}")
        self._separator(SwapStep.VALIDATE)

        self._emit(SwapStep.VALIDATE, f"Step 1: Fetching branch for destination directory '{dest_dir}'...")
        dest_branch = self.locator.current_branch(dest_dir)
        self._emit(SwapStep.VALIDATE, f"Found destination branch: '{dest_branch}'")
        self._separator(SwapStep.VALIDATE)

        src_branch = normalize_branch_name(source_branch)
        self._emit(SwapStep.VALIDATE, f"Step 2: Fetching directory for source branch '{src_branch}'...")
        src_dir = self.locator.find_worktree_for_branch(dest_dir, src_branch)
        self._emit(SwapStep.VALIDATE, f"Found source directory: '{src_dir}'")
        self._separator(SwapStep.VALIDATE)

        if dest_dir == src_dir:
            raise IdenticalWorktreeError(dest_dir)

        return SwapPlan(
            destination=dest_dir,
            destination_branch=dest_branch,
            source=src_dir,
            source_branch=src_branch,
            repo_root=repo_root,
        )

    def _capture(self, plan: SwapPlan) -> None:
        self._emit(SwapStep.CAPTURE, "Step 3: Stashing changes in both worktrees (including untracked files)...")
        plan.destination_stash = self._capture_worktree(plan.destination, plan.destination_branch)
        try:
            plan.source_stash = self._capture_worktree(plan.source, plan.source_branch)
        except (StashError, GitOperationError) as e:
            # No branch has moved; only the destination's stash needs mentioning
            raise StashError(str(e), kept=[plan.destination_stash]) from e
        self._separator(SwapStep.CAPTURE)

    def _capture_worktree(self, directory: Path, branch: str):
        self._emit(SwapStep.CAPTURE, f"Stashing '{directory}' (Branch: {branch})...")
        snapshot = self.stash_manager.capture(directory, branch)
        if snapshot is None:
            self._emit(SwapStep.CAPTURE, f"No changes to stash in '{directory}'.")
        else:
            self._emit(SwapStep.CAPTURE, f"Stashed changes from '{directory}' as {snapshot.content_hash}.")
        return snapshot

    def _detach(self, plan: SwapPlan) -> None:
        self._emit(SwapStep.DETACH, "Step 4: Swapping branches between worktrees...")
        try:
            self._detach_worktree(plan.destination, plan.destination_branch)
        except GitOperationError as e:
            raise SwapError(f"{e}\nFailed to detach destination worktree. Aborting.", kept=plan.snapshots) from e

        try:
            self._detach_worktree(plan.source, plan.source_branch)
        except GitOperationError as e:
            self._emit(SwapStep.DETACH, f"Error: {e}", EventLevel.WARNING)
            restored = self._restore(plan.destination, plan.destination_branch, SwapStep.DETACH)
            raise RecoverableSwapError(
                "Failed to detach source worktree. Aborting.", restored=restored, kept=plan.snapshots
            ) from e

        self._emit(SwapStep.DETACH, "Both worktrees detached. Proceeding with swap.")

    def _detach_worktree(self, directory: Path, branch: str) -> None:
        self._emit(SwapStep.DETACH, f"Detaching HEAD in '{directory}' (freeing {branch})...")
        self.executor.run_checked(directory, "switch", "--detach", context="Failed to detach worktree.")

    def _switch(self, plan: SwapPlan) -> None:
        try:
            self._switch_worktree(plan.destination, plan.source_branch)
        except GitOperationError as e:
            # Neither worktree holds a new branch yet, so both can go back
            self._emit(SwapStep.SWITCH, f"Error: {e}", EventLevel.WARNING)
            dest_restored = self._restore(plan.destination, plan.destination_branch, SwapStep.SWITCH)
            src_restored = self._restore(plan.source, plan.source_branch, SwapStep.SWITCH)
            raise RecoverableSwapError(
                f"Failed to switch destination worktree to '{plan.source_branch}'. Aborting.",
                restored=dest_restored and src_restored,
                kept=plan.snapshots,
            ) from e

        try:
            self._switch_worktree(plan.source, plan.destination_branch)
        except GitOperationError as e:
            raise CriticalSwapError(
                f"{e}\n"
                f"CRITICAL STATE: '{plan.destination}' is on '{plan.source_branch}', "
                f"but '{plan.source}' is still detached.",
                recovery_commands=[
                    f"git -C '{plan.destination}' switch '{plan.destination_branch}'",
                    f"git -C '{plan.source}' switch '{plan.source_branch}'",
                ],
                kept=plan.snapshots,
            ) from e

        self._emit(SwapStep.SWITCH, "Branch swap successful.")
        self._emit(SwapStep.SWITCH, f"  '{plan.destination}' is now on branch '{plan.source_branch}'.")
        self._emit(SwapStep.SWITCH, f"  '{plan.source}' is now on branch '{plan.destination_branch}'.")
        self._separator(SwapStep.SWITCH)

    def _switch_worktree(self, directory: Path, branch: str) -> None:
        self._emit(SwapStep.SWITCH, f"Switching '{directory}' -> to '{branch}'...")
        self.executor.run_checked(directory, "switch", branch, context="Failed to switch worktree branch.")

    def _restore(self, directory: Path, branch: str, step: SwapStep) -> bool:
        """Best-effort switch back to ``branch``. Failure is reported, never raised."""
        self._emit(step, f"Attempting to restore '{directory}' to '{branch}'...", EventLevel.WARNING)
        try:
            output = self.executor.run(directory, "switch", branch)
        except GitOperationError as e:
            self._emit(step, f"Could not restore '{directory}': {e}", EventLevel.WARNING)
            return False
        if not output.ok:
            self._emit(
                step,
                f"Could not restore '{directory}' to '{branch}'; it is left detached.\n{output.combined}",
                EventLevel.WARNING,
            )
            return False
        self._emit(step, f"Restored '{directory}' to '{branch}'.")
        return True

    def _reapply(self, plan: SwapPlan) -> List[ReapplyResult]:
        self._emit(SwapStep.REAPPLY, "Step 5: Applying stashes to their new locations...")
        results = [
            self._reapply_worktree(plan.destination, plan.source_branch, plan.source_stash),
            self._reapply_worktree(plan.source, plan.destination_branch, plan.destination_stash),
        ]
        self._separator(SwapStep.REAPPLY)
        self._emit(SwapStep.COMPLETE, "Worktree swap complete.")
        return results

    def _reapply_worktree(self, directory: Path, branch: str, snapshot) -> ReapplyResult:
        if snapshot is None:
            self._emit(SwapStep.REAPPLY, f"No stash from '{branch}' to apply to '{directory}'.")
        else:
            self._emit(
                SwapStep.REAPPLY,
                f"Applying stash {snapshot.content_hash} (from {snapshot.origin_branch}) to '{directory}'...",
            )

        result = self.stash_manager.apply_and_retire(directory, snapshot)
        if result.warning:
            self._emit(SwapStep.REAPPLY, result.warning, EventLevel.WARNING)
        if result.status is ReapplyStatus.APPLIED:
            self._emit(SwapStep.REAPPLY, "Successfully applied stash.")
            self._emit(SwapStep.REAPPLY, f"Dropped stash {result.dropped_ref}.")
        elif result.status is ReapplyStatus.APPLIED_NOT_DROPPED:
            self._emit(SwapStep.REAPPLY, "Successfully applied stash.")
        return result
