"""Branch and worktree discovery for swap-worktree."""

from pathlib import Path
from typing import Iterator, Optional, Tuple

from swap_worktree.constants import REFS_HEADS_PREFIX
from swap_worktree.exceptions import (
    BranchNotFoundError,
    DetachedHeadError,
    StaleWorktreeError,
    WorktreeQueryError,
)
from swap_worktree.logging_config import get_logger
from swap_worktree.models.worktree import WorktreeRecord
from swap_worktree.services.git.executor import GitExecutor

logger = get_logger(__name__)


def normalize_branch_name(ref: str) -> str:
    """Strip surrounding whitespace and the ``refs/heads/`` namespace."""
    ref = ref.strip()
    if ref.startswith(REFS_HEADS_PREFIX):
        return ref[len(REFS_HEADS_PREFIX):]
    return ref


def _iter_raw_records(porcelain: str) -> Iterator[Tuple[Optional[str], Optional[str]]]:
    """Yield (path, branch) for each record of `git worktree list --porcelain`.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (absent when detached)
        (blank line between worktrees, optional after the last one)

    ``bare``, ``locked``, ``prunable`` and ``detached`` lines are ignored.
    """
    path: Optional[str] = None
    branch: Optional[str] = None
    seen = False

    for line in porcelain.splitlines():
        if not line.strip():
            if seen:
                yield path, branch
            path, branch, seen = None, None, False
            continue

        seen = True
        if line.startswith("worktree "):
            path = line[len("worktree "):].strip()
        elif line.startswith("branch "):
            branch = normalize_branch_name(line[len("branch "):]) or None

    # Last record may not be followed by a blank line
    if seen:
        yield path, branch


def parse_worktree_records(porcelain: str) -> list[WorktreeRecord]:
    """Parse porcelain output into one WorktreeRecord per listed worktree."""
    return [
        WorktreeRecord(path=path, branch=branch)
        for path, branch in _iter_raw_records(porcelain)
        if path
    ]


def parse_worktree_branches(porcelain: str) -> list[str]:
    """Every branch checked out in some worktree, sorted and without duplicates."""
    return sorted({branch for _, branch in _iter_raw_records(porcelain) if branch})


def normalize_path(base: Path, path: str) -> Path:
    """Interpret a relative worktree path against ``base``."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return base / candidate


class WorktreeLocator:
    """Maps branches to the worktrees that have them checked out."""

    def __init__(self, executor: GitExecutor):
        self.executor = executor

    def current_branch(self, ref: Path) -> str:
        """Short name of the branch checked out in ``ref``.

        Raises:
            DetachedHeadError: if HEAD is not on a named branch
            WorktreeQueryError: if git could not be queried
        """
        output = self.executor.run(ref, "symbolic-ref", "--short", "HEAD")
        if not output.ok:
            if "not a symbolic ref" in output.stderr:
                raise DetachedHeadError(ref)
            raise WorktreeQueryError(
                "Failed to determine destination branch.",
                command=output.command,
                stdout=output.stdout,
                stderr=output.stderr,
                status=output.status,
            )

        branch = normalize_branch_name(output.stdout)
        if not branch:
            raise DetachedHeadError(ref)
        return branch

    def list_worktrees(self, ref: Path) -> list[WorktreeRecord]:
        """All worktrees of the repository that ``ref`` belongs to."""
        output = self.executor.run_checked(
            ref,
            "worktree", "list", "--porcelain",
            context="Failed to list worktrees.",
            error=WorktreeQueryError,
        )
        records = parse_worktree_records(output.stdout)
        logger.debug(f"Found {len(records)} worktrees")
        for record in records:
            logger.debug(f"  {record}")
        return records

    def find_worktree_for_branch(self, ref: Path, branch: str) -> Path:
        """Canonical directory of the first worktree that has ``branch`` checked out.

        Raises:
            BranchNotFoundError: if no worktree has the branch
            StaleWorktreeError: if the matching worktree's directory is gone
        """
        branch = normalize_branch_name(branch)
        for record in self.list_worktrees(ref):
            if not record.matches(branch):
                continue
            path = normalize_path(ref, record.path)
            if not path.exists():
                raise StaleWorktreeError(branch, path)
            return path.resolve()

        raise BranchNotFoundError(branch)

    def list_all_branches(self, ref: Path) -> list[str]:
        """Sorted, de-duplicated names of branches checked out in any worktree."""
        output = self.executor.run_checked(
            ref,
            "worktree", "list", "--porcelain",
            context="Failed to list worktrees.",
            error=WorktreeQueryError,
        )
        return parse_worktree_branches(output.stdout)
