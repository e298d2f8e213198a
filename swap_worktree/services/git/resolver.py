"""Validation and canonicalization of worktree directories."""

from pathlib import Path

from swap_worktree.exceptions import NotADirectoryPathError, NotAWorktreeError, PathNotFoundError
from swap_worktree.logging_config import get_logger
from swap_worktree.services.git.executor import GitExecutor, PathLike

logger = get_logger(__name__)


class WorktreeResolver:
    """Turns user-supplied paths into canonical worktree directories."""

    def __init__(self, executor: GitExecutor):
        self.executor = executor

    def resolve(self, path_input: PathLike) -> Path:
        """Check that ``path_input`` is an existing directory and canonicalize it.

        No git command is run here. Symlinks and relative segments are
        resolved so that two spellings of one directory compare equal.

        Raises:
            PathNotFoundError: if the path does not exist
            NotADirectoryPathError: if the path is not a directory
        """
        path = Path(path_input)
        if not path.exists():
            raise PathNotFoundError(path_input)
        if not path.is_dir():
            raise NotADirectoryPathError(path_input)
        return path.resolve()

    def ensure_is_worktree(self, ref: Path) -> None:
        """Raise NotAWorktreeError unless git reports ``ref`` is inside a work tree."""
        output = self.executor.run(ref, "rev-parse", "--is-inside-work-tree")
        if not output.ok:
            raise NotAWorktreeError(ref, output.combined or None)
        if output.stdout.strip() != "true":
            raise NotAWorktreeError(ref)

    def worktree_root(self, ref: Path) -> Path:
        """Canonical top-level directory of the worktree containing ``ref``.

        A subdirectory of a worktree and the worktree itself map to the same
        root, so the result can be compared with paths from ``worktree list``.

        Raises:
            NotAWorktreeError: if git cannot report a top-level directory
        """
        output = self.executor.run(ref, "rev-parse", "--show-toplevel")
        toplevel = output.stdout.strip()
        if not output.ok or not toplevel:
            raise NotAWorktreeError(ref, output.combined or None)
        return Path(toplevel).resolve()

    def repo_root(self, ref: Path) -> Path:
        """Directory holding the repository's shared metadata directory.

        Used for display only, so any failure falls back to ``ref``.
        """
        output = self.executor.run(ref, "rev-parse", "--git-common-dir")
        if not output.ok or not output.stdout.strip():
            logger.debug(f"Could not determine common git dir for {ref}: {output.combined}")
            return ref

        git_dir = Path(output.stdout.strip())
        if not git_dir.is_absolute():
            git_dir = ref / git_dir
        try:
            git_dir = git_dir.resolve()
        except OSError as e:
            logger.debug(f"Could not resolve {git_dir}: {e}")

        parent = git_dir.parent
        if parent == git_dir:
            return ref
        return parent
