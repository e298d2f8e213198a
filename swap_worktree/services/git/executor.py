"""Thin wrapper that runs git commands and captures their output."""

from dataclasses import dataclass
from pathlib import Path
from typing import Type, Union

import git

from swap_worktree.exceptions import GitOperationError
from swap_worktree.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class GitOutput:
    """Captured result of one git invocation."""

    args: tuple
    stdout: str
    stderr: str
    status: int

    @property
    def ok(self) -> bool:
        return self.status == 0

    @property
    def command(self) -> str:
        return "git " + " ".join(self.args)

    @property
    def combined(self) -> str:
        """Trimmed stdout and stderr, joined by a newline when both are present."""
        parts = [text.strip() for text in (self.stdout, self.stderr) if text.strip()]
        return "\n".join(parts)


class GitExecutor:
    """Runs git in a working directory. Never interprets the output."""

    def run(self, directory: PathLike, *args: str) -> GitOutput:
        """Run ``git <args>`` in ``directory``.

        A non-zero exit status is returned, not raised.

        Raises:
            GitOperationError: if the git executable cannot be started
        """
        command = ["git", *args]
        logger.debug(f"Running '{' '.join(command)}' in {directory}")
        try:
            status, stdout, stderr = git.Git(str(directory)).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            raise GitOperationError(f"Could not run git in '{directory}': {e}") from e

        output = GitOutput(tuple(args), stdout, stderr, status)
        if not output.ok:
            logger.debug(f"'{output.command}' exited with {status}: {output.combined}")
        return output

    def run_checked(
        self,
        directory: PathLike,
        *args: str,
        context: str,
        error: Type[GitOperationError] = GitOperationError,
    ) -> GitOutput:
        """Run git and raise ``error`` on a non-zero exit status.

        Args:
            directory: Working directory for the command
            args: Arguments after ``git``
            context: First line of the error message on failure
            error: GitOperationError subclass to raise
        """
        output = self.run(directory, *args)
        if not output.ok:
            raise error(
                context,
                command=output.command,
                stdout=output.stdout,
                stderr=output.stderr,
                status=output.status,
            )
        return output
