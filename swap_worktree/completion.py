"""Shell completion for swap-worktree.

Completion is requested through the environment, so it works without the
required positional arguments being present::

    eval "$(SWAP_WORKTREE_COMPLETE=bash_source swap-worktree)"

The generated bash function calls back with ``SWAP_WORKTREE_COMPLETE=bash_complete``
and ``COMP_WORDS``/``COMP_CWORD`` set; candidates are printed one per line.
"""

import os
import shlex
from typing import Mapping, Optional, Sequence

from swap_worktree.constants import (
    BASH_COMPLETION_SCRIPT,
    COMPLETE_BASH,
    COMPLETE_SOURCE_BASH,
)
from swap_worktree.exceptions import SwapWorktreeError
from swap_worktree.logging_config import get_logger
from swap_worktree.services.git.executor import GitExecutor
from swap_worktree.services.git.resolver import WorktreeResolver
from swap_worktree.services.git.worktrees import WorktreeLocator

logger = get_logger(__name__)


def positional_words(words: Sequence[str]) -> list[str]:
    """Positional arguments among ``words`` (program name first), flags skipped."""
    positionals = []
    args = iter(words[1:])
    for word in args:
        if word == "--":
            positionals.extend(args)
            break
        if word.startswith("-"):
            continue
        positionals.append(word)
    return positionals


class BranchCompleter:
    """Suggests source branch names for the destination already typed."""

    def __init__(self, executor: Optional[GitExecutor] = None):
        executor = executor or GitExecutor()
        self.resolver = WorktreeResolver(executor)
        self.locator = WorktreeLocator(executor)

    def complete(self, words: Sequence[str], cword: int) -> list[str]:
        """Candidates for ``words[cword]``.

        Only the second positional (the source branch) is completed; for the
        destination directory the shell's own file completion is used.
        """
        current = words[cword] if 0 <= cword < len(words) else ""
        positionals = positional_words(words[:cword])
        if len(positionals) != 1:
            return []

        try:
            dest_dir = self.resolver.resolve(positionals[0])
            branches = self.locator.list_all_branches(dest_dir)
        except SwapWorktreeError as e:
            logger.debug(f"No completions: {e}")
            return []
        return [branch for branch in branches if branch.startswith(current)]


def handle_completion(mode: str, environ: Optional[Mapping[str, str]] = None,
                      completer: Optional[BranchCompleter] = None) -> int:
    """Serve one completion request. Returns the process exit code."""
    environ = os.environ if environ is None else environ

    if mode == COMPLETE_SOURCE_BASH:
        print(BASH_COMPLETION_SCRIPT, end="")
        return 0

    if mode == COMPLETE_BASH:
        try:
            words = shlex.split(environ.get("COMP_WORDS", ""))
            cword = int(environ.get("COMP_CWORD", "0"))
        except ValueError as e:
            logger.debug(f"Malformed completion request: {e}")
            return 0
        completer = completer or BranchCompleter()
        for candidate in completer.complete(words, cword):
            print(candidate)
        return 0

    logger.error(f"Unsupported completion mode '{mode}'")
    return 1
