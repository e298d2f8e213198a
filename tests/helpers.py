"""Test helpers shared by the swap-worktree test modules"""
from pathlib import Path

import git

from swap_worktree.services.git.executor import GitExecutor, GitOutput


class ScriptedGitExecutor(GitExecutor):
    """GitExecutor that answers from a script instead of running git.

    Responses are keyed by argument tuple, optionally narrowed to one
    directory. Unscripted commands succeed with empty output. Every call is
    recorded in ``calls`` as ``(directory, args)``.
    """

    MUTATING = {("stash", "push"), ("stash", "apply"), ("stash", "drop"), ("switch",)}

    def __init__(self):
        self.calls = []
        self.responses = {}

    def respond(self, *args, stdout="", stderr="", status=0, directory=None):
        key = (str(directory) if directory is not None else None, tuple(args))
        self.responses[key] = GitOutput(tuple(args), stdout, stderr, status)

    def run(self, directory, *args):
        self.calls.append((Path(directory), tuple(args)))
        for key in ((str(directory), tuple(args)), (None, tuple(args))):
            if key in self.responses:
                return self.responses[key]
        return GitOutput(tuple(args), "", "", 0)

    def calls_in(self, directory):
        return [args for path, args in self.calls if path == Path(directory)]

    def mutating_calls(self):
        return [
            (path, args)
            for path, args in self.calls
            if args[:2] in self.MUTATING or args[:1] in self.MUTATING
        ]


def porcelain(*entries, trailing_blank=True):
    """Build `git worktree list --porcelain` output from (path, branch) pairs."""
    blocks = []
    for index, (path, branch) in enumerate(entries):
        lines = [f"worktree {path}", f"HEAD {index:040d}"]
        lines.append(f"branch refs/heads/{branch}" if branch else "detached")
        blocks.append("\n".join(lines))
    text = "\n\n".join(blocks)
    return text + "\n\n" if trailing_blank else text



def branch_of(path) -> str:
    """Branch checked out in the worktree at ``path``."""
    repo = git.Repo(path)
    try:
        return repo.active_branch.name
    finally:
        repo.close()


def stash_hashes(path) -> list:
    output = git.Git(str(path)).execute(["git", "stash", "list", "--format=%H"])
    return [line for line in output.splitlines() if line.strip()]
