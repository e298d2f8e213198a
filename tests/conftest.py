"""Pytest fixtures for swap-worktree tests"""
import logging
import tempfile
from collections import namedtuple
from pathlib import Path

import git
import pytest

from swap_worktree.config import Config
from swap_worktree.constants import NO_LOCAL_CHANGES
from helpers import ScriptedGitExecutor, porcelain


ScriptedWorktrees = namedtuple("ScriptedWorktrees", ["dest", "src", "git"])
WorktreePair = namedtuple("WorktreePair", ["repo", "main_dir", "feature_dir"])


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() changes made by a test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def scripted_git():
    return ScriptedGitExecutor()


@pytest.fixture
def scripted_worktrees(temp_dir, scripted_git):
    """Two clean worktrees, 'main' (destination) and 'feature' (source), answered by a script."""
    dest = temp_dir / "main"
    src = temp_dir / "feature"
    dest.mkdir()
    src.mkdir()

    scripted_git.respond("rev-parse", "--is-inside-work-tree", stdout="true")
    scripted_git.respond("rev-parse", "--git-common-dir", stdout=".git")
    scripted_git.respond("rev-parse", "--show-toplevel", stdout=str(dest), directory=dest)
    scripted_git.respond("rev-parse", "--show-toplevel", stdout=str(src), directory=src)
    scripted_git.respond("symbolic-ref", "--short", "HEAD", stdout="main", directory=dest)
    scripted_git.respond("symbolic-ref", "--short", "HEAD", stdout="feature", directory=src)
    scripted_git.respond("worktree", "list", "--porcelain", stdout=porcelain((dest, "main"), (src, "feature")))
    scripted_git.respond("stash", "push", "-u", "-m", "swap-stash-main", stdout=NO_LOCAL_CHANGES)
    scripted_git.respond("stash", "push", "-u", "-m", "swap-stash-feature", stdout=NO_LOCAL_CHANGES)

    return ScriptedWorktrees(dest, src, scripted_git)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository on 'main' with a 'feature' branch one commit ahead."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits (and stashes)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    readme = repo_path / "README.md"
    readme.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    repo.git.checkout('-b', 'feature')
    feature_file = repo_path / "feature.txt"
    feature_file.write_text("Feature content\n")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature")
    repo.git.checkout('main')

    yield repo

    repo.close()


@pytest.fixture
def worktree_pair(git_repo, temp_dir):
    """Main worktree on 'main' plus a linked worktree on 'feature'."""
    main_dir = Path(git_repo.working_dir).resolve()
    feature_dir = temp_dir / "feature-wt"
    git_repo.git.worktree("add", str(feature_dir), "feature")
    return WorktreePair(git_repo, main_dir, feature_dir.resolve())

