"""Command-line argument parsing for swap-worktree."""

import argparse

from swap_worktree.__version__ import __version__
from swap_worktree.constants import COMPLETE_ENV_VAR, PROG_NAME


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Swap branches (and state) between two Git worktrees.",
        epilog=f"Shell completion: eval \"$({COMPLETE_ENV_VAR}=bash_source {PROG_NAME})\"",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose logging")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log git activity at INFO level")
    parser.add_argument("--version", action="version", version=f"{PROG_NAME} {__version__}")
    parser.add_argument(
        "destination_worktree_dir",
        metavar="DESTINATION_WORKTREE_DIR",
        help="Destination worktree directory",
    )
    parser.add_argument(
        "source_branch_name",
        metavar="SOURCE_BRANCH_NAME",
        help="Source branch to take over the destination worktree",
    )
    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
