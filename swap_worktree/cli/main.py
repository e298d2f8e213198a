"""Entry point for the swap-worktree command"""

import os
import sys

from swap_worktree.cli.args import parse_args
from swap_worktree.completion import handle_completion
from swap_worktree.config import Config
from swap_worktree.constants import COMPLETE_ENV_VAR
from swap_worktree.core import WorktreeSwapper
from swap_worktree.exceptions import SwapWorktreeError
from swap_worktree.logging_config import setup_logging
from swap_worktree.services.display_service import DisplayService


def main(argv=None):
    """Main entry point for the application."""
    completion_mode = os.environ.get(COMPLETE_ENV_VAR)
    if completion_mode:
        return handle_completion(completion_mode)

    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    config = Config(debug=parsed_args.debug, verbose=parsed_args.verbose)
    display = DisplayService(debug=config.debug)
    if config.debug:
        display.show_config(config)

    swapper = WorktreeSwapper(config, reporter=display)
    try:
        result = swapper.swap(parsed_args.destination_worktree_dir, parsed_args.source_branch_name)
    except SwapWorktreeError as e:
        display.show_error(e)
        return 1
    except KeyboardInterrupt:
        display.show_cancelled()
        return 1
    except Exception as e:
        display.show_error(e)
        if config.debug:
            display.show_traceback()
        return 1

    display.show_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
