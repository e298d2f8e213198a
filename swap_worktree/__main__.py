import sys

from swap_worktree.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
