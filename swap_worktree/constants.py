"""Shared constants for swap-worktree."""

PROG_NAME = "swap-worktree"

# Ref namespace stripped from branch names before comparison or display
REFS_HEADS_PREFIX = "refs/heads/"

# Output of `git stash push` when there is nothing to save. Not an error.
NO_LOCAL_CHANGES = "No local changes to save"

DEFAULT_STASH_MESSAGE_PREFIX = "swap-stash-"

# One line per entry: "<commit-id>:<positional-reference>", most recent first
STASH_LIST_FORMAT = "--format=%H:%gd"

STEP_SEPARATOR = "---"

LOG_DIR_NAME = ".swap-worktree"
LOG_FILE_NAME = "swap-worktree.log"

# Shell completion
COMPLETE_ENV_VAR = "SWAP_WORKTREE_COMPLETE"
COMPLETE_SOURCE_BASH = "bash_source"
COMPLETE_BASH = "bash_complete"

BASH_COMPLETION_SCRIPT = """\
_swap_worktree_completion() {
    local IFS=$'\\n'
    COMPREPLY=( $(env COMP_WORDS="${COMP_WORDS[*]}" \\
                      COMP_CWORD=$COMP_CWORD \\
                      SWAP_WORKTREE_COMPLETE=bash_complete "$1") )
    return 0
}

complete -o default -F _swap_worktree_completion swap-worktree
"""
