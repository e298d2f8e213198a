"""Renders swap events and results to the terminal"""
from rich.console import Console

from swap_worktree.config import Config
from swap_worktree.exceptions import CriticalSwapError, SwapWorktreeError
from swap_worktree.logging_config import get_logger
from swap_worktree.models.swap import SwapEvent, SwapResult

# Paths and git output are printed verbatim: no markup, emoji codes or wrapping
console = Console(highlight=False, soft_wrap=True, emoji=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)
logger = get_logger(__name__)


class DisplayService:
    """Turns the swapper's event stream into terminal output.

    Warnings always go to stderr. Progress lines go to stdout only in debug
    mode; otherwise a successful swap prints a single summary line.
    """

    def __init__(self, debug: bool = False):
        self.debug_mode = debug

    def __call__(self, event: SwapEvent) -> None:
        self.show_event(event)

    def show_event(self, event: SwapEvent) -> None:
        if event.is_warning:
            err_console.print(event.message, style="yellow", markup=False)
        elif self.debug_mode:
            console.print(event.message, markup=False)

    def show_summary(self, result: SwapResult) -> None:
        # In debug mode the closing "Worktree swap complete." event is the summary
        if not self.debug_mode:
            console.print(result.summary(), markup=False)
        if result.has_warnings:
            logger.debug(f"Swap finished with {len(result.warnings)} warning(s)")

    def show_error(self, error: BaseException) -> None:
        style = "bold red" if isinstance(error, CriticalSwapError) else "red"
        err_console.print(f"Error: {error}", style=style, markup=False)
        if isinstance(error, SwapWorktreeError):
            logger.debug(f"Swap ended in state {error.outcome.value}")

    def show_config(self, config: Config) -> None:
        console.print("[yellow]Debug mode enabled[/yellow]")
        console.print("[yellow]Configuration:[/yellow]")
        for key, value in config.to_dict().items():
            console.print(f"  {key}: {value}", markup=False)

    def show_cancelled(self) -> None:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")

    def show_traceback(self) -> None:
        err_console.print_exception()
