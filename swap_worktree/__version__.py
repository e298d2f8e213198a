"""Version information for swap-worktree."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("swap-worktree")
except PackageNotFoundError:
    # Fallback when running from source without an installed distribution
    __version__ = "0.0.0+unknown"
