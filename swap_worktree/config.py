"""Configuration handling for swap-worktree"""

from dataclasses import dataclass

from swap_worktree.constants import DEFAULT_STASH_MESSAGE_PREFIX


@dataclass
class Config:
    """Configuration for swap-worktree with validation."""

    # Output modes
    debug: bool = False
    verbose: bool = False

    # Stash messages are "<prefix><branch>"; only for humans reading `git stash list`
    stash_message_prefix: str = DEFAULT_STASH_MESSAGE_PREFIX

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_stash_message_prefix()

    def _validate_stash_message_prefix(self):
        """Validate stash_message_prefix is a non-empty single token."""
        if not self.stash_message_prefix or not self.stash_message_prefix.strip():
            raise ValueError("stash_message_prefix cannot be empty")
        if any(ch.isspace() for ch in self.stash_message_prefix):
            raise ValueError(
                f"stash_message_prefix cannot contain whitespace, got '{self.stash_message_prefix}'"
            )

    def to_dict(self) -> dict:
        return {
            "debug": self.debug,
            "verbose": self.verbose,
            "stash_message_prefix": self.stash_message_prefix,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {"debug", "verbose", "stash_message_prefix"}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
