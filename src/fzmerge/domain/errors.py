"""fzmerge error types."""


class FzmergeError(Exception):
    """Base error for fzmerge."""


class ConfigError(FzmergeError):
    """Raised when configuration loading or validation fails."""


class ProviderError(FzmergeError):
    """Raised by a provider that cannot answer a command."""


class ScoringError(FzmergeError):
    """Raised when an unknown scoring function is requested."""
