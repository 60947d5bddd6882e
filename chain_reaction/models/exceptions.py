"""Exception hierarchy for chain_reaction.

These exceptions mark caller-contract violations. Ordinary step failures
never appear here: they travel inside a StepResult until the caller reads it.
"""

from typing import Any


class ChainError(Exception):
    """Base exception for all chain_reaction errors.

    Raised only for misuse of the engine, never for a failing step.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class StepAbortedError(ChainError):
    """A step run through run() produced a failure.

    The original step error is kept untouched on ``error``.
    """

    def __init__(self, error: Any) -> None:
        super().__init__(
            f"Error: {error!r}",
            suggestion="use act() to receive the failure as a StepResult",
        )
        self.error = error


class MergeArityError(ChainError):
    """merge() needs at least two elements to combine."""

    def __init__(self, count: int) -> None:
        super().__init__(f"Merge operation requires at least two items, got {count}")
        self.count = count


class PipelineConsumedError(ChainError):
    """Pipeline was already consumed by a combinator or run()."""

    pass


class ConfigError(ChainError):
    """Configuration is invalid or missing."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration value failed validation."""

    pass
