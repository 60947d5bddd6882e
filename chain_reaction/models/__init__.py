"""Data models for chain_reaction."""

from .either import Either, Left, Right
from .failure import Failure, FailureKind
from .exceptions import (
    ChainError,
    StepAbortedError,
    MergeArityError,
    PipelineConsumedError,
    ConfigError,
    ConfigValidationError,
)

__all__ = [
    # Branch results
    "Either",
    "Left",
    "Right",
    # Failures
    "Failure",
    "FailureKind",
    # Exceptions
    "ChainError",
    "StepAbortedError",
    "MergeArityError",
    "PipelineConsumedError",
    "ConfigError",
    "ConfigValidationError",
]
