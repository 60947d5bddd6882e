"""chain_reaction: compose fallible steps into short-circuiting pipelines.

    from chain_reaction import Pipeline
    from chain_reaction.steps import add, square

    Pipeline.input(5).then(add(2)).then(square()).run()  # StepResult(value=49)
"""

from chain_reaction.models.either import Either, Left, Right
from chain_reaction.models.exceptions import (
    ChainError,
    ConfigError,
    ConfigValidationError,
    MergeArityError,
    PipelineConsumedError,
    StepAbortedError,
)
from chain_reaction.models.failure import Failure, FailureKind
from chain_reaction.services.config import ConfigManager, EngineSettings, LogLevel
from chain_reaction.services.pipeline import Pipeline
from chain_reaction.services.step import (
    Chainable,
    FunctionStep,
    JoinedStep,
    Step,
    StepResult,
    as_step,
    run_or_abort,
    run_pipeline,
    step,
    then,
)
from chain_reaction.services.timed import TimedPipeline, TimingTable

__version__ = "0.1.0"

__all__ = [
    # Steps
    "Step",
    "StepResult",
    "Chainable",
    "FunctionStep",
    "JoinedStep",
    "as_step",
    "step",
    "then",
    "run_or_abort",
    "run_pipeline",
    # Pipelines
    "Pipeline",
    "TimedPipeline",
    "TimingTable",
    # Branch results
    "Either",
    "Left",
    "Right",
    # Failures
    "Failure",
    "FailureKind",
    # Config
    "ConfigManager",
    "EngineSettings",
    "LogLevel",
    # Exceptions
    "ChainError",
    "StepAbortedError",
    "MergeArityError",
    "PipelineConsumedError",
    "ConfigError",
    "ConfigValidationError",
]
