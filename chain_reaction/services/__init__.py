"""Services for chain_reaction."""

from chain_reaction.services.step import (
    Step,
    StepResult,
    FunctionStep,
    JoinedStep,
    then,
    run_or_abort,
    run_pipeline,
)
from chain_reaction.services.pipeline import Pipeline
from chain_reaction.services.timed import TimedPipeline, TimingTable
from chain_reaction.services.config import ConfigManager, EngineSettings

__all__ = [
    "Step",
    "StepResult",
    "FunctionStep",
    "JoinedStep",
    "then",
    "run_or_abort",
    "run_pipeline",
    "Pipeline",
    "TimedPipeline",
    "TimingTable",
    "ConfigManager",
    "EngineSettings",
]
