"""Ready-made steps for building example pipelines."""

from chain_reaction.steps.arithmetic import add, divide, double, square, to_string
from chain_reaction.steps.filesystem import list_directory

__all__ = ["add", "divide", "double", "square", "to_string", "list_directory"]
