"""Shared test fixtures for chain_reaction."""

import pytest
from pathlib import Path
from unittest.mock import Mock

from chain_reaction.models.failure import Failure
from chain_reaction.services.config import ConfigManager
from chain_reaction.services.step import StepResult


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Create a ConfigManager with temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return ConfigManager(config_dir=config_dir)


@pytest.fixture
def identity_step() -> Mock:
    """Step that echoes its input and counts calls."""
    return Mock(act=Mock(side_effect=StepResult.success))


@pytest.fixture
def boom() -> Failure:
    """A failure value to compare by identity."""
    return Failure.custom("boom")


@pytest.fixture
def failing_step(boom: Failure) -> Mock:
    """Step that always fails with ``boom``."""
    return Mock(act=Mock(return_value=StepResult.fail(boom)))
