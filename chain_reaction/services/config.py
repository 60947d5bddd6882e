"""Configuration management for chain_reaction.

Single JSON file plus environment overrides:
- ~/.config/chain-reaction/config.json holds saved engine settings
- CHAIN_REACTION_LOG_LEVEL / CHAIN_REACTION_LOG_TIMINGS override the file

Resolution order: explicit override > environment > file > defaults
"""

import json
import logging
import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..models.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "CHAIN_REACTION_LOG_LEVEL"
ENV_LOG_TIMINGS = "CHAIN_REACTION_LOG_TIMINGS"

MAX_TIMING_PRECISION = 9
_TRUTHY = {"1", "true", "yes", "on"}


def _secure_write_json(path: Path, data: dict) -> None:
    """Write JSON to file with restricted permissions (0600)."""
    content = json.dumps(data, indent=2)
    # Write to temp file first, then rename for atomicity
    temp_path = path.with_suffix(".tmp")
    try:
        fd = os.open(str(temp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, content.encode())
        finally:
            os.close(fd)
        temp_path.replace(path)
    except OSError:
        # Fallback: write normally then chmod
        path.write_text(content)
        try:
            path.chmod(stat.S_IRUSR | stat.S_IWUSR)  # 0600
        except OSError:
            pass  # chmod unsupported on this filesystem


class LogLevel(Enum):
    """Logging threshold for the command-line driver."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        """The matching ``logging`` module level."""
        return getattr(logging, self.name)


@dataclass
class EngineSettings:
    """Settings read by the timed pipeline and the CLI."""

    log_level: LogLevel = LogLevel.WARNING
    # Log each recorded timing at INFO
    log_timings: bool = False
    # Decimal places when printing timings
    timing_precision: int = 6

    def validate(self) -> None:
        """Raise ConfigValidationError for out-of-range values."""
        if not 0 <= self.timing_precision <= MAX_TIMING_PRECISION:
            raise ConfigValidationError(
                f"timing_precision must be between 0 and {MAX_TIMING_PRECISION}, "
                f"got {self.timing_precision}"
            )

    def to_dict(self) -> dict:
        result: dict = {}
        if self.log_level != LogLevel.WARNING:
            result["log_level"] = self.log_level.value
        if self.log_timings:
            result["log_timings"] = True
        if self.timing_precision != 6:
            result["timing_precision"] = self.timing_precision
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "EngineSettings":
        log_level = LogLevel.WARNING
        if data.get("log_level"):
            try:
                log_level = LogLevel(str(data["log_level"]).lower())
            except ValueError:
                logger.warning(f"Unknown log_level {data['log_level']!r}, using warning")

        return cls(
            log_level=log_level,
            log_timings=bool(data.get("log_timings", False)),
            timing_precision=int(data.get("timing_precision", 6)),
        )

    def merge_with(self, override: "EngineSettings") -> "EngineSettings":
        """Return new settings with override values taking precedence.

        Only non-default override values win, so a partial override keeps
        the rest of these settings.
        """
        return EngineSettings(
            log_level=override.log_level if override.log_level != LogLevel.WARNING else self.log_level,
            log_timings=override.log_timings or self.log_timings,
            timing_precision=override.timing_precision if override.timing_precision != 6 else self.timing_precision,
        )

    def updated(self, data: dict) -> "EngineSettings":
        """Return new settings with every key present in ``data`` replaced.

        Unlike merge_with, a key set back to its default value still wins.
        """
        current = {
            "log_level": self.log_level.value,
            "log_timings": self.log_timings,
            "timing_precision": self.timing_precision,
        }
        current.update(data)
        return EngineSettings.from_dict(current)


def settings_from_env(environ: dict | None = None) -> dict:
    """Settings keys set by CHAIN_REACTION_* environment variables.

    Only variables that are present appear in the result, so a value equal
    to the default still overrides the config file.
    """
    environ = os.environ if environ is None else environ
    data: dict = {}
    if environ.get(ENV_LOG_LEVEL):
        level = environ[ENV_LOG_LEVEL].strip().lower()
        if level in {member.value for member in LogLevel}:
            data["log_level"] = level
        else:
            logger.warning(f"Ignoring unknown {ENV_LOG_LEVEL} value {environ[ENV_LOG_LEVEL]!r}")
    if environ.get(ENV_LOG_TIMINGS):
        data["log_timings"] = environ[ENV_LOG_TIMINGS].strip().lower() in _TRUTHY
    return data


class ConfigManager:
    """Loads and saves engine settings."""

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path.home() / ".config" / "chain-reaction"
        self._config_dir = config_dir
        self._config_file = config_dir / "config.json"
        self._settings: EngineSettings | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def settings(self) -> EngineSettings:
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def _load_settings(self) -> EngineSettings:
        """Load settings from disk."""
        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load {self._config_file}, using defaults: {e}")
                return EngineSettings()
            if not isinstance(data, dict):
                logger.warning(
                    f"Failed to load {self._config_file}, using defaults: "
                    f"expected a JSON object, got {type(data).__name__}"
                )
                return EngineSettings()
            try:
                return EngineSettings.from_dict(data)
            except (TypeError, ValueError) as e:
                logger.warning(f"Failed to load {self._config_file}, using defaults: {e}")
        return EngineSettings()

    def save_settings(self, settings: EngineSettings) -> None:
        """Save settings to disk with secure permissions."""
        settings.validate()
        self._config_dir.mkdir(parents=True, exist_ok=True)
        _secure_write_json(self._config_file, settings.to_dict())
        self._settings = settings

    def resolve(
        self,
        override: EngineSettings | None = None,
        environ: dict | None = None,
    ) -> EngineSettings:
        """Resolve settings through all tiers.

        Resolution order: override > environment > file > defaults

        Raises:
            ConfigValidationError: The resolved settings are out of range.
        """
        resolved = self.settings.updated(settings_from_env(environ))
        if override:
            resolved = resolved.merge_with(override)
        resolved.validate()
        return resolved
