"""Ranking configuration loader with validation and state machine."""

import hashlib
import time
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from vibefeed.config.constants import COMPONENT_CONFIG
from vibefeed.config.schemas import RankingConfig
from vibefeed.config.state_machine import ConfigState, ConfigStateMachine


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class ConfigLoader:
    """Loads and validates a ranking configuration file.

    Implements a state machine for configuration loading:
    UNLOADED -> LOADING -> VALIDATED -> READY

    A loader is single use; create a new one to load another file.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Identifier for the current run, bound to log lines.
        """
        self._run_id = run_id
        self._state_machine = ConfigStateMachine()
        self._file_checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state_machine.state

    @property
    def file_checksum(self) -> str | None:
        """Get the SHA-256 checksum of the loaded file."""
        return self._file_checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def load(self, config_path: Path) -> RankingConfig:
        """Load and validate a ranking.yaml file.

        Args:
            config_path: Path to the YAML file.

        Returns:
            Validated RankingConfig.

        Raises:
            ConfigValidationError: If the content does not match the schema.
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If YAML parsing fails.
            ConfigStateError: If called in invalid state.
        """
        start_time = time.perf_counter()
        self._state_machine.transition(ConfigState.LOADING)

        log = logger.bind(
            run_id=self._run_id,
            component=COMPONENT_CONFIG,
            file_path=str(config_path),
        )
        log.info("loading_config_file", phase="LOADING")

        try:
            content_bytes = config_path.read_bytes()
            self._file_checksum = hashlib.sha256(content_bytes).hexdigest()
            data = yaml.safe_load(content_bytes.decode("utf-8")) or {}
            config = RankingConfig.model_validate(data)
        except ValidationError as e:
            self._handle_validation_error(e, log)
            raise ConfigValidationError(
                self.validation_errors, str(config_path)
            ) from e
        except FileNotFoundError as e:
            self._record_failure("file", str(e), "file_not_found")
            log.error("config_file_not_found", phase="FAILED", error=str(e))
            raise
        except yaml.YAMLError as e:
            self._record_failure("yaml", str(e), "yaml_parse_error")
            log.error("config_yaml_parse_error", phase="FAILED", error=str(e))
            raise

        self._state_machine.transition(ConfigState.VALIDATED)
        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "config_validation_complete",
            phase="VALIDATED",
            file_sha256=self._file_checksum,
            config_validation_duration_ms=self._validation_duration_ms,
        )

        self._state_machine.transition(ConfigState.READY)
        log.info("config_ready", phase="READY", gravity=config.trending.gravity)
        return config

    def _handle_validation_error(
        self,
        error: ValidationError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Handle Pydantic validation error."""
        self._state_machine.transition(ConfigState.FAILED)

        for err in error.errors():
            self._validation_errors.append(
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]) or "root",
                    "msg": err["msg"],
                    "type": err["type"],
                }
            )

        log.error(
            "config_validation_failed",
            phase="FAILED",
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )

    def _record_failure(self, loc: str, msg: str, error_type: str) -> None:
        self._state_machine.transition(ConfigState.FAILED)
        self._validation_errors.append({"loc": loc, "msg": msg, "type": error_type})

    def get_validation_summary(self) -> dict[str, object]:
        """Get a summary of the validation process.

        Returns:
            Dictionary with validation summary.
        """
        return {
            "run_id": self._run_id,
            "state": self._state_machine.state.name,
            "states": [s.name for s in self._state_machine.history],
            "file_sha256": self._file_checksum,
            "validation_duration_ms": self._validation_duration_ms,
            "validation_error_count": len(self._validation_errors),
        }


def load_ranking_config(config_path: Path | None, run_id: str) -> RankingConfig:
    """Load a ranking configuration, falling back to defaults.

    Args:
        config_path: Path to ranking.yaml, or None for defaults.
        run_id: Identifier for the current run.

    Returns:
        Validated RankingConfig.
    """
    if config_path is None:
        return RankingConfig()
    return ConfigLoader(run_id=run_id).load(config_path)
