"""Settings for report rendering and the CLI."""

from __future__ import annotations

import os
import socket
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .footer import UNKNOWN_BUILD, RunMetadata
from .models import CheckState
from .rendering import DEFAULT_SECTION_HEADING, DEFAULT_TITLE, ReportFormat
from .utils.logging import get_logger

CONFIG_ENV_VAR = "CHECK_REPORT_CONFIG"
DEFAULT_CONFIG_FILENAME = "check-report.yaml"


class ReportSettings(BaseSettings):
    """Report configuration using pydantic-settings.

    Every field can be set through a ``CHECK_REPORT_``-prefixed environment
    variable, a ``.env`` file or the YAML config file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHECK_REPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    report_title: str = Field(default=DEFAULT_TITLE, description="Report title line")
    section_heading: str = Field(
        default=DEFAULT_SECTION_HEADING,
        description="Heading prefix of each application section",
    )

    # Footer
    show_debug_info: bool = Field(
        default=False, description="Show pod, duration and build in the footer"
    )
    label_filter: str = Field(default="", description="Environment label filter")
    build_commit: str = Field(
        default=UNKNOWN_BUILD, description="Commit the check-report build came from"
    )
    # Resolved once when settings are created, then passed along explicitly
    hostname: str = Field(default_factory=socket.gethostname)

    # Gating
    fail_on: CheckState = Field(
        default=CheckState.FAILURE,
        description="Exit non-zero when the worst state is at least this severe",
    )

    max_workers: int | None = Field(
        default=None, ge=1, description="Parallel check producers (default: CPU count, max 8)"
    )
    log_level: str = Field(default="INFO", description="Console log level")

    @field_validator("fail_on", mode="before")
    @classmethod
    def _parse_fail_on(cls, value: Any) -> CheckState:
        return CheckState.parse(value)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"}:
            msg = f"Invalid log level: {value}"
            raise ValueError(msg)
        return level

    def report_format(self) -> ReportFormat:
        return ReportFormat(title=self.report_title, section_heading=self.section_heading)

    def run_metadata(self) -> RunMetadata:
        return RunMetadata(hostname=self.hostname, build_commit=self.build_commit)


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]
    candidates = []
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / DEFAULT_CONFIG_FILENAME)
    return candidates


def load_settings(config_path: Path | None = None, **overrides: Any) -> ReportSettings:
    """Load settings from the YAML config file and the environment.

    Values from the YAML file and explicit ``overrides`` take precedence over
    environment variables.

    Args:
        config_path: Explicit config file; otherwise ``$CHECK_REPORT_CONFIG``
            or ``./check-report.yaml`` when present
        **overrides: Field values that win over every other source

    Raises:
        ConfigurationError: If the file is malformed or a value is invalid
    """
    logger = get_logger(__name__)

    candidates = _candidate_paths(config_path)
    resolved = next((p for p in candidates if p.exists()), None)
    if config_path and resolved is None:
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            error_code=ErrorCode.CFG_LOAD_FAILED.value,
            context={"config_path": str(config_path)},
        )

    yaml_data: dict[str, Any] = {}
    if resolved:
        try:
            with open(resolved, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse config file: {resolved}",
                suggestion=(
                    "Check YAML syntax (indentation, colons, quotes). "
                    f"Original error: {e}"
                ),
                error_code=ErrorCode.CFG_LOAD_FAILED.value,
                context={"config_path": str(resolved)},
            ) from e
        if not isinstance(yaml_data, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {resolved}",
                error_code=ErrorCode.CFG_LOAD_FAILED.value,
                context={"config_path": str(resolved)},
            )
        logger.debug("config_yaml_loaded", config_path=str(resolved), keys_count=len(yaml_data))

    values = {**yaml_data, **{k: v for k, v in overrides.items() if v is not None}}
    try:
        settings = ReportSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            suggestion=str(e),
            error_code=ErrorCode.CFG_INVALID_VALUE.value,
            context={"config_path": str(resolved) if resolved else None},
        ) from e

    logger.debug(
        "config_loaded",
        config_path=str(resolved) if resolved else None,
        fail_on=settings.fail_on.bare_string(),
        show_debug_info=settings.show_debug_info,
    )
    return settings
