"""Configuration loading: TOML file, environment variables and overrides.

Priority, lowest to highest: model defaults, config file, environment,
explicit overrides passed to ``load_config`` / ``honeytrace.init``.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from honeytrace.errors import ConfigError, InvalidConfigurationError
from honeytrace.exporter.client import DEFAULT_API_HOST

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "honeytrace.toml"
HOME_CONFIG_FILE_NAME = ".honeytrace.toml"

# env var -> (section, field)
ENV_VARS: Dict[str, tuple] = {
    "HONEYTRACE_SERVICE_NAME": ("tracing", "service_name"),
    "HONEYTRACE_SAMPLE_RATE": ("tracing", "sample_rate"),
    "HONEYTRACE_KEY_ATTRIBUTE": ("tracing", "key_attribute"),
    "HONEYTRACE_DATASET": ("exporter", "dataset"),
    "HONEYTRACE_WRITE_KEY": ("exporter", "write_key"),
    "HONEYTRACE_API_HOST": ("exporter", "api_host"),
    "HONEYTRACE_DEBUG": ("exporter", "debug"),
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


class TracingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    service_name: Optional[str] = None
    sample_rate: int = Field(default=1, ge=0)
    key_attribute: Optional[str] = None

    @field_validator("service_name")
    @classmethod
    def _service_name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("service_name must not be blank")
        return value

    @field_validator("sample_rate", mode="before")
    @classmethod
    def _sample_rate_is_integer(cls, value: Any) -> Any:
        # env vars arrive as digit strings; bools and floats must not be coerced
        if isinstance(value, (bool, float)):
            raise ValueError("sample_rate must be an integer")
        return value


class ExporterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    dataset: Optional[str] = None
    write_key: Optional[str] = None
    api_host: str = DEFAULT_API_HOST
    debug: bool = False
    global_fields: Dict[str, Any] = Field(default_factory=dict)


class BatchConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_queue_size: int = Field(default=2048, gt=0)
    max_export_batch_size: int = Field(default=512, gt=0)
    schedule_delay_millis: int = Field(default=5000, gt=0)


class HoneytraceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tracing: TracingConfig = Field(default_factory=TracingConfig)
    exporter: ExporterConfig = Field(default_factory=ExporterConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)


# flat override name -> section
_OVERRIDE_SECTIONS: Dict[str, str] = {}
for _section, _model in (("tracing", TracingConfig), ("exporter", ExporterConfig), ("batch", BatchConfig)):
    for _name in _model.model_fields:
        _OVERRIDE_SECTIONS[_name] = _section


def find_config_file() -> Optional[str]:
    """Return ./honeytrace.toml, else ~/.honeytrace.toml, else None."""
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / HOME_CONFIG_FILE_NAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Read a TOML config file.

    Returns an empty dict when the file does not exist.

    Raises:
        ConfigError: if the file is not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError("Invalid TOML config file", {"path": path, "error": exc}) from exc


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Dict[str, Any]]:
    """Collect settings from HONEYTRACE_* environment variables."""
    environ = os.environ if environ is None else environ
    sections: Dict[str, Dict[str, Any]] = {}
    for var, (section, name) in ENV_VARS.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        if name == "debug":
            value = value.strip().lower() in _TRUE_VALUES
        sections.setdefault(section, {})[name] = value
    return sections


def _merge(base: Dict[str, Any], layer: Mapping[str, Any]) -> None:
    for section, values in layer.items():
        if isinstance(values, Mapping) and isinstance(base.get(section), dict):
            base[section].update(values)
        else:
            base[section] = values


def _raise_for_validation(exc: PydanticValidationError) -> None:
    for error in exc.errors():
        if error.get("loc", ())[-1:] == ("sample_rate",):
            raise InvalidConfigurationError(
                "sample_rate must be a non-negative integer",
                {"sample_rate": error.get("input")},
            ) from exc
    raise ConfigError("Invalid configuration", {"errors": exc.error_count()}) from exc


def validate_config(data: Mapping[str, Any]) -> HoneytraceConfig:
    """Validate a nested config mapping."""
    try:
        return HoneytraceConfig.model_validate(data)
    except PydanticValidationError as exc:
        _raise_for_validation(exc)


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> HoneytraceConfig:
    """
    Load configuration with priority: overrides > env > file > defaults.

    Args:
        config_file: Explicit TOML path; discovered with find_config_file() when None
        overrides: Flat settings, e.g. {"sample_rate": 10, "dataset": "x"}
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigError: on unreadable files, unknown overrides or invalid values
    """
    merged: Dict[str, Any] = {"tracing": {}, "exporter": {}, "batch": {}}

    path = config_file or find_config_file()
    if path:
        logger.debug("Loading config file %s", path)
        _merge(merged, load_toml_config(path))

    _merge(merged, load_env_config(environ))

    override_layer: Dict[str, Dict[str, Any]] = {}
    for name, value in (overrides or {}).items():
        if value is None:
            continue
        section = _OVERRIDE_SECTIONS.get(name)
        if section is None:
            raise ConfigError("Unknown configuration option", {"option": name})
        override_layer.setdefault(section, {})[name] = value
    _merge(merged, override_layer)

    return validate_config(merged)
