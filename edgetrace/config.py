"""Configuration loading: TOML file, EDGETRACE_* environment, explicit overrides.

Priority, highest first: explicit overrides, environment, config file, defaults.

Example ``edgetrace.toml``::

    [tracing]
    service_name = "next-app"

    [edge]
    stage_name = "middleware"
    preserve_upstream = false

    [instrumentation]
    enable_patching = true
"""

from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from edgetrace.errors import ConfigError
from edgetrace.instrumentation.stage import DEFAULT_MATCHER

ENV_PREFIX = "EDGETRACE_"
CONFIG_FILENAME = "edgetrace.toml"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class TracingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    service_name: str = "edgetrace-app"


class EdgeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    stage_name: str = "middleware"
    preserve_upstream: bool = False
    matcher: Optional[str] = DEFAULT_MATCHER

    @field_validator("matcher")
    @classmethod
    def _check_matcher(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"matcher is not a valid regular expression: {e}") from e
        return value or None


class InstrumentationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enable_patching: bool = True
    log_correlation: bool = True


class EdgeTraceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tracing: TracingConfig = Field(default_factory=TracingConfig)
    edge: EdgeConfig = Field(default_factory=EdgeConfig)
    instrumentation: InstrumentationConfig = Field(default_factory=InstrumentationConfig)

    def to_flat_dict(self) -> Dict[str, Any]:
        flat: Dict[str, Any] = {}
        for section in _SECTIONS:
            flat.update(getattr(self, section).model_dump())
        return flat


_SECTIONS = {
    "tracing": TracingConfig,
    "edge": EdgeConfig,
    "instrumentation": InstrumentationConfig,
}

# flat key -> section
_KEY_SECTIONS = {
    key: section
    for section, model in _SECTIONS.items()
    for key in model.model_fields
}

# EDGETRACE_<NAME> -> (flat key, type)
_ENV_VARS = {
    "SERVICE_NAME": ("service_name", str),
    "STAGE_NAME": ("stage_name", str),
    "PRESERVE_UPSTREAM": ("preserve_upstream", bool),
    "MATCHER": ("matcher", str),
    "ENABLE_PATCHING": ("enable_patching", bool),
    "LOG_CORRELATION": ("log_correlation", bool),
}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError("Invalid boolean in environment", {"variable": name, "value": raw})


def find_config_file() -> Optional[str]:
    """Return ./edgetrace.toml or ~/.edgetrace/config.toml, whichever exists first."""
    candidates = [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / ".edgetrace" / "config.toml",
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Load a TOML config file as a nested dict.

    A missing file yields an empty dict.

    Raises:
        ConfigError: if the file is not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError("Invalid TOML config file", {"path": path, "error": str(e)}) from e


def flatten_config(nested: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten [section] tables into a single key -> value dict."""
    flat: Dict[str, Any] = {}
    for section, values in nested.items():
        if section not in _SECTIONS or not isinstance(values, dict):
            raise ConfigError("Unknown config section", {"section": section})
        for key, value in values.items():
            if key not in _SECTIONS[section].model_fields:
                raise ConfigError(
                    "Config key is not valid in this section",
                    {"section": section, "key": key, "expected_section": _KEY_SECTIONS.get(key)},
                )
            flat[key] = value
    return flat


def nest_config(flat: Dict[str, Any]) -> Dict[str, Any]:
    nested: Dict[str, Dict[str, Any]] = {}
    for key, value in flat.items():
        section = _KEY_SECTIONS.get(key)
        if section is None:
            raise ConfigError("Unknown config key", {"key": key})
        nested.setdefault(section, {})[key] = value
    return nested


def load_config_from_env(flat: bool = False) -> Dict[str, Any]:
    """
    Read EDGETRACE_* environment variables.

    Unset variables are omitted. Returns a flat dict when flat=True, otherwise
    one nested by section.
    """
    result: Dict[str, Any] = {}
    for suffix, (key, kind) in _ENV_VARS.items():
        name = ENV_PREFIX + suffix
        raw = os.environ.get(name)
        if raw is None:
            continue
        result[key] = _parse_bool(name, raw) if kind is bool else raw
    return result if flat else nest_config(result)


def load_config_with_priority(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Merge defaults, config file, environment and overrides into a flat dict.

    Overrides whose value is None are ignored.
    """
    merged = EdgeTraceConfig().to_flat_dict()

    path = config_file or find_config_file()
    if path:
        merged.update(flatten_config(load_toml_config(path)))

    merged.update(load_config_from_env(flat=True))

    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def validate_config(flat: Dict[str, Any]) -> EdgeTraceConfig:
    """
    Validate a flat config dict.

    Raises:
        ConfigError: on unknown keys or invalid values
    """
    try:
        return EdgeTraceConfig.model_validate(nest_config(flat))
    except ValidationError as e:
        raise ConfigError("Invalid configuration", {"errors": e.errors(include_url=False)}) from e


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> EdgeTraceConfig:
    """Load and validate configuration from every source."""
    return validate_config(load_config_with_priority(config_file, overrides))
