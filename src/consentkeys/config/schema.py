"""Typed configuration schema and loader for the consentkeys package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, conint

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

PoolEntries = Annotated[list[Annotated[str, Field(min_length=1)]], Field(min_length=1)]


class SecretSettings(BaseModel):
    """Where the engine's secret key comes from."""

    secret_env: str
    secret: SecretStr | None = None

    model_config = ConfigDict(extra="forbid")


class EngineSettings(BaseModel):
    """Pseudonym engine settings."""

    default_data_type: str = Field(min_length=1)
    secret: SecretSettings

    model_config = ConfigDict(extra="forbid")


class PoolSettings(BaseModel):
    """Optional per-category overrides of the built-in lookup pools.

    Omitted categories keep the built-in entries.  Overriding any category
    changes every synthesized field that draws from it.
    """

    version: str = "custom"
    first_names: PoolEntries | None = None
    last_names: PoolEntries | None = None
    street_names: PoolEntries | None = None
    cities: PoolEntries | None = None
    states: PoolEntries | None = None

    model_config = ConfigDict(extra="forbid")


class SynthesizerSettings(BaseModel):
    """Fake profile synthesizer settings."""

    email_domain: str = Field(min_length=1)
    pools: PoolSettings | None = None

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Log level applied by the command line front-end."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)  # type: ignore[valid-type]
    engine: EngineSettings
    synthesizer: SynthesizerSettings
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML < environment
    variable for the engine secret.
    """

    with (
        importlib_resources.files("consentkeys.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    secret_env = cfg.engine.secret.secret_env
    if secret_env in environ:
        cfg.engine.secret.secret = SecretStr(environ[secret_env])

    return cfg


__all__ = [
    "ConfigModel",
    "SecretSettings",
    "EngineSettings",
    "PoolSettings",
    "SynthesizerSettings",
    "LoggingSettings",
    "deep_merge_dicts",
    "load_config",
]
