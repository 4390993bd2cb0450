"""Configuration management built on top of the policy primitives."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .policies import Policies, load_policies

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "default.yaml"
# relative paths resolve against the source checkout, or the cwd for installed copies
BASE_DIR = PROJECT_ROOT if (PROJECT_ROOT / "pyproject.toml").is_file() else Path.cwd()

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""

    result = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _apply_env_overrides(base: Dict[str, Any]) -> Dict[str, Any]:
    """Apply overrides from BOMTRACKER_SETTINGS__* environment variables."""

    prefix = "BOMTRACKER_SETTINGS__"
    result = dict(base)
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        path = key[len(prefix) :].lower().split("__")
        cursor = result
        for part in path[:-1]:
            cursor = cursor.setdefault(part, {})
        cursor[path[-1]] = value
    return result


class PathsConfig(BaseModel):
    """Filesystem layout for log output."""

    logs_dir: Path = Field(default=BASE_DIR / "logs")

    def ensure_exists(self) -> None:
        """Create directories backing every configured path if they are missing."""
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            path = Path(value)
            if not path.is_absolute():
                path = BASE_DIR / path
            path.mkdir(parents=True, exist_ok=True)
            object.__setattr__(self, field_name, path)


class Settings(BaseSettings):
    """Primary configuration object for the tracker.

    Precedence (highest first): explicit kwargs, environment variables
    prefixed with ``BOMTRACKER_``, nested overrides via
    ``BOMTRACKER_SETTINGS__`` variables, environment-specific YAML (e.g.
    ``production.yaml``), the default YAML file, and finally the class
    defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOMTRACKER_",
        validate_assignment=True,
        extra="ignore",
    )

    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Active runtime environment",
    )
    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    create_dirs: bool = Field(
        default=True,
        description="Create filesystem directories declared in `paths` during initialisation.",
    )
    log_level: str = Field(default="WARNING")
    policies: Policies

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @model_validator(mode="before")
    @classmethod
    def _bootstrap_from_files(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Load YAML files and merge with provided overrides."""

        config_dir = Path(values.get("config_dir") or DEFAULT_CONFIG_DIR)
        environment = values.get("environment") or os.getenv("BOMTRACKER_ENV", "development")
        base_config = _load_yaml_file(config_dir / "default.yaml")
        env_config = _load_yaml_file(config_dir / f"{environment}.yaml")
        merged = deep_merge(base_config, env_config)
        hydrated = _apply_env_overrides(merged)

        combined = deep_merge(hydrated, {k: v for k, v in values.items() if v is not None})

        policies_data = combined.pop("policies", None)
        if isinstance(policies_data, Policies):
            combined["policies"] = policies_data
            return combined

        if policies_data is None:
            policies_data = {
                key: combined.pop(key)
                for key in list(Policies.model_fields.keys())
                if combined.get(key) is not None
            }
        combined["policies"] = load_policies(policies_data)
        return combined

    @model_validator(mode="after")
    def _ensure_paths(self) -> "Settings":
        """Ensure filesystem paths exist when directory creation is enabled."""

        if self.create_dirs:
            self.paths.ensure_exists()
        return self

    @property
    def log_file(self) -> Path:
        return self.paths.logs_dir / "bomtracker.log"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "PathsConfig", "deep_merge"]
