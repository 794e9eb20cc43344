"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.
No hardcoded values in code. All configuration comes from these sources.

Secrets (.env):
    OPENAI_API_KEY

Settings (YAML):
    settings/application.yaml  - App identity, server, cors, timeouts
    settings/logging.yaml      - Logging configuration
    settings/editor.yaml       - Local store, trash retention, save and export behaviour
    agents/summary_agent.yaml  - Summary model and generation parameters
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from scribe.backend.core.config_schema import (
    ApplicationSchema,
    EditorSchema,
    LoggingSchema,
    SummaryAgentSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def _load_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    return _load_yaml(find_project_root() / "config" / "settings" / filename)


def load_agent_config(filename: str) -> dict[str, Any]:
    """Load a YAML agent configuration file from config/agents/."""
    return _load_yaml(find_project_root() / "config" / "agents" / filename)


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only passwords, tokens, and keys."""

    openai_api_key: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _validate(schema_cls: type, raw: dict[str, Any], filename: str) -> Any:
    """Validate raw YAML against a schema. Returns typed model instance."""
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Missing keys, wrong types, or unknown fields raise a clear error
    immediately instead of causing cryptic KeyErrors later.

    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _validate(
            ApplicationSchema, load_yaml_config("application.yaml"), "application.yaml"
        )
        self._logging = _validate(
            LoggingSchema, load_yaml_config("logging.yaml"), "logging.yaml"
        )
        self._editor = _validate(
            EditorSchema, load_yaml_config("editor.yaml"), "editor.yaml"
        )
        self._summary_agent = _validate(
            SummaryAgentSchema,
            load_agent_config("summary_agent.yaml"),
            "summary_agent.yaml",
        )

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def editor(self) -> EditorSchema:
        """Editor state, trash lifecycle and export settings."""
        return self._editor

    @property
    def summary_agent(self) -> SummaryAgentSchema:
        """Summary model settings."""
        return self._summary_agent


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def resolve_project_path(configured_path: str) -> Path:
    """Resolve a configured path relative to the project root (absolute paths pass through)."""
    path = Path(configured_path)
    if path.is_absolute():
        return path
    return find_project_root() / path
