"""Configuration: check request (source + version) and logging settings.

The check request is JSON as passed by the pipeline on stdin:
``{"source": {...}, "version": {"pr": "...", "commit": "...", "committed": "..."}}``.
Logging settings come from an optional YAML file and environment
(LOGGING_LEVEL, LOGGING_FORMAT).
"""

import os
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pullwatch.errors import ConfigError
from pullwatch.models import PullRequestState, Version


class Source(BaseModel):
    """Resource source: target repository and pull request filters."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    repository: str = Field(..., description="Target repo e.g. owner/name")
    access_token: str = Field(..., description="GitHub token used for API reads")
    v3_endpoint: str = Field(
        default="",
        description="REST API base URL; accepted only for compatibility with existing source configs, not used by check",
    )
    v4_endpoint: str = Field(default="", description="GraphQL API URL (GitHub Enterprise)")
    skip_ssl_verification: bool = Field(default=False, description="Disable TLS verification")

    states: List[PullRequestState] = Field(default_factory=list, description="PR states to check; empty means OPEN")
    disable_ci_skip: bool = Field(default=False, description="Do not skip PRs with [ci skip]/[skip ci]")
    base_branch: str = Field(default="", description="Only PRs targeting this branch")
    labels: List[str] = Field(default_factory=list, description="Only PRs with at least one of these labels")
    disable_forks: bool = Field(default=False, description="Skip PRs from forks")
    ignore_drafts: bool = Field(default=False, description="Skip draft PRs")
    required_review_approvals: int = Field(default=0, ge=0, description="Minimum approved reviews")
    paths: List[str] = Field(default_factory=list, description="Only PRs changing files matching these patterns")
    ignore_paths: List[str] = Field(default_factory=list, description="Skip PRs changing only these files")

    @field_validator("repository")
    @classmethod
    def _check_repository(cls, value: str) -> str:
        parts = value.split("/")
        if len(parts) != 2 or not all(p.strip() for p in parts):
            raise ValueError("repository must be in the form owner/name")
        return value

    @field_validator("states", mode="before")
    @classmethod
    def _normalize_states(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [s.strip().upper() if isinstance(s, str) else s for s in value]
        return value

    @field_validator("access_token")
    @classmethod
    def _check_token(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("access_token must be set")
        return value

    @field_validator("v3_endpoint", "v4_endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        if value and not value.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return value

    @model_validator(mode="after")
    def _check_endpoint_pair(self) -> "Source":
        if bool(self.v3_endpoint) != bool(self.v4_endpoint):
            raise ValueError("v3_endpoint and v4_endpoint must be set together")
        return self

    @property
    def effective_states(self) -> List[PullRequestState]:
        """States to query: configured states or OPEN only."""
        return list(self.states) or [PullRequestState.OPEN]

    @property
    def filters_paths(self) -> bool:
        return bool(self.paths or self.ignore_paths)


class CheckRequest(BaseModel):
    """Input of the check step."""

    model_config = ConfigDict(extra="ignore")

    source: Source
    version: Version = Field(default_factory=Version)

    @field_validator("version", mode="before")
    @classmethod
    def _null_version(cls, value: Any) -> Any:
        # First check: the pipeline sends null or omits the version
        return Version() if value is None else value


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            return os.environ.get(value[2:-1].strip(), value)
        if value.startswith("$"):
            return os.environ.get(value[1:].strip(), value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load app config from YAML file (if present) and environment."""
    if config_path is None or not config_path.is_file():
        return AppConfig()
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid config file {config_path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"invalid config file {config_path}: expected a mapping")
    raw = _substitute_env(raw)
    try:
        return AppConfig(logging=LoggingConfig(**(raw.get("logging") or {})))
    except ValidationError as e:
        raise ConfigError(f"invalid config file {config_path}: {e}") from e


def parse_request(text: str) -> CheckRequest:
    """Parse and validate a JSON check request."""
    try:
        return CheckRequest.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"invalid check request: {e}") from e
