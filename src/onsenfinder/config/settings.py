"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (ONSENFINDER_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=2, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class EngineSettings(BaseModel):
    """Elasticsearch connection and index configuration."""

    hosts: list[str] = Field(default=["http://elasticsearch:9200"], description="Elasticsearch node URLs")
    index: str = Field(default="onsen", description="Index holding onsen documents")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="Encoded API key")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    request_timeout: float = Field(default=10.0, gt=0, description="Per-request transport timeout in seconds")
    max_retries: int = Field(default=3, ge=0, description="Transport-level retries on connection errors")
    retry_on_timeout: bool = Field(default=False, description="Retry requests that time out")
    analyzer: str = Field(default="kuromoji", description="Analyzer applied to name and address")
    search_size: int = Field(default=10000, ge=1, description="Maximum hits returned by a search")
    refresh: Literal["false", "true", "wait_for"] = Field(
        default="false",
        description="Refresh policy for index, update, and delete calls",
    )
    provision_on_startup: bool = Field(default=True, description="Create the index at startup if missing")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the ONSENFINDER_ prefix.
    Nested settings use double underscores: ONSENFINDER_SERVER__PORT=9090

    Example:
        ONSENFINDER_SERVER__PORT=9090
        ONSENFINDER_ENGINE__HOSTS='["http://localhost:9200"]'
        ONSENFINDER_ENGINE__REFRESH=wait_for
    """

    model_config = {
        "env_prefix": "ONSENFINDER_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="Onsen Finder", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
