"""Configuration — pydantic-settings models loaded from env vars and YAML."""

from onsenfinder.config.settings import Settings

__all__ = ["Settings"]
