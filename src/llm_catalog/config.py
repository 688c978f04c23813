"""Application Configuration

Type-safe configuration using Pydantic Settings for environment variable handling.

Patterns Demonstrated:
- Type-safe environment variable parsing with validation
- Sensible defaults so the catalog works with an empty environment
- Static table paths configurable, defaulting to the files shipped in the package
- Per-provider credentials looked up by naming convention, not declared fields
"""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

from .domain.capabilities import DEFAULT_PROVIDER_DEFAULTS_PATH
from .domain.vendor import DEFAULT_VENDOR_MAPPINGS_PATH

ENV_FILE = ".env"


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # =============================================================================
    # APPLICATION
    # =============================================================================

    app_name: str = Field(default="llm-catalog", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    app_description: str = Field(
        default="Normalized, filterable catalog of LLM provider models",
        alias="APP_DESCRIPTION",
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # =============================================================================
    # CATALOG
    # =============================================================================

    catalog_url: str = Field(default="https://models.dev/api.json", alias="CATALOG_URL")
    catalog_refresh_on_startup: bool = Field(default=False, alias="CATALOG_REFRESH_ON_STARTUP")

    # Static tables, loaded once at startup
    vendor_mappings_path: Path = Field(default=DEFAULT_VENDOR_MAPPINGS_PATH, alias="VENDOR_MAPPINGS_PATH")
    provider_defaults_path: Path = Field(default=DEFAULT_PROVIDER_DEFAULTS_PATH, alias="PROVIDER_DEFAULTS_PATH")

    # =============================================================================
    # HTTP TRANSPORT
    # =============================================================================

    http_timeout: float = Field(default=600, alias="ADAPTERS_HTTP_TIMEOUT")
    http_connect_timeout: float = Field(default=5, alias="ADAPTERS_HTTP_CONNECT_TIMEOUT")
    max_connections: int = Field(default=1000, alias="ADAPTERS_MAX_CONNECTIONS_PER_PROCESS")
    max_keepalive_connections: int = Field(default=100, alias="ADAPTERS_MAX_KEEPALIVE_CONNECTIONS_PER_PROCESS")

    # Test/proxy hook: every transport handle talks to this URL instead
    override_base_url: str | None = Field(default=None, alias="_ADAPTERS_OVERRIDE_ALL_BASE_URLS_")

    model_config = {"env_file": ENV_FILE, "case_sensitive": False, "extra": "ignore"}


def api_key_env_name(provider_id: str) -> str:
    """Environment variable holding a provider's key, e.g. ``google-vertex`` -> ``GOOGLE_VERTEX_API_KEY``."""
    return f"{provider_id.upper().replace('-', '_')}_API_KEY"


def get_api_key(provider_id: str, env_file: Path | str | None = ENV_FILE) -> str | None:
    """Provider credential; None when not configured.

    The process environment wins over ``env_file``, the same precedence
    ``Settings`` applies to its own fields.
    """
    name = api_key_env_name(provider_id)
    value = os.environ.get(name)
    if value is None and env_file is not None:
        value = dotenv_values(env_file).get(name)
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
