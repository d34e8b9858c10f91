"""Core configuration - centralized config for the notion_mcp package.

All environment-based configuration should flow through this module.
Values are read from the process environment and from an optional
``.env`` file in the working directory.

Usage:
    from notion_mcp.core.config import get_config
    config = get_config()

    token = config.notion_api_key
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigException

DEFAULT_SYSTEMPROMPT_BASE_URL = "https://api.systemprompt.io/v1"


class CoreSettings(BaseSettings):
    """Core configuration settings for the Notion MCP server."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # CREDENTIALS
    # ==========================================================================

    systemprompt_api_key: str = Field(
        default="",
        description="API key for the systemprompt content service",
        validation_alias="SYSTEMPROMPT_API_KEY",
    )
    notion_api_key: str = Field(
        default="",
        description="Notion integration token",
        validation_alias="NOTION_API_KEY",
    )

    # ==========================================================================
    # CONTENT SERVICE SETTINGS
    # ==========================================================================

    systemprompt_base_url: str = Field(
        default=DEFAULT_SYSTEMPROMPT_BASE_URL,
        description="Base URL of the systemprompt content service",
        validation_alias="SYSTEMPROMPT_BASE_URL",
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP timeout in seconds for content service requests",
        validation_alias="NOTION_MCP_REQUEST_TIMEOUT",
    )

    # ==========================================================================
    # RUNTIME SETTINGS
    # ==========================================================================

    environment: str = Field(
        default="production",
        description="Runtime environment; 'test' disables process exit on fatal startup errors",
        validation_alias="NOTION_MCP_ENV",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="NOTION_MCP_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="NOTION_MCP_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="NOTION_MCP_LOG_FILE",
    )

    @property
    def is_test(self) -> bool:
        """True when running under the test environment."""
        return self.environment.lower() == "test"


# Required credentials, checked in this order at startup.
REQUIRED_ENV_VARS: tuple[tuple[str, str], ...] = (
    ("SYSTEMPROMPT_API_KEY", "systemprompt_api_key"),
    ("NOTION_API_KEY", "notion_api_key"),
)


def require_credentials(config: CoreSettings) -> None:
    """Fail fast if a required credential is missing.

    Raises:
        ConfigException: naming the first missing variable; ``missing_vars``
            lists every missing one.
    """
    missing = [env for env, attr in REQUIRED_ENV_VARS if not getattr(config, attr)]
    if missing:
        raise ConfigException(f"{missing[0]} environment variable is required", missing_vars=missing)


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: CoreSettings | None = None


def get_config() -> CoreSettings:
    """Get the global configuration instance.

    Returns:
        The singleton CoreSettings instance.
    """
    global _config
    if _config is None:
        _config = CoreSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
