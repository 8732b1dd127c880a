from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .http import HTTPSettings
from .logging import LoggingSettings


__all__ = ["Settings"]


class Settings(BaseSettings):
    """
    Configuration settings for hookhttp clients.

    Settings are loaded from environment variables prefixed with ``HOOKHTTP_``
    and from a ``.env`` file. Nested values use ``__`` as delimiter, e.g.
    ``HOOKHTTP_HTTP__BASE_URL`` or ``HOOKHTTP_LOGGING__LEVEL``.
    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOOKHTTP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP client configuration settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )
