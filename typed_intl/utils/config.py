"""Settings for typed-intl.

Pydantic-based configuration. Every field can be overridden through an
environment variable with the ``TYPED_INTL_`` prefix or a ``.env`` file.

Environment Variables:
- TYPED_INTL_PREFERRED_LANGUAGE: Initial preferred language (default: unset)
- TYPED_INTL_FALLBACK_LANGUAGE: Fallback when no user preferences exist (default: en)
- TYPED_INTL_LOG_LEVEL: Log level used by the CLI (default: WARNING)
- TYPED_INTL_JSON_LOGS: Emit JSON logs (default: false)
- TYPED_INTL_DEV_MODE: Colourful console logs (default: false)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from typed_intl.core.language_tag import language_tag


class Settings(BaseSettings):
    """typed-intl configuration.

    Example:
        >>> os.environ["TYPED_INTL_PREFERRED_LANGUAGE"] = "de-CH"
        >>> Settings().preferred_language
        'de-CH'
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPED_INTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    preferred_language: str | None = Field(
        default=None,
        description="Initial preferred language of the default context",
    )

    fallback_language: str = Field(
        default="en",
        description="Language used when no user preference list is available",
    )

    log_level: str = Field(
        default="WARNING",
        pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level configured by the CLI",
    )

    json_logs: bool = Field(default=False, description="Render logs as JSON")

    dev_mode: bool = Field(default=False, description="Colourful console logs")

    @field_validator("preferred_language")
    @classmethod
    def _canonical_preferred(cls, value: str | None) -> str | None:
        if not value:
            return None
        return language_tag(value).tag

    @field_validator("fallback_language")
    @classmethod
    def _canonical_fallback(cls, value: str) -> str:
        # InvalidTagError is a ValueError, so pydantic reports it as a validation error
        return language_tag(value).tag


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()
