"""
Configuration management for the AITP end-to-end suite.

Settings are read from environment variables and an optional ``.env`` file
in the working directory. Required values are checked up front by
:meth:`Settings.validate_required`, so a missing variable fails the run at
start-up with its name instead of surfacing as a confusing browser error.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidConfigError, MissingConfigError
from .mail.client import DEFAULT_API_URL
from .roles import Role, StaleSessionPolicy


class MailSettings(BaseSettings):
    """MailSlurp API and inbox naming settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAILSLURP_",
        env_file=".env",
        extra="ignore",
    )

    api_key: Optional[str] = Field(None, description="MailSlurp API key")
    api_url: str = Field(
        default=DEFAULT_API_URL, description="MailSlurp API base URL"
    )
    main_user_inbox_name: Optional[str] = Field(
        None, description="Inbox name used as the cache key for the main user"
    )
    test_user_inbox_name: Optional[str] = Field(
        None, description="Inbox name used as the cache key for the test user"
    )
    admin_inbox_name: Optional[str] = Field(
        None, description="Inbox name for the admin user (optional)"
    )
    request_timeout: float = Field(
        default=30.0, description="HTTP timeout for mail API calls in seconds"
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")


class RunnerSettings(BaseSettings):
    """Browser and session bootstrap settings."""

    model_config = SettingsConfigDict(
        env_prefix="E2E_",
        env_file=".env",
        extra="ignore",
    )

    headless: bool = Field(default=True, description="Run browsers headless")
    slow_mo: int = Field(default=0, ge=0, description="Slow motion delay in ms")
    timeout: int = Field(
        default=30000, ge=0, description="Default Playwright timeout in ms"
    )
    storage_dir: Path = Field(
        default=Path("tests/storage"),
        description="Directory holding inbox and session caches",
    )
    stale_session_policy: StaleSessionPolicy = Field(
        default=StaleSessionPolicy.TRUST_CACHE,
        description="Behaviour when a stored session shows no logged-in user",
    )
    login_poll_attempts: int = Field(
        default=5, ge=1, description="Mailbox polls before giving up"
    )
    login_poll_interval: float = Field(
        default=2.0, ge=0, description="Seconds between mailbox polls"
    )
    identity_timeout: int = Field(
        default=5000, ge=0,
        description="How long to wait for the logged-in user label in ms",
    )
    redirect_timeout: int = Field(
        default=30000, ge=0,
        description="How long to wait for the post-login redirect in ms",
    )


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    base_url: Optional[str] = Field(
        None, description="Base URL of the application under test"
    )
    ai_leadership_url: Optional[str] = Field(
        None, description="Marketing site URL for outbound link assertions"
    )
    log_level: str = Field(default="INFO", description="Log level")

    mailslurp: MailSettings = Field(default_factory=MailSettings)
    runner: RunnerSettings = Field(default_factory=RunnerSettings)

    @field_validator("base_url", "ai_leadership_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalize URLs so paths can be appended with a single slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    def validate_required(self) -> None:
        """
        Validate that all required configuration is present.

        Raises:
            MissingConfigError: Naming the first missing variable.
        """
        required = {
            "BASE_URL": self.base_url,
            "AI_LEADERSHIP_URL": self.ai_leadership_url,
            "MAILSLURP_API_KEY": self.mailslurp.api_key,
            "MAILSLURP_MAIN_USER_INBOX_NAME": self.mailslurp.main_user_inbox_name,
            "MAILSLURP_TEST_USER_INBOX_NAME": self.mailslurp.test_user_inbox_name,
        }
        for key, value in required.items():
            if not value:
                raise MissingConfigError(key)

    def inbox_names(self) -> dict[Role, str]:
        """Map each role that has an inbox configured to its inbox name."""
        names = {
            Role.MAIN: self.mailslurp.main_user_inbox_name,
            Role.TEST: self.mailslurp.test_user_inbox_name,
            Role.ADMIN: self.mailslurp.admin_inbox_name,
        }
        return {role: name for role, name in names.items() if name}


def _invalid_config(error: ValidationError) -> InvalidConfigError:
    """Describe the first validation failure by its environment variable."""
    first = error.errors()[0]
    prefixes = {
        model.__name__: model.model_config.get("env_prefix") or ""
        for model in (Settings, MailSettings, RunnerSettings)
    }
    key = prefixes.get(error.title, "") + "_".join(str(part) for part in first["loc"])
    return InvalidConfigError(key.upper(), first.get("input"), first["msg"])


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached, validated settings.

    Returns:
        Settings instance.

    Raises:
        InvalidConfigError: If a variable holds an invalid value.
        MissingConfigError: If a required variable is not set.
    """
    try:
        settings = Settings()
    except ValidationError as e:
        raise _invalid_config(e) from e
    settings.validate_required()
    return settings


def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings instance.
    """
    get_settings.cache_clear()
    return get_settings()
