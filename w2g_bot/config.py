"""Configuration management for the W2G link bot.

Loads settings from environment variables (and an optional ``.env`` file)
into typed configuration sections. A single ``Config`` is built at startup
and handed to the components that need it; missing credentials abort startup.
"""

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


class BotConfig(BaseSettings):
    """Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token.
        bot_username: Bot handle without the leading ``@``, lowercased.
        webhook_domain: Public domain for webhook mode, None for polling.
        port: Server port for webhook mode.
        listen_host: Interface the webhook server binds to.
        handler_timeout: Time limit for a single update handler in seconds.
        log_level: Root logging level name.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    bot_token: str = Field(..., min_length=1, validation_alias="TELEGRAM_BOT_TOKEN")
    bot_username: str = Field(..., min_length=1, validation_alias="BOT_USERNAME")
    webhook_domain: str | None = Field(default=None, validation_alias="WEBHOOK_DOMAIN")
    port: int = Field(default=8000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    handler_timeout: float = Field(default=30.0, gt=0, validation_alias="HANDLER_TIMEOUT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("bot_username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        username = value.strip().replace("@", "").lower()
        if not username:
            raise ValueError("bot username must not be empty")
        return username

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if webhook domain is configured, False for polling mode.
        """
        return bool(self.webhook_domain)


class W2GConfig(BaseSettings):
    """Watch2Gether API settings.

    Attributes:
        api_key: Watch2Gether API key sent with every request.
        api_base: Base URL of the REST API.
        room_base: Base URL used to build public room links.
        timeout: HTTP request timeout in seconds.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_key: str = Field(..., min_length=1, validation_alias="W2G_API_KEY")
    api_base: str = Field(default="https://api.w2g.tv", validation_alias="W2G_API_BASE")
    room_base: str = Field(default="https://w2g.tv/rooms", validation_alias="W2G_ROOM_BASE")
    timeout: float = Field(default=20.0, gt=0, validation_alias="W2G_TIMEOUT")


class StoreConfig(BaseSettings):
    """Room store settings.

    Attributes:
        db_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    db_path: str = Field(default="data/bot.sqlite", validation_alias="SQLITE_PATH")


class Config:
    """Application configuration.

    Groups the bot, Watch2Gether and store sections. Construction validates
    every section at once so that all missing variables are reported together.
    """

    def __init__(self) -> None:
        """Load and validate all configuration sections.

        Raises:
            ConfigError: If a required variable is missing or a value is invalid.
        """
        errors: list[str] = []
        sections: dict[str, BaseSettings] = {}

        for name, section_cls in (("bot", BotConfig), ("w2g", W2GConfig), ("store", StoreConfig)):
            try:
                sections[name] = section_cls()
            except ValidationError as e:
                errors.extend(str(err["loc"][0]) for err in e.errors() if err["loc"])

        if errors:
            raise ConfigError(
                f"Missing or invalid configuration: {', '.join(sorted(set(errors)))}"
            )

        self.bot: BotConfig = sections["bot"]  # type: ignore[assignment]
        self.w2g: W2GConfig = sections["w2g"]  # type: ignore[assignment]
        self.store: StoreConfig = sections["store"]  # type: ignore[assignment]

    def as_dict(self) -> dict[str, Any]:
        """Dump all sections into plain dictionaries for the DI container."""
        return {
            "bot": self.bot.model_dump(),
            "w2g": self.w2g.model_dump(),
            "store": self.store.model_dump(),
        }
