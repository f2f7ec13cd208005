import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from contentmod.domain.moderation.model.value import ModerationAction


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by CONTENTMOD_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("CONTENTMOD_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class DatabaseConfig(BaseModel):
    """Document store configuration (nested in Config, uses env_nested_delimiter)."""

    model_config = ConfigDict(frozen=True)

    url: str = "sqlite+aiosqlite:///./contentmod.db"
    echo: bool = False
    create_tables: bool = True  # Create the documents table on startup


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from CONTENTMOD_LOG_FILE env var."""
        return os.environ.get("CONTENTMOD_LOG_FILE")


class EventsConfig(BaseModel):
    """Event channel for moderated/flagged notifications."""

    model_config = ConfigDict(frozen=True)

    channel_url: str = ""  # Empty = no channel, nothing is published
    auth_token: str = ""  # Sent as a bearer token when set


class HttpConfig(BaseModel):
    """Outbound HTTP settings shared by the remote classifiers and the event channel."""

    model_config = ConfigDict(frozen=True)

    timeout: float = 30.0
    connect_timeout: float = 5.0


class Config(BaseSettings):
    """Moderation settings, loaded once and passed by reference to every component."""

    # Moderated collection
    collection_path: str
    text_field: str
    moderation_field: str = "moderation"

    # Scoring backend
    provider: str = "local"  # "openai", "gemini" or "local"
    openai_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    blocklist_words: str = ""  # Comma-separated, used by the local engine

    # Policy
    action: ModerationAction = ModerationAction.FLAG
    sensitivity: float = Field(default=0.5, ge=0.0, le=1.0)

    enable_events: bool = False
    do_backfill: bool = False

    # These are BaseModel, so env_nested_delimiter handles their env vars
    events: EventsConfig = EventsConfig()
    database: DatabaseConfig = DatabaseConfig()
    http: HttpConfig = HttpConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "CONTENTMOD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows CONTENTMOD_DATABASE__URL override
        "frozen": True,
    }

    @property
    def events_enabled(self) -> bool:
        """Events are published only when enabled and a channel is configured."""
        return self.enable_events and bool(self.events.channel_url)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - CONTENTMOD_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so all loggers pick up
    the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
