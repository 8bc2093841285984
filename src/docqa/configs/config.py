"""Configuration management using pydantic-settings.

**Not a singleton**: each call to ``get_app_config()`` re-reads config
from disk so edits to ``configs/config.yaml`` are picked up without
restarting.

Priority order (highest first):

1. Environment variables (``DOCQA_`` prefix, ``__`` for nesting)
2. ``.env`` dotenv file
3. Static YAML (``configs/config.yaml``)
4. Init defaults / field defaults
5. File secrets
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import (
    APIConfig,
    IngestionConfig,
    LoggingConfig,
    ServicesConfig,
    SessionConfig,
    TracingConfig,
)

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"
ENV_PREFIX = "DOCQA_"

DEFAULT_ENCODING = "utf-8"


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    api: APIConfig = Field(
        default_factory=APIConfig,
        description="HTTP server settings",
    )

    services: ServicesConfig = Field(
        default_factory=ServicesConfig,
        description="Answering and history service endpoints",
    )

    ingestion: IngestionConfig = Field(
        default_factory=IngestionConfig,
        description="Document ingestion settings",
    )

    session: SessionConfig = Field(
        default_factory=SessionConfig,
        description="User identity source",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="OpenTelemetry tracing settings",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            init_settings,
            file_secret_settings,
        )


def get_app_config() -> AppConfig:
    """Get the application configuration (re-read on every call)."""
    return AppConfig()


def get_services_config() -> ServicesConfig:
    return get_app_config().services


def get_ingestion_config() -> IngestionConfig:
    return get_app_config().ingestion


def get_session_config() -> SessionConfig:
    return get_app_config().session
