# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to logging, output, database and scanner limits

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from infobox_facts.core.vocabulary import OWL_THING
from infobox_facts.extraction.environment import MAX_ENVIRONMENT_SIZE


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="INFOBOX_FACTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Output Configuration
    output_dir: Path = Field(default=Path("facts"), description="Directory the theme TSV files are written to")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./infobox_facts.db", description="Database URL for async SQLite operations"
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    # Scanner Limits
    max_environment_size: int = Field(
        default=MAX_ENVIRONMENT_SIZE,
        gt=0,
        description="Maximum characters buffered for one template field before it is cut off",
    )
    generic_entity_class: str = Field(
        default=OWL_THING, description="Target class assumed for relations missing from the schema"
    )


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
