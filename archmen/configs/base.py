"""
Shared settings base.

Every settings group reads the same .env file and ignores variables that
belong to other groups. The runtime switches read by archmen.main live on
the root Settings object, not here, so prefixed groups such as POSTGRES_*
do not pick up stray ENVIRONMENT or DEBUG values.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings group sharing the project's .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
