"""
Object storage bucket configuration.

Settings for the bucket holding uploaded knowledge base source files.

Dependencies: pydantic_settings
System role: Object storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for knowledge base file storage."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="archmen-knowledge-base",
        description="Bucket for uploaded source documents",
    )
    region: str = Field(default="us-east-1", description="Bucket region")
    endpoint_url: str | None = Field(
        default=None,
        description="Custom S3-compatible endpoint (None for AWS)",
    )
    public_base_url: str | None = Field(
        default=None,
        description="Base URL for public object links (defaults to the bucket URL)",
    )
    key_prefix: str = Field(default="content", description="Object key prefix")
