"""
Supabase auth configuration settings.

Dependencies: pydantic_settings
System role: Auth provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SupabaseSettings(BaseSettings):
    """Settings for the hosted auth provider."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SUPABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="http://localhost:54321", description="Supabase project URL")
    anon_key: str = Field(default="", description="Supabase anon (public) API key")
    auth_timeout_seconds: float = Field(default=10.0, description="Auth lookup timeout")
