"""
PostgreSQL connection settings (POSTGRES_* variables).

The knowledge base lives in a hosted Postgres with pgvector, reached via
asyncpg. Credentials go through sqlalchemy's URL builder so passwords with
reserved characters survive.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL

from archmen.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection and pool parameters for the async engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    db: str = Field(default="archmen", description="Database holding assessments and content chunks")

    pool_size: int = Field(default=10, ge=1)
    max_overflow: int = Field(default=20, ge=0)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = False

    sslmode: Literal["require", "disable"] = Field(
        default="require",
        description="Hosted Postgres needs TLS; disable for a local container",
    )

    @property
    def async_database_url(self) -> str:
        """asyncpg URL; asyncpg spells libpq's sslmode as the 'ssl' query parameter."""
        url = URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.sslmode == "require" else {},
        )
        return url.render_as_string(hide_password=False)
