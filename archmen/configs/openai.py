"""
OpenAI configuration settings.

Chat-completion and embedding model parameters used by the chat
orchestrator and the embedding generator.

Dependencies: pydantic, pydantic_settings
System role: LLM provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from archmen.configs.base import BaseSettings

DEFAULT_SYSTEM_PROMPT = (
    "You are a knowledgeable guide specializing in Jungian psychology, specifically "
    "masculine archetypes and shadow work in relationships. Your role is to help men "
    "understand their relationship patterns through the lens of archetypes like the "
    "King, Warrior, Magician, Lover, Hero, Sage, Jester, and Caregiver. Be empathetic, "
    "non-judgmental, and focus on growth and self-awareness. Use clear, accessible "
    "language while maintaining psychological accuracy."
)


class OpenAISettings(BaseSettings):
    """OpenAI chat and embedding configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENAI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="OpenAI API key")
    chat_model: str = Field(
        default="gpt-4-turbo-preview",
        description="Chat-completion model identifier",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=2000, gt=0, description="Completion token limit")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Default embedding model identifier",
    )
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        description="Fixed system prompt prepended to every chat request",
    )
    fallback_response: str = Field(
        default="I apologize, but I was unable to generate a response.",
        description="Returned when the model produces empty content",
    )
