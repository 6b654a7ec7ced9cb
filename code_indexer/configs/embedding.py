"""
Embedding provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding model selection and retry policy
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EMBEDDING_DIMENSION = 1024


class EmbeddingSettings(BaseSettings):
    """Embedding model configuration (Gemini by default, Bedrock Titan optional)."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="google",
        description="Embedding provider: 'google' (Gemini) or 'bedrock' (Titan)",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID (gemini-embedding-001 supports 1024-dim output)",
    )
    dimension: int = Field(
        default=EMBEDDING_DIMENSION,
        ge=1,
        description="Vector dimension; must match the collection schema",
    )
    region: str = Field(default="us-east-1", description="AWS region for Bedrock")

    max_attempts: int = Field(
        default=2,
        ge=1,
        description="Attempts per chunk before it is dropped (1 disables retry)",
    )
    retry_initial_wait_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Initial backoff before retrying a failed chunk embedding",
    )
    retry_max_wait_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Backoff cap for chunk embedding retries",
    )
