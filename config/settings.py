"""
Configuration settings for the adaptive quiz agent.
Uses pydantic-settings for environment variable management.
"""

from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file BEFORE pydantic-settings initializes
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys (all optional - without a key the deterministic generator is used)
    google_api_key: str | None = Field(default=None, env="GOOGLE_API_KEY")
    anthropic_api_key: str | None = Field(default=None, env="ANTHROPIC_API_KEY")
    openai_api_key: str | None = Field(default=None, env="OPENAI_API_KEY")

    # Question Generation Model
    question_generation_provider: Literal["gemini", "anthropic", "openai"] = Field(
        default="gemini",
        env="QUESTION_GENERATION_PROVIDER"
    )
    question_generation_model: str = Field(
        default="gemini-1.5-flash",
        env="QUESTION_GENERATION_MODEL",
        description="Model used for LLM-first question generation"
    )
    question_generation_temperature: float = Field(
        default=0.7,
        env="QUESTION_GENERATION_TEMPERATURE"
    )
    question_generation_max_tokens: int = Field(
        default=2048,
        env="QUESTION_GENERATION_MAX_TOKENS"
    )

    # Quiz Engine
    max_novelty_attempts: int = Field(
        default=10,
        env="MAX_NOVELTY_ATTEMPTS",
        description="Candidates generated before a duplicate is accepted"
    )
    default_difficulty: Literal["Easy", "Medium", "Hard", "Extreme"] = Field(
        default="Medium",
        env="DEFAULT_DIFFICULTY"
    )

    # Feature Flags
    enable_llm_generation: bool = Field(default=True, env="ENABLE_LLM_GENERATION")

    # HTTP Server
    quiz_api_key: str | None = Field(default=None, env="QUIZ_API_KEY")
    allowed_origins: str = Field(
        default="http://localhost:3000",
        env="ALLOWED_ORIGINS",
        description="Comma-separated CORS origins"
    )
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=8000, env="PORT")
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    def provider_api_key(self, provider: str | None = None) -> str | None:
        """Return the API key configured for a provider (defaults to the generation provider)."""
        provider = provider or self.question_generation_provider
        return {
            "gemini": self.google_api_key,
            "anthropic": self.anthropic_api_key,
            "openai": self.openai_api_key,
        }.get(provider)


# Global settings instance
settings = Settings()
