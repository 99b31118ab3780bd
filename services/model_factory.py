"""
Model Factory for Multi-Provider LLM Support.

Creates the chat model used for LLM-first question generation:
- Google (Gemini models, the default)
- Anthropic (Claude models)
- OpenAI (GPT models)

Each provider has different parameter names, which this factory hides.
"""

from typing import Any, Literal

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from config.settings import settings

# Type alias for supported providers
Provider = Literal["gemini", "anthropic", "openai"]

# Small, fast models are enough for single math questions
DEFAULT_MODELS: dict[str, str] = {
    "gemini": "gemini-1.5-flash",
    "anthropic": "claude-haiku-4-5-20251001",
    "openai": "gpt-4o-mini",
}


def get_default_model(provider: Provider) -> str:
    """Get the default model name for a provider."""
    return DEFAULT_MODELS.get(provider, DEFAULT_MODELS["gemini"])


def create_chat_model(
    provider: Provider | None = None,
    model: str | None = None,
    temperature: float | None = None,
    max_tokens: int | None = None,
    **kwargs: Any,
) -> BaseChatModel:
    """Factory function for creating LLM instances.

    Unset arguments fall back to the question generation settings.

    Args:
        provider: The LLM provider ("gemini", "anthropic", "openai")
        model: Model name (uses the configured or default model if not specified)
        temperature: Sampling temperature (0.0-1.0)
        max_tokens: Maximum tokens in response
        **kwargs: Additional provider-specific arguments

    Returns:
        A configured BaseChatModel instance

    Raises:
        ValueError: If provider is not supported or API key is missing

    Example:
        >>> model = create_chat_model()  # configured provider and model
        >>> model = create_chat_model("openai", model="gpt-4o", temperature=0.5)
    """
    provider = provider or settings.question_generation_provider
    if model is None:
        model = (
            settings.question_generation_model
            if provider == settings.question_generation_provider
            else get_default_model(provider)
        )
    temperature = settings.question_generation_temperature if temperature is None else temperature
    max_tokens = max_tokens or settings.question_generation_max_tokens

    if provider == "gemini":
        api_key = settings.google_api_key
        if not api_key:
            raise ValueError("GOOGLE_API_KEY is required for Gemini provider")

        return ChatGoogleGenerativeAI(
            model=model,
            max_output_tokens=max_tokens,
            temperature=temperature,
            google_api_key=api_key,
            **kwargs,
        )

    elif provider == "anthropic":
        api_key = settings.anthropic_api_key
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY is required for Anthropic provider")

        return ChatAnthropic(
            model_name=model,
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
            **kwargs,
        )

    elif provider == "openai":
        api_key = settings.openai_api_key
        if not api_key:
            raise ValueError("OPENAI_API_KEY is required for OpenAI provider")

        return ChatOpenAI(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            api_key=api_key,
            **kwargs,
        )

    else:
        raise ValueError(f"Unsupported provider: {provider}. Use 'gemini', 'anthropic', or 'openai'")
