"""
Model provider factory.

Creates the appropriate provider based on configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from doc_assist_ai.config import ProviderType
from doc_assist_ai.errors import ConfigurationError
from doc_assist_ai.llm.base import LLMProvider

if TYPE_CHECKING:
    from doc_assist_ai.config import Settings


def _normalize(provider_type: ProviderType | str) -> ProviderType:
    if isinstance(provider_type, ProviderType):
        return provider_type
    value = provider_type.lower().replace("_", "-")
    try:
        return ProviderType(value)
    except ValueError:
        valid = [p.value for p in ProviderType]
        raise ConfigurationError(
            f"Invalid provider type: {value}. Valid options: {valid}"
        ) from None


def create_llm_provider(
    provider_type: ProviderType | str,
    *,
    api_key: str | None = None,
    **kwargs: Any,
) -> LLMProvider:
    """
    Create a provider instance.

    Args:
        provider_type: Type of provider to create (gemini or openai).
        api_key: API key for the provider.
        **kwargs: Additional provider-specific options (model ids, voice, timeout).

    Returns:
        LLMProvider instance.

    Raises:
        ConfigurationError: If provider_type is invalid or the API key is missing.

    Examples:
        provider = create_llm_provider("gemini", api_key="...", voice="Kore")
    """
    provider_type = _normalize(provider_type)

    if not api_key:
        raise ConfigurationError(f"{provider_type.value} provider requires an API key")

    if provider_type == ProviderType.GEMINI:
        from doc_assist_ai.llm.gemini import GeminiProvider

        return GeminiProvider(api_key=api_key, **kwargs)

    from doc_assist_ai.llm.openai_compat import OpenAICompatibleProvider

    return OpenAICompatibleProvider(api_key=api_key, **kwargs)


def create_provider_from_settings(settings: Settings) -> LLMProvider:
    """Create the provider selected in settings with its configured models."""
    if settings.provider == ProviderType.OPENAI:
        cfg = settings.openai
        return create_llm_provider(
            ProviderType.OPENAI,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            translation_model=cfg.translation_model,
            geocoding_model=cfg.geocoding_model,
            speech_model=cfg.speech_model,
            voice=cfg.voice,
            reasoning_effort=cfg.reasoning_effort,
            timeout=cfg.timeout_seconds,
        )

    gemini = settings.gemini
    return create_llm_provider(
        ProviderType.GEMINI,
        api_key=gemini.api_key,
        translation_model=gemini.translation_model,
        geocoding_model=gemini.geocoding_model,
        speech_model=gemini.speech_model,
        voice=gemini.voice,
        timeout=gemini.timeout_seconds,
    )
