"""
Model provider abstraction layer.

Supports multiple backends:
- Gemini (default): Google Gen AI SDK with Maps grounding and prebuilt TTS voices
- OpenAI: any OpenAI-compatible endpoint
"""

from doc_assist_ai.llm.base import (
    DocumentRequest,
    GroundingReference,
    LLMProvider,
    LLMResponse,
    SpeechResponse,
)
from doc_assist_ai.llm.factory import create_llm_provider, create_provider_from_settings

__all__ = [
    "DocumentRequest",
    "GroundingReference",
    "LLMProvider",
    "LLMResponse",
    "SpeechResponse",
    "create_llm_provider",
    "create_provider_from_settings",
]
