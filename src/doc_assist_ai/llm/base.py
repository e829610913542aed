"""
Base classes for model providers.

Defines the abstract interface that all providers must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class DocumentRequest:
    """Provider-neutral multimodal request for the document analysis call."""

    file_data: str  # Base64 string
    mime_type: str
    instruction: str
    response_schema: dict[str, Any]
    thinking_budget: int = 0


@dataclass
class GroundingReference:
    """A citation/source object attached to a generated response."""

    web_uri: str | None = None
    title: str | None = None


@dataclass
class LLMResponse:
    """Text response from a provider."""

    content: str
    model: str = ""
    latency_ms: float = 0.0
    input_tokens: int = 0
    output_tokens: int = 0
    grounding: list[GroundingReference] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class SpeechResponse:
    """Audio response from a provider."""

    data: str | None  # Base64 16-bit little-endian PCM, None if absent
    model: str = ""
    latency_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)


class LLMProvider(ABC):
    """
    Abstract base class for model providers.

    Each method is a single request/response round-trip. Providers do not
    retry; failures propagate to the caller.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and identification."""
        ...

    @abstractmethod
    async def generate_document(self, request: DocumentRequest) -> LLMResponse:
        """
        Analyze an inline document and return structured JSON text.

        Args:
            request: File payload, instruction, output schema and thinking budget.

        Returns:
            LLMResponse whose content is the JSON text (may be empty).
        """
        ...

    @abstractmethod
    async def generate_grounded(self, prompt: str) -> LLMResponse:
        """
        Answer a text prompt with location/web grounding enabled.

        Returns:
            LLMResponse with free text and any grounding references.
        """
        ...

    @abstractmethod
    async def synthesize_speech(self, text: str) -> SpeechResponse:
        """
        Convert text to speech.

        Returns:
            SpeechResponse with base64 PCM data, or None data if the service sent none.
        """
        ...

    async def close(self) -> None:
        """Release client resources."""
        return None
