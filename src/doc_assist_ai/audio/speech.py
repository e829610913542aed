"""
Text-to-speech via the model provider.
"""

from __future__ import annotations

import logging

from doc_assist_ai.errors import SpeechSynthesisError
from doc_assist_ai.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class SpeechSynthesizer:
    """Turns text into a base64 PCM payload."""

    def __init__(self, provider: LLMProvider):
        self._provider = provider

    async def generate_speech(self, text: str) -> str:
        """
        Synthesize speech for text.

        Returns:
            Base64-encoded 16-bit little-endian PCM.

        Raises:
            SpeechSynthesisError: If the call fails or no audio came back.
        """
        try:
            response = await self._provider.synthesize_speech(text)
            if not response.data:
                raise ValueError("No audio data received.")
        except Exception as e:
            logger.error("TTS error: %s", e, exc_info=True)
            raise SpeechSynthesisError() from e

        logger.info(
            "Generated speech for %d characters",
            len(text),
            extra={"provider": self._provider.name, "latency_ms": round(response.latency_ms, 1)},
        )
        return response.data
