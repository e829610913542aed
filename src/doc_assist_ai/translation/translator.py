"""
Document translator using model providers.
"""

from __future__ import annotations

import logging

from doc_assist_ai.errors import TranslationError
from doc_assist_ai.llm.base import LLMProvider
from doc_assist_ai.models import TranslationMode, TranslationResult
from doc_assist_ai.translation.normalizer import normalize_translation
from doc_assist_ai.translation.request import DEFAULT_DETAILED_BUDGET, build_document_request

logger = logging.getLogger(__name__)


class DocumentTranslator:
    """Translates, summarizes and extracts fields from a document in one call."""

    def __init__(
        self,
        provider: LLMProvider,
        *,
        detailed_budget: int = DEFAULT_DETAILED_BUDGET,
    ):
        """
        Initialize document translator.

        Args:
            provider: Model provider.
            detailed_budget: Thinking budget used in detailed mode.
        """
        self._provider = provider
        self._detailed_budget = detailed_budget

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return self._provider.name

    async def translate_document(
        self,
        file_data: str,
        mime_type: str,
        target_language: str,
        mode: TranslationMode | str = TranslationMode.SPEED,
    ) -> TranslationResult:
        """
        Translate a document.

        Args:
            file_data: Base64-encoded file bytes.
            mime_type: MIME type of the file.
            target_language: Language name to translate into.
            mode: ``speed`` or ``detailed``.

        Returns:
            TranslationResult with every optional field defaulted.

        Raises:
            TranslationError: If the mode is unknown, the remote call fails or
                its JSON cannot be parsed.
        """
        try:
            request = build_document_request(
                file_data,
                mime_type,
                target_language,
                mode,
                detailed_budget=self._detailed_budget,
            )
            response = await self._provider.generate_document(request)
            result = normalize_translation(response.content)
        except Exception as e:
            logger.error("Translation error: %s", e, exc_info=True)
            raise TranslationError() from e

        logger.info(
            "Translated document to %s",
            target_language,
            extra={
                "provider": self._provider.name,
                "model": response.model,
                "latency_ms": round(response.latency_ms, 1),
                "thinking_budget": request.thinking_budget,
            },
        )
        return result
