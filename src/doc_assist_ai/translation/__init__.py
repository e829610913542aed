"""Document translation: request formatting, response normalization and the translator."""

from doc_assist_ai.translation.normalizer import empty_result, normalize_translation
from doc_assist_ai.translation.request import (
    RESPONSE_SCHEMA,
    build_document_request,
    thinking_budget_for,
)
from doc_assist_ai.translation.translator import DocumentTranslator

__all__ = [
    "DocumentTranslator",
    "RESPONSE_SCHEMA",
    "build_document_request",
    "empty_result",
    "normalize_translation",
    "thinking_budget_for",
]
