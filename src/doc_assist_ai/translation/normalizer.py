"""
Normalization of the document analysis response.

Each optional field falls back independently, so a missing summary never
blocks action items or address extraction.
"""

from __future__ import annotations

import json
from typing import Any

from doc_assist_ai.models import (
    NO_SUMMARY_PLACEHOLDER,
    NO_TEXT_PLACEHOLDER,
    OfficialDocInfo,
    TranslationResult,
)


def empty_result() -> TranslationResult:
    """Canonical result when the model returned nothing."""
    return TranslationResult(
        text=NO_TEXT_PLACEHOLDER,
        summary="",
        action_items=[],
        address=None,
        official_info=None,
    )


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _official_info(payload: dict[str, Any]) -> OfficialDocInfo | None:
    # Only an explicit true counts; absent, false or junk means "not official"
    if payload.get("isOfficialDocument") is not True:
        return None

    details = payload.get("officialDetails")
    if not isinstance(details, dict):
        details = {}

    return OfficialDocInfo(
        is_official=True,
        go_number=_text(details.get("goNumber")),
        department=_text(details.get("department")),
        date=_text(details.get("date")),
        subject=_text(details.get("subject")),
    )


def normalize_payload(payload: Any) -> TranslationResult:
    """Map a decoded JSON payload onto a TranslationResult."""
    if not isinstance(payload, dict):
        payload = {}

    items = payload.get("actionItems")
    action_items = [item for item in items if isinstance(item, str)] if isinstance(items, list) else []

    return TranslationResult(
        text=_text(payload.get("translation")) or NO_TEXT_PLACEHOLDER,
        summary=_text(payload.get("summary")) or NO_SUMMARY_PLACEHOLDER,
        action_items=action_items,
        address=_text(payload.get("address")),
        official_info=_official_info(payload),
    )


def normalize_translation(text: str | None) -> TranslationResult:
    """
    Parse the model's JSON text into a TranslationResult.

    Args:
        text: Raw response text, possibly empty.

    Returns:
        The normalized result; the canonical empty result for empty text.

    Raises:
        json.JSONDecodeError: If the text is present but not valid JSON.
    """
    if not text or not text.strip():
        return empty_result()

    return normalize_payload(json.loads(text))
