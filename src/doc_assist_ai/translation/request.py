"""
Request formatting for the document analysis call.
"""

from __future__ import annotations

from typing import Any

from doc_assist_ai.llm.base import DocumentRequest
from doc_assist_ai.models import TranslationMode

DEFAULT_DETAILED_BUDGET = 2048

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "translation": {
            "type": "string",
            "description": "Full translated text in markdown",
        },
        "summary": {
            "type": "string",
            "description": "Simple summary for common people",
        },
        "actionItems": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of tasks or actions the user needs to perform",
        },
        "address": {"type": "string", "nullable": True},
        "isOfficialDocument": {"type": "boolean"},
        "officialDetails": {
            "type": "object",
            "properties": {
                "goNumber": {"type": "string", "nullable": True},
                "department": {"type": "string", "nullable": True},
                "date": {"type": "string", "nullable": True},
                "subject": {"type": "string", "nullable": True},
            },
            "nullable": True,
        },
    },
    "required": ["translation", "summary", "isOfficialDocument", "actionItems"],
}


def thinking_budget_for(
    mode: TranslationMode | str,
    detailed_budget: int = DEFAULT_DETAILED_BUDGET,
) -> int:
    """Map a translation mode to the remote model's thinking budget."""
    if TranslationMode(mode) == TranslationMode.SPEED:
        return 0
    return detailed_budget


def build_instruction(target_language: str) -> str:
    """Build the analysis instruction for a target language."""
    return f"""You are an intelligent document assistant specializing in accessibility.
1. Analyze the provided document (it could be a standard letter, a bill, or a Government Order/Form).
2. Extract all visible text and translate it accurately into {target_language}. Maintain the original formatting (lists, paragraphs) using Markdown.
3. Create a simplified, easy-to-understand "Summary" in {target_language} that explains the core message to someone with low literacy.
4. Detect if this is an Official Government Document (like a GO, Circular, or Form). If yes, extract:
   - GO Number / File Number
   - Department Name
   - Date
   - Subject / Abstract
5. Identify if there is a specific physical address mentioned (e.g., office location).
6. Extract a list of specific "Action Items" in {target_language}. These are things the user needs to do (e.g., "Submit by Friday", "Attach Aadhar Card", "Sign at the bottom").

Return the result in JSON format."""


def build_document_request(
    file_data: str,
    mime_type: str,
    target_language: str,
    mode: TranslationMode | str = TranslationMode.SPEED,
    *,
    detailed_budget: int = DEFAULT_DETAILED_BUDGET,
) -> DocumentRequest:
    """
    Build the multimodal analysis request.

    The file is passed through untouched; size and type checks are the
    caller's responsibility.

    Args:
        file_data: Base64-encoded file bytes.
        mime_type: MIME type of the file.
        target_language: Language name to translate into.
        mode: ``speed`` or ``detailed``.
        detailed_budget: Thinking budget used in detailed mode.

    Returns:
        DocumentRequest ready for a provider.
    """
    return DocumentRequest(
        file_data=file_data,
        mime_type=mime_type,
        instruction=build_instruction(target_language),
        response_schema=RESPONSE_SCHEMA,
        thinking_budget=thinking_budget_for(mode, detailed_budget),
    )
