"""
Domain errors raised to callers of doc-assist-ai.

Provider and parsing failures are chained as ``__cause__`` for diagnostics;
the messages themselves stay generic.
"""

from __future__ import annotations


class DocAssistError(Exception):
    """Base class for all doc-assist-ai errors."""

    default_message = "Document assistant error."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ConfigurationError(DocAssistError):
    """Invalid or incomplete configuration (unknown provider, missing API key)."""

    default_message = "Invalid configuration."


class TranslationError(DocAssistError):
    """The translation call failed or returned an unparseable payload."""

    default_message = "Failed to translate document."


class SpeechSynthesisError(DocAssistError):
    """The speech call failed or returned no audio."""

    default_message = "Failed to generate speech."
