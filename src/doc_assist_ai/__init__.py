"""
doc-assist-ai: accessible document translation with a hosted AI model.

This package provides tools for:
- Translating document images and PDFs into plain-language Markdown
- Summaries, action items and official-document (GO) metadata extraction
- Best-effort geocoding of addresses found in documents
- Text-to-speech with decoding of the returned PCM audio
"""

__version__ = "0.1.0"

from doc_assist_ai.audio import SpeechSynthesizer, decode_audio_data
from doc_assist_ai.config import ProviderType, Settings, load_config
from doc_assist_ai.errors import (
    ConfigurationError,
    DocAssistError,
    SpeechSynthesisError,
    TranslationError,
)
from doc_assist_ai.history import HistoryStore
from doc_assist_ai.location import LocationResolver
from doc_assist_ai.models import (
    AppStatus,
    AudioSamples,
    HistoryItem,
    LocationInfo,
    OfficialDocInfo,
    TranslationMode,
    TranslationResult,
    UploadedFile,
)
from doc_assist_ai.service import AssistantSession, DocumentAssistant
from doc_assist_ai.translation import DocumentTranslator, normalize_translation

__all__ = [
    # Config
    "Settings",
    "load_config",
    "ProviderType",
    # Errors
    "DocAssistError",
    "ConfigurationError",
    "TranslationError",
    "SpeechSynthesisError",
    # Models
    "AppStatus",
    "AudioSamples",
    "HistoryItem",
    "LocationInfo",
    "OfficialDocInfo",
    "TranslationMode",
    "TranslationResult",
    "UploadedFile",
    # Services
    "DocumentAssistant",
    "AssistantSession",
    "DocumentTranslator",
    "LocationResolver",
    "SpeechSynthesizer",
    "HistoryStore",
    "decode_audio_data",
    "normalize_translation",
]
