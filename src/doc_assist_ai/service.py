"""
Document assistant facade and session view-state.

``DocumentAssistant`` exposes the three remote operations. ``AssistantSession``
sequences them for one user (translate, then resolve location, then read aloud
on demand) and keeps the status and history the front-end renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from doc_assist_ai.audio.decoder import decode_audio_data
from doc_assist_ai.audio.speech import SpeechSynthesizer
from doc_assist_ai.config import Settings
from doc_assist_ai.errors import DocAssistError, SpeechSynthesisError
from doc_assist_ai.history import HistoryStore
from doc_assist_ai.llm.base import LLMProvider
from doc_assist_ai.llm.factory import create_provider_from_settings
from doc_assist_ai.location.geocoder import LocationResolver
from doc_assist_ai.models import (
    DEFAULT_SAMPLE_RATE,
    AppStatus,
    AudioSamples,
    Highlight,
    HighlightCategory,
    HistoryItem,
    LocationInfo,
    TranslationMode,
    TranslationResult,
    UploadedFile,
)
from doc_assist_ai.translation.request import DEFAULT_DETAILED_BUDGET
from doc_assist_ai.translation.translator import DocumentTranslator


class DocumentAssistant:
    """Entry point for translation, geocoding and speech synthesis."""

    def __init__(
        self,
        provider: LLMProvider,
        *,
        detailed_budget: int = DEFAULT_DETAILED_BUDGET,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
    ):
        self.provider = provider
        self.sample_rate = sample_rate
        self.translator = DocumentTranslator(provider, detailed_budget=detailed_budget)
        self.resolver = LocationResolver(provider)
        self.synthesizer = SpeechSynthesizer(provider)

    @classmethod
    def from_settings(cls, settings: Settings) -> DocumentAssistant:
        """Build an assistant with the provider selected in settings."""
        return cls(
            create_provider_from_settings(settings),
            detailed_budget=settings.translation.detailed_thinking_budget,
            sample_rate=settings.audio.sample_rate,
        )

    async def translate_document(
        self,
        file_data: str,
        mime_type: str,
        target_language: str,
        mode: TranslationMode | str = TranslationMode.SPEED,
    ) -> TranslationResult:
        return await self.translator.translate_document(file_data, mime_type, target_language, mode)

    async def resolve_location(self, address: str) -> dict[str, Any]:
        """Coordinates and map link for an address; ``{}`` when the lookup fails."""
        return await self.resolver.resolve_coordinates(address)

    async def generate_speech(self, text: str) -> str:
        return await self.synthesizer.generate_speech(text)

    async def read_aloud(self, text: str) -> AudioSamples:
        """
        Synthesize and decode speech in one step.

        A payload that is not valid base64 fails like a missing one.
        """
        data = await self.generate_speech(text)
        try:
            return decode_audio_data(data, self.sample_rate)
        except ValueError as e:
            raise SpeechSynthesisError() from e

    async def close(self) -> None:
        await self.provider.close()


@dataclass
class AssistantSession:
    """
    View-state of one user session.

    Hard failures move the session to ``ERROR`` with the domain message and are
    re-raised; location lookups never fail the session.
    """

    assistant: DocumentAssistant
    store: HistoryStore | None = None
    status: AppStatus = AppStatus.IDLE
    error: str | None = None
    current_file: UploadedFile | None = None
    result: TranslationResult | None = None
    location: LocationInfo | None = None
    audio: AudioSamples | None = None
    history: list[HistoryItem] = field(default_factory=list)

    def reset(self) -> None:
        """Clear the current document and return to IDLE."""
        self.status = AppStatus.IDLE
        self.error = None
        self.current_file = None
        self.result = None
        self.location = None
        self.audio = None

    async def process_document(
        self,
        upload: UploadedFile,
        target_language: str,
        mode: TranslationMode | str = TranslationMode.SPEED,
        *,
        resolve_location: bool = True,
    ) -> HistoryItem:
        """
        Translate an uploaded file and record it in the history.

        Args:
            upload: The uploaded file.
            target_language: Language name to translate into.
            mode: ``speed`` or ``detailed``.
            resolve_location: Look up coordinates when an address was found.

        Returns:
            The appended HistoryItem.
        """
        self.reset()
        self.current_file = upload
        self.status = AppStatus.TRANSLATING
        self._log("INFO", "translate", f"Translating {upload.name}", {"language": target_language})

        try:
            result = await self.assistant.translate_document(
                upload.data, upload.mime_type, target_language, mode
            )
        except DocAssistError as e:
            self._fail("translate", e)
            raise
        self.result = result

        if result.address:
            self.location = LocationInfo(address=result.address)
            if resolve_location:
                self.status = AppStatus.RESOLVING_LOCATION
                self.location = LocationInfo(
                    address=result.address,
                    **await self.assistant.resolve_location(result.address),
                )
                self._log(
                    "INFO",
                    "locate",
                    "Resolved location" if self.location.has_coordinates else "No coordinates found",
                    {"address": result.address},
                )

        item = HistoryItem.from_result(upload.name, target_language, result, self.location)
        self.history.insert(0, item)
        if self.store is not None:
            self.store.add(item)

        self.status = AppStatus.READY
        return item

    async def read_aloud(self, text: str | None = None) -> AudioSamples:
        """
        Synthesize speech for text, defaulting to the current summary.

        Falls back to the translated text when there is no summary.
        """
        if text is None:
            if self.result is None:
                raise ValueError("No translated document to read")
            text = self.result.summary or self.result.text

        self.status = AppStatus.GENERATING_AUDIO
        try:
            self.audio = await self.assistant.read_aloud(text)
        except DocAssistError as e:
            self._fail("speech", e)
            raise

        self.status = AppStatus.READY if self.result is not None else AppStatus.IDLE
        self._log("INFO", "speech", "Generated audio", {"seconds": round(self.audio.duration, 2)})
        return self.audio

    def add_highlight(
        self,
        text: str,
        category: HighlightCategory | str = HighlightCategory.IMPORTANT,
    ) -> Highlight:
        """Attach a highlight to the latest history item."""
        if not self.history:
            raise ValueError("No history item to highlight")

        item = self.history[0]
        highlight = Highlight(text=text, category=HighlightCategory(category))
        item.highlights.append(highlight)
        if self.store is not None:
            self.store.update_highlights(item.id, item.highlights)
        return highlight

    def _fail(self, stage: str, error: DocAssistError) -> None:
        self.status = AppStatus.ERROR
        self.error = str(error)
        self._log("ERROR", stage, self.error, {"cause": repr(error.__cause__)})

    def _log(self, level: str, stage: str, message: str, context: dict[str, Any]) -> None:
        if self.store is not None:
            self.store.log(level=level, stage=stage, message=message, context=context)
