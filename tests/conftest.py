"""
Test Configuration and Fixtures
"""

from __future__ import annotations

import base64
import json
import struct

import pytest

from doc_assist_ai.history import HistoryStore
from doc_assist_ai.llm.base import (
    DocumentRequest,
    GroundingReference,
    LLMProvider,
    LLMResponse,
    SpeechResponse,
)
from doc_assist_ai.models import UploadedFile


def pcm_base64(values: list[int]) -> str:
    """Encode int16 values as base64 little-endian PCM."""
    return base64.b64encode(struct.pack(f"<{len(values)}h", *values)).decode("ascii")


class FakeProvider(LLMProvider):
    """In-memory provider returning canned responses and recording calls."""

    def __init__(
        self,
        document_text: str = "",
        grounded_text: str = "",
        grounding: list[GroundingReference] | None = None,
        audio: str | None = None,
    ):
        self.document_text = document_text
        self.grounded_text = grounded_text
        self.grounding = grounding or []
        self.audio = audio
        self.document_error: Exception | None = None
        self.grounded_error: Exception | None = None
        self.speech_error: Exception | None = None
        self.requests: list[DocumentRequest] = []
        self.prompts: list[str] = []
        self.spoken: list[str] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    async def generate_document(self, request: DocumentRequest) -> LLMResponse:
        self.requests.append(request)
        if self.document_error:
            raise self.document_error
        return LLMResponse(content=self.document_text, model="fake-translate")

    async def generate_grounded(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)
        if self.grounded_error:
            raise self.grounded_error
        return LLMResponse(content=self.grounded_text, model="fake-geo", grounding=self.grounding)

    async def synthesize_speech(self, text: str) -> SpeechResponse:
        self.spoken.append(text)
        if self.speech_error:
            raise self.speech_error
        return SpeechResponse(data=self.audio, model="fake-tts")

    async def close(self) -> None:
        self.closed = True


OFFICIAL_PAYLOAD = {
    "translation": "# सरकारी आदेश\n\nकृपया फॉर्म जमा करें।",
    "summary": "आपको शुक्रवार तक फॉर्म जमा करना है।",
    "actionItems": ["शुक्रवार तक जमा करें", "आधार कार्ड संलग्न करें"],
    "address": "Collectorate Office, MG Road, Bengaluru",
    "isOfficialDocument": True,
    "officialDetails": {
        "goNumber": "G.O.(Ms) No. 42",
        "department": "Revenue Department",
        "date": "12-03-2024",
        "subject": "Land records update",
    },
}


@pytest.fixture
def provider() -> FakeProvider:
    """Fake provider with an official document, coordinates and audio."""
    return FakeProvider(
        document_text=json.dumps(OFFICIAL_PAYLOAD),
        grounded_text="LAT: 12.9716, LNG: 77.5946",
        grounding=[
            GroundingReference(title="MG Road"),
            GroundingReference(web_uri="https://maps.google.com/?cid=123", title="Collectorate"),
        ],
        audio=pcm_base64([0, 16384, -16384, 32767]),
    )


@pytest.fixture
def upload() -> UploadedFile:
    return UploadedFile(
        name="order.png",
        mime_type="image/png",
        data=base64.b64encode(b"\x89PNG fake image").decode("ascii"),
    )


@pytest.fixture
def store(tmp_path):
    """History store in a temporary directory."""
    history_store = HistoryStore(tmp_path / "history.duckdb")
    yield history_store
    history_store.close()
