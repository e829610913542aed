"""
Google Gemini provider.

Uses the google-genai SDK for structured document analysis, Google Maps
grounded geocoding and prebuilt-voice speech synthesis.
"""

from __future__ import annotations

import base64
import time
from typing import Any

from google import genai
from google.genai import types

from doc_assist_ai.llm.base import (
    DocumentRequest,
    GroundingReference,
    LLMProvider,
    LLMResponse,
    SpeechResponse,
)


def to_gemini_schema(node: dict[str, Any]) -> types.Schema:
    """Convert a neutral JSON-schema dict into a Gemini ``Schema``."""
    properties = node.get("properties")
    items = node.get("items")
    return types.Schema(
        type=types.Type(node["type"].upper()),
        description=node.get("description"),
        nullable=node.get("nullable"),
        properties={k: to_gemini_schema(v) for k, v in properties.items()} if properties else None,
        items=to_gemini_schema(items) if items else None,
        required=node.get("required"),
    )


class GeminiProvider(LLMProvider):
    """
    Google Gemini provider.

    Three models are used: one for document analysis, one that supports
    Google Maps grounding, and a TTS model that returns 24 kHz PCM.
    """

    MODELS = {
        "translation": "gemini-3-flash-preview",
        "geocoding": "gemini-2.5-flash",
        "speech": "gemini-2.5-flash-preview-tts",
    }

    def __init__(
        self,
        api_key: str,
        *,
        translation_model: str | None = None,
        geocoding_model: str | None = None,
        speech_model: str | None = None,
        voice: str = "Kore",
        timeout: float | None = 120.0,
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key.
            translation_model: Model for document analysis.
            geocoding_model: Model for Maps-grounded coordinate lookup.
            speech_model: Text-to-speech model.
            voice: Prebuilt voice name.
            timeout: Request timeout in seconds (None for the SDK default).
        """
        self._translation_model = translation_model or self.MODELS["translation"]
        self._geocoding_model = geocoding_model or self.MODELS["geocoding"]
        self._speech_model = speech_model or self.MODELS["speech"]
        self._voice = voice

        http_options = types.HttpOptions(timeout=int(timeout * 1000)) if timeout else None
        self._client = genai.Client(api_key=api_key, http_options=http_options)

    @property
    def name(self) -> str:
        """Provider name."""
        return "gemini"

    async def generate_document(self, request: DocumentRequest) -> LLMResponse:
        start_time = time.perf_counter()

        response = await self._client.aio.models.generate_content(
            model=self._translation_model,
            contents=types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(
                        data=base64.b64decode(request.file_data),
                        mime_type=request.mime_type,
                    ),
                    types.Part.from_text(text=request.instruction),
                ],
            ),
            config=types.GenerateContentConfig(
                thinking_config=types.ThinkingConfig(thinking_budget=request.thinking_budget),
                response_mime_type="application/json",
                response_schema=to_gemini_schema(request.response_schema),
            ),
        )

        return self._to_response(response, self._translation_model, start_time)

    async def generate_grounded(self, prompt: str) -> LLMResponse:
        start_time = time.perf_counter()

        response = await self._client.aio.models.generate_content(
            model=self._geocoding_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                tools=[types.Tool(google_maps=types.GoogleMaps())],
            ),
        )

        return self._to_response(response, self._geocoding_model, start_time)

    async def synthesize_speech(self, text: str) -> SpeechResponse:
        start_time = time.perf_counter()

        response = await self._client.aio.models.generate_content(
            model=self._speech_model,
            contents=[types.Content(role="user", parts=[types.Part.from_text(text=text)])],
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=types.SpeechConfig(
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self._voice),
                    ),
                ),
            ),
        )

        data: str | None = None
        mime_type = None
        if response.candidates:
            content = response.candidates[0].content
            if content and content.parts and content.parts[0].inline_data:
                inline = content.parts[0].inline_data
                mime_type = inline.mime_type
                if inline.data:
                    # The SDK hands back raw bytes
                    data = base64.b64encode(inline.data).decode("ascii")

        return SpeechResponse(
            data=data,
            model=self._speech_model,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            metadata={"provider": "gemini", "mime_type": mime_type, "voice": self._voice},
        )

    def _to_response(
        self,
        response: types.GenerateContentResponse,
        model: str,
        start_time: float,
    ) -> LLMResponse:
        usage = response.usage_metadata
        grounding: list[GroundingReference] = []
        finish_reason = None

        if response.candidates:
            candidate = response.candidates[0]
            finish_reason = candidate.finish_reason
            metadata = candidate.grounding_metadata
            if metadata and metadata.grounding_chunks:
                for chunk in metadata.grounding_chunks:
                    grounding.append(_to_reference(chunk))

        return LLMResponse(
            content=response.text or "",
            model=model,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            input_tokens=(usage.prompt_token_count or 0) if usage else 0,
            output_tokens=(usage.candidates_token_count or 0) if usage else 0,
            grounding=grounding,
            metadata={"provider": "gemini", "finish_reason": finish_reason},
        )


def _to_reference(chunk: types.GroundingChunk) -> GroundingReference:
    if chunk.web is not None:
        return GroundingReference(web_uri=chunk.web.uri, title=chunk.web.title)
    maps = getattr(chunk, "maps", None)
    return GroundingReference(title=maps.title if maps is not None else None)
