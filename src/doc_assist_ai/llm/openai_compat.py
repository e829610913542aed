"""
OpenAI-compatible provider.

Uses the OpenAI SDK against api.openai.com or any compatible gateway. Document
analysis goes through chat completions with a JSON schema response format,
geocoding through a web-search model (url citations become grounding
references) and speech through the audio endpoint in raw PCM.
"""

from __future__ import annotations

import base64
import time
from typing import Any

from openai import AsyncOpenAI

from doc_assist_ai.llm.base import (
    DocumentRequest,
    GroundingReference,
    LLMProvider,
    LLMResponse,
    SpeechResponse,
)


def to_json_schema(node: dict[str, Any]) -> dict[str, Any]:
    """Convert a neutral schema dict (with ``nullable``) into plain JSON Schema."""
    result: dict[str, Any] = {}
    for key, value in node.items():
        if key == "nullable":
            continue
        if key == "properties":
            result[key] = {name: to_json_schema(prop) for name, prop in value.items()}
        elif key == "items":
            result[key] = to_json_schema(value)
        else:
            result[key] = value
    if node.get("nullable"):
        result["type"] = [node["type"], "null"]
    return result


def _document_part(request: DocumentRequest) -> dict[str, Any]:
    data_url = f"data:{request.mime_type};base64,{request.file_data}"
    if request.mime_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": data_url}}
    return {"type": "file", "file": {"filename": "document", "file_data": data_url}}


class OpenAICompatibleProvider(LLMProvider):
    """
    OpenAI-compatible provider.

    The thinking budget has no direct equivalent; a non-zero budget sends the
    configured ``reasoning_effort`` when one is set.
    """

    MODELS = {
        "translation": "gpt-4o-mini",
        "geocoding": "gpt-4o-mini-search-preview",
        "speech": "gpt-4o-mini-tts",
    }

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.openai.com/v1",
        translation_model: str | None = None,
        geocoding_model: str | None = None,
        speech_model: str | None = None,
        voice: str = "alloy",
        reasoning_effort: str | None = None,
        timeout: float = 120.0,
    ):
        """
        Initialize OpenAI-compatible provider.

        Args:
            api_key: API key.
            base_url: API base URL.
            translation_model: Vision model for document analysis.
            geocoding_model: Search-enabled model for coordinate lookup.
            speech_model: Text-to-speech model.
            voice: Voice name.
            reasoning_effort: Effort sent in detailed mode, if any.
            timeout: Request timeout in seconds.
        """
        self._translation_model = translation_model or self.MODELS["translation"]
        self._geocoding_model = geocoding_model or self.MODELS["geocoding"]
        self._speech_model = speech_model or self.MODELS["speech"]
        self._voice = voice
        self._reasoning_effort = reasoning_effort

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        """Provider name."""
        return "openai"

    async def generate_document(self, request: DocumentRequest) -> LLMResponse:
        start_time = time.perf_counter()

        extra: dict[str, Any] = {}
        if request.thinking_budget > 0 and self._reasoning_effort:
            extra["reasoning_effort"] = self._reasoning_effort

        response = await self._client.chat.completions.create(
            model=self._translation_model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        _document_part(request),
                        {"type": "text", "text": request.instruction},
                    ],
                }
            ],  # type: ignore[arg-type]
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "document_analysis",
                    "schema": to_json_schema(request.response_schema),
                },
            },  # type: ignore[arg-type]
            **extra,
        )

        return self._to_response(response, self._translation_model, start_time)

    async def generate_grounded(self, prompt: str) -> LLMResponse:
        start_time = time.perf_counter()

        response = await self._client.chat.completions.create(
            model=self._geocoding_model,
            messages=[{"role": "user", "content": prompt}],
            web_search_options={},
        )

        return self._to_response(response, self._geocoding_model, start_time)

    async def synthesize_speech(self, text: str) -> SpeechResponse:
        start_time = time.perf_counter()

        response = await self._client.audio.speech.create(
            model=self._speech_model,
            voice=self._voice,  # type: ignore[arg-type]
            input=text,
            response_format="pcm",
        )
        audio = response.content

        return SpeechResponse(
            data=base64.b64encode(audio).decode("ascii") if audio else None,
            model=self._speech_model,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            metadata={"provider": "openai", "voice": self._voice},
        )

    async def close(self) -> None:
        await self._client.close()

    def _to_response(self, response: Any, model: str, start_time: float) -> LLMResponse:
        grounding: list[GroundingReference] = []
        content = ""
        finish_reason = None

        if response.choices:
            choice = response.choices[0]
            finish_reason = choice.finish_reason
            content = choice.message.content or ""
            for annotation in getattr(choice.message, "annotations", None) or []:
                citation = getattr(annotation, "url_citation", None)
                if citation is not None:
                    grounding.append(GroundingReference(web_uri=citation.url, title=citation.title))

        usage = response.usage
        return LLMResponse(
            content=content.strip(),
            model=model,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            grounding=grounding,
            metadata={"provider": "openai", "finish_reason": finish_reason},
        )
