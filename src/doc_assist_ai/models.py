"""
Data model for doc-assist-ai.

Plain records exchanged between the remote calls, the session view-state and
the history store.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

import numpy as np

DEFAULT_SAMPLE_RATE = 24000

NO_TEXT_PLACEHOLDER = "Could not extract text."
NO_SUMMARY_PLACEHOLDER = "No summary available."


class AppStatus(str, Enum):
    """View-state of an assistant session."""

    IDLE = "IDLE"
    TRANSLATING = "TRANSLATING"
    GENERATING_AUDIO = "GENERATING_AUDIO"
    RESOLVING_LOCATION = "RESOLVING_LOCATION"
    READY = "READY"
    ERROR = "ERROR"


class TranslationMode(str, Enum):
    """How much reasoning effort the remote model should spend."""

    SPEED = "speed"
    DETAILED = "detailed"


class HighlightCategory(str, Enum):
    """Highlight categories."""

    IMPORTANT = "important"
    VOCABULARY = "vocabulary"
    ACTION = "action"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class LanguageOption:
    """A target language offered to the user."""

    code: str
    name: str
    native_name: str


SUPPORTED_LANGUAGES: list[LanguageOption] = [
    LanguageOption("en", "English", "English"),
    LanguageOption("hi", "Hindi", "हिन्दी"),
    LanguageOption("bn", "Bengali", "বাংলা"),
    LanguageOption("te", "Telugu", "తెలుగు"),
    LanguageOption("mr", "Marathi", "मराठी"),
    LanguageOption("ta", "Tamil", "தமிழ்"),
    LanguageOption("ur", "Urdu", "اردو"),
    LanguageOption("gu", "Gujarati", "ગુજરાતી"),
    LanguageOption("kn", "Kannada", "ಕನ್ನಡ"),
    LanguageOption("ml", "Malayalam", "മലയാളം"),
    LanguageOption("or", "Odia", "ଓଡ଼ିଆ"),
    LanguageOption("pa", "Punjabi", "ਪੰਜਾਬੀ"),
]


def find_language(value: str) -> LanguageOption | None:
    """Look up a supported language by code, English name or native name."""
    needle = value.strip().lower()
    for option in SUPPORTED_LANGUAGES:
        if needle in (option.code, option.name.lower(), option.native_name.lower()):
            return option
    return None


@dataclass
class UploadedFile:
    """A document supplied by the user."""

    name: str
    mime_type: str
    data: str  # Base64 string


@dataclass
class OfficialDocInfo:
    """Metadata of a document classified as an official government record."""

    is_official: bool = True
    go_number: str | None = None
    department: str | None = None
    date: str | None = None
    subject: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OfficialDocInfo:
        return cls(
            is_official=bool(data.get("is_official", True)),
            go_number=data.get("go_number"),
            department=data.get("department"),
            date=data.get("date"),
            subject=data.get("subject"),
        )


@dataclass
class TranslationResult:
    """Normalized outcome of a translation call."""

    text: str = NO_TEXT_PLACEHOLDER
    summary: str = ""
    action_items: list[str] = field(default_factory=list)
    address: str | None = None
    official_info: OfficialDocInfo | None = None


@dataclass
class LocationInfo:
    """An address with optionally resolved coordinates and map link."""

    address: str
    latitude: float | None = None
    longitude: float | None = None
    map_uri: str | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LocationInfo:
        return cls(
            address=data.get("address", ""),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            map_uri=data.get("map_uri"),
        )


@dataclass
class AudioSamples:
    """Mono floating-point audio at a fixed sample rate."""

    samples: np.ndarray
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = 1

    @property
    def frame_count(self) -> int:
        return len(self.samples) // self.channels

    @property
    def duration(self) -> float:
        """Length in seconds."""
        return self.frame_count / self.sample_rate if self.sample_rate else 0.0


@dataclass
class Highlight:
    """A passage the user marked in a translation."""

    text: str
    category: HighlightCategory = HighlightCategory.IMPORTANT
    id: str = field(default_factory=_new_id)
    timestamp: int = field(default_factory=_now_ms)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Highlight:
        return cls(
            text=data["text"],
            category=HighlightCategory(data.get("category", "important")),
            id=data.get("id") or _new_id(),
            timestamp=data.get("timestamp") or _now_ms(),
        )


@dataclass
class HistoryItem:
    """A completed translation session."""

    file_name: str
    target_language: str
    text: str
    summary: str = ""
    action_items: list[str] = field(default_factory=list)
    location: LocationInfo | None = None
    official_info: OfficialDocInfo | None = None
    highlights: list[Highlight] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    timestamp: int = field(default_factory=_now_ms)

    @classmethod
    def from_result(
        cls,
        file_name: str,
        target_language: str,
        result: TranslationResult,
        location: LocationInfo | None = None,
    ) -> HistoryItem:
        return cls(
            file_name=file_name,
            target_language=target_language,
            text=result.text,
            summary=result.summary,
            action_items=list(result.action_items),
            location=location,
            official_info=result.official_info,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["highlights"] = [{**h, "category": h["category"].value} for h in data["highlights"]]
        return data
