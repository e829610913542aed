"""
Configuration management for doc-assist-ai.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from doc_assist_ai.models import TranslationMode

# Load .env file if present (before Settings initialization)
load_dotenv()


class ProviderType(str, Enum):
    """Available model providers."""

    GEMINI = "gemini"
    OPENAI = "openai"


class GeminiConfig(BaseModel):
    """Configuration for the Google Gemini provider."""

    api_key: str = Field(default="")
    translation_model: str = Field(default="gemini-3-flash-preview")
    # Maps grounding is only available on the 2.5 family
    geocoding_model: str = Field(default="gemini-2.5-flash")
    speech_model: str = Field(default="gemini-2.5-flash-preview-tts")
    voice: str = Field(default="Kore")
    timeout_seconds: float = Field(default=120.0, ge=5.0, le=600.0)


class OpenAIConfig(BaseModel):
    """Configuration for OpenAI-compatible providers."""

    api_key: str = Field(default="")
    base_url: str = Field(default="https://api.openai.com/v1")
    translation_model: str = Field(default="gpt-4o-mini")
    geocoding_model: str = Field(default="gpt-4o-mini-search-preview")
    speech_model: str = Field(default="gpt-4o-mini-tts")
    voice: str = Field(default="alloy")
    # Sent only in detailed mode; None leaves the model default
    reasoning_effort: str | None = Field(default=None)
    timeout_seconds: float = Field(default=120.0, ge=5.0, le=600.0)


class TranslationConfig(BaseModel):
    """Configuration for document translation."""

    target_language: str = Field(default="Hindi")
    mode: TranslationMode = Field(default=TranslationMode.SPEED)
    detailed_thinking_budget: int = Field(default=2048, ge=1, le=32768)
    resolve_location: bool = Field(default=True)


class AudioConfig(BaseModel):
    """Configuration for synthesized speech playback."""

    sample_rate: int = Field(default=24000, ge=8000, le=192000)


class HistoryConfig(BaseModel):
    """Configuration for translation history."""

    enabled: bool = Field(default=True)
    database_path: Path = Field(default=Path("./data/history.duckdb"))

    @field_validator("database_path")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory and make path absolute."""
        return Path(v).expanduser().resolve()


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO")
    file: Path | None = Field(default=Path("./logs/doc-assist.log"))
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    max_file_size_mb: int = Field(default=10, ge=1, le=100)
    backup_count: int = Field(default=5, ge=1, le=20)
    console: bool = Field(default=True)


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_ASSIST_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    provider: ProviderType = Field(default=ProviderType.GEMINI)
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable fallbacks for API keys."""
        super().__init__(**data)
        if not self.gemini.api_key:
            self.gemini.api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
        if not self.openai.api_key:
            self.openai.api_key = os.getenv("OPENAI_API_KEY", "")

    @property
    def api_key(self) -> str:
        """API key of the selected provider."""
        if self.provider == ProviderType.OPENAI:
            return self.openai.api_key
        return self.gemini.api_key

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Settings from a YAML file; a missing file yields the defaults."""
        path = Path(path)
        if not path.exists():
            return cls()

        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls(**_substitute_env_vars(data))


_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

CONFIG_FILENAMES = ("config.yaml", "config.yml", ".doc-assist.yaml")


def _substitute_env_vars(value: Any) -> Any:
    """Expand ${ENV_VAR} references anywhere in parsed YAML; unset variables become ''."""
    if isinstance(value, dict):
        return {key: _substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    if isinstance(value, str):
        return _ENV_REF.sub(lambda match: os.getenv(match.group(1), ""), value)
    return value


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load settings, layering YAML over environment variables and defaults.

    Without a path, the first of ``CONFIG_FILENAMES`` in the working directory
    is used; with none present only the environment applies.
    """
    if path is None:
        path = next((Path(name) for name in CONFIG_FILENAMES if Path(name).exists()), None)
    if path is None:
        return Settings()
    return Settings.from_yaml(path)


def create_default_config(path: Path | str = "config.yaml") -> Path:
    """Create a default configuration file."""
    default_config = """# doc-assist-ai configuration

# Model provider: "gemini" or "openai"
provider: "gemini"

gemini:
  api_key: "${GEMINI_API_KEY}"
  translation_model: "gemini-3-flash-preview"
  # Must support Google Maps grounding
  geocoding_model: "gemini-2.5-flash"
  speech_model: "gemini-2.5-flash-preview-tts"
  voice: "Kore"

openai:
  api_key: "${OPENAI_API_KEY}"
  base_url: "https://api.openai.com/v1"
  translation_model: "gpt-4o-mini"
  geocoding_model: "gpt-4o-mini-search-preview"
  speech_model: "gpt-4o-mini-tts"
  voice: "alloy"

translation:
  # Language name passed to the model (e.g. Hindi, Tamil, Telugu)
  target_language: "Hindi"
  # "speed" skips model reasoning, "detailed" spends a thinking budget
  mode: "speed"
  detailed_thinking_budget: 2048
  # Look up coordinates for addresses found in the document
  resolve_location: true

audio:
  sample_rate: 24000

history:
  enabled: true
  database_path: "./data/history.duckdb"

logging:
  level: "INFO"
  file: "./logs/doc-assist.log"
"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(default_config)
    return path
