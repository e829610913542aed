"""
Configuration, provider factory and logging tests
"""

import logging

import pytest

from doc_assist_ai.config import (
    LoggingConfig,
    ProviderType,
    Settings,
    create_default_config,
    load_config,
)
from doc_assist_ai.errors import ConfigurationError
from doc_assist_ai.llm import create_llm_provider, create_provider_from_settings
from doc_assist_ai.llm.gemini import GeminiProvider, to_gemini_schema
from doc_assist_ai.llm.openai_compat import OpenAICompatibleProvider, to_json_schema
from doc_assist_ai.logging_setup import setup_logging
from doc_assist_ai.models import TranslationMode
from doc_assist_ai.translation import RESPONSE_SCHEMA


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("GEMINI_API_KEY", "API_KEY", "OPENAI_API_KEY", "DOC_ASSIST_PROVIDER"):
        monkeypatch.delenv(var, raising=False)


class TestSettings:
    """Settings loading"""

    def test_defaults(self):
        settings = Settings()

        assert settings.provider == ProviderType.GEMINI
        assert settings.translation.mode == TranslationMode.SPEED
        assert settings.translation.detailed_thinking_budget == 2048
        assert settings.audio.sample_rate == 24000
        assert settings.gemini.voice == "Kore"
        assert settings.api_key == ""

    def test_api_key_fallbacks(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "legacy-key")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        settings = Settings()

        assert settings.gemini.api_key == "legacy-key"
        assert settings.openai.api_key == "sk-test"

    def test_from_yaml_with_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MY_OPENAI_KEY", "sk-from-env")
        path = tmp_path / "config.yaml"
        path.write_text(
            """
provider: openai
openai:
  api_key: "${MY_OPENAI_KEY}"
  voice: nova
translation:
  target_language: Telugu
  mode: detailed
history:
  database_path: "./history.duckdb"
""",
            encoding="utf-8",
        )

        settings = load_config(path)

        assert settings.provider == ProviderType.OPENAI
        assert settings.api_key == "sk-from-env"
        assert settings.openai.voice == "nova"
        assert settings.translation.target_language == "Telugu"
        assert settings.translation.mode == TranslationMode.DETAILED
        assert settings.history.database_path.is_absolute()

    def test_env_reference_inside_value(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LLM_HOST", "llm.internal:8080")
        path = tmp_path / "config.yaml"
        path.write_text(
            """
provider: openai
openai:
  base_url: "http://${LLM_HOST}/v1"
  api_key: "${UNSET_KEY_FOR_TESTS}"
""",
            encoding="utf-8",
        )

        settings = load_config(path)

        assert settings.openai.base_url == "http://llm.internal:8080/v1"
        assert settings.openai.api_key == ""

    def test_discovers_config_in_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yml").write_text(
            "translation:\n  target_language: Marathi\n", encoding="utf-8"
        )

        assert load_config().translation.target_language == "Marathi"

    def test_missing_yaml_gives_defaults(self, tmp_path):
        settings = Settings.from_yaml(tmp_path / "missing.yaml")

        assert settings.provider == ProviderType.GEMINI

    def test_default_config_file_loads(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gm-key")
        path = create_default_config(tmp_path / "cfg" / "config.yaml")

        settings = load_config(path)

        assert settings.gemini.api_key == "gm-key"
        assert settings.translation.target_language == "Hindi"


class TestProviderFactory:
    """Provider creation"""

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            create_llm_provider("gemini", api_key="")

    def test_invalid_provider(self):
        with pytest.raises(ConfigurationError, match="Invalid provider type"):
            create_llm_provider("watson", api_key="key")

    def test_gemini_from_settings(self):
        settings = Settings(gemini={"api_key": "gm-key"})

        provider = create_provider_from_settings(settings)

        assert isinstance(provider, GeminiProvider)
        assert provider.name == "gemini"

    def test_openai_from_settings(self):
        settings = Settings(provider="openai", openai={"api_key": "sk-test"})

        provider = create_provider_from_settings(settings)

        assert isinstance(provider, OpenAICompatibleProvider)
        assert provider.name == "openai"


class TestSchemaConversion:
    """Neutral schema to provider formats"""

    def test_json_schema_nullable(self):
        schema = to_json_schema(RESPONSE_SCHEMA)

        assert schema["properties"]["address"] == {"type": ["string", "null"]}
        assert schema["properties"]["officialDetails"]["type"] == ["object", "null"]
        assert schema["properties"]["actionItems"]["items"] == {"type": "string"}
        assert "nullable" not in str(schema)
        assert schema["required"] == RESPONSE_SCHEMA["required"]

    def test_gemini_schema(self):
        schema = to_gemini_schema(RESPONSE_SCHEMA)

        assert schema.type.value == "OBJECT"
        assert schema.properties["address"].nullable is True
        assert schema.properties["actionItems"].items.type.value == "STRING"
        assert schema.properties["officialDetails"].properties["goNumber"].nullable is True
        assert schema.required == RESPONSE_SCHEMA["required"]


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "doc-assist.log"

    logger = setup_logging(LoggingConfig(level="debug", file=log_file, console=False))
    logging.getLogger("doc_assist_ai.tests").info("hello from tests")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "hello from tests" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_setup_logging_without_handlers_stays_silent(capsys):
    logger = setup_logging(LoggingConfig(file=None, console=False))
    logging.getLogger("doc_assist_ai.tests").error("should not reach stderr")

    assert [type(handler) for handler in logger.handlers] == [logging.NullHandler]
    assert "should not reach stderr" not in capsys.readouterr().err

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
