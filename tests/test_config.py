"""Unit tests for configuration, prompts and firm content."""
import pytest
from pydantic import ValidationError

from hsb_assistant.config import AssistantConfig
from hsb_assistant.content import BOOKING_URL, EMAIL, GENERIC_FALLBACK, PHONE, SERVICES, UNCONFIGURED_FALLBACK
from hsb_assistant.prompts import clear_cache, get_system_instruction, load_prompt


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no assistant variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("API_KEY", "GEMINI_API_KEY", "GEMINI_MODEL", "HSB_STREAM_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    clear_cache()
    yield monkeypatch
    clear_cache()


class TestAssistantConfig:
    """Tests for AssistantConfig."""

    def test_defaults(self):
        config = AssistantConfig()
        assert config.api_key is None
        assert config.model == "gemini-2.5-flash"
        assert config.stream_timeout == 30.0
        assert not config.is_configured

    def test_is_frozen(self):
        config = AssistantConfig(api_key="key")
        with pytest.raises(ValidationError):
            config.api_key = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("key", [None, "", "   "])
    def test_missing_key_is_unconfigured(self, key):
        assert not AssistantConfig(api_key=key).is_configured

    def test_temperature_bounds(self):
        with pytest.raises(ValidationError):
            AssistantConfig(temperature=2.5)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            AssistantConfig(stream_timeout=0)

    def test_from_env(self, clean_env):
        clean_env.setenv("API_KEY", "env-key")
        clean_env.setenv("GEMINI_MODEL", "gemini-2.5-pro")
        clean_env.setenv("HSB_STREAM_TIMEOUT", "12.5")

        config = AssistantConfig.from_env()

        assert config.api_key == "env-key"
        assert config.model == "gemini-2.5-pro"
        assert config.stream_timeout == 12.5
        assert config.is_configured

    @pytest.mark.parametrize("value", ["", "   "])
    def test_from_env_blank_timeout_uses_default(self, clean_env, value):
        clean_env.setenv("HSB_STREAM_TIMEOUT", value)
        assert AssistantConfig.from_env().stream_timeout == 30.0

    def test_from_env_accepts_gemini_key(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "gemini-key")
        assert AssistantConfig.from_env().api_key == "gemini-key"


class TestPrompts:
    """Tests for the system instruction."""

    def test_system_instruction_mentions_policy(self, clean_env):
        instruction = get_system_instruction()

        assert BOOKING_URL in instruction
        assert "under 100 words" in instruction
        assert "legal" in instruction
        for service in SERVICES:
            assert service in instruction
        assert "{" not in instruction

    def test_config_uses_system_instruction(self, clean_env):
        assert AssistantConfig().system_instruction == get_system_instruction()

    def test_working_directory_override(self, clean_env, tmp_path):
        prompts_dir = tmp_path / "prompts"
        prompts_dir.mkdir()
        (prompts_dir / "assistant.txt").write_text("Custom persona for {firm_name}. Book: {booking_url}")

        instruction = get_system_instruction()

        assert instruction.startswith("Custom persona for HSB Accounting & Finance.")
        assert instruction.endswith(BOOKING_URL)

    def test_override_with_literal_braces(self, clean_env, tmp_path):
        prompts_dir = tmp_path / "prompts"
        prompts_dir.mkdir()
        (prompts_dir / "assistant.txt").write_text(
            'Reply as JSON like {"answer": "..."} for {firm_name}. Keep {unknown} as is.'
        )

        config = AssistantConfig.from_env()

        assert config.system_instruction == (
            'Reply as JSON like {"answer": "..."} for HSB Accounting & Finance. Keep {unknown} as is.'
        )

    def test_missing_prompt_raises(self, clean_env):
        with pytest.raises(FileNotFoundError, match="not found"):
            load_prompt("does-not-exist")


class TestContent:
    """Tests for fixed fallback copy."""

    def test_unconfigured_fallback_offers_contact_and_booking(self):
        assert BOOKING_URL in UNCONFIGURED_FALLBACK
        assert "contact the office" in UNCONFIGURED_FALLBACK

    def test_fallbacks_differ(self):
        assert GENERIC_FALLBACK != UNCONFIGURED_FALLBACK

    def test_contact_details(self):
        assert "@" in EMAIL
        assert PHONE
