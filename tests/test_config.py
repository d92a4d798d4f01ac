import pytest
from pydantic import ValidationError

from duet.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings()

    assert settings.api_key is None
    assert settings.planner_model == "gpt-4o"
    assert settings.speaker_model == "gpt-4o"
    assert settings.planner_temperature == 1.0
    assert settings.max_turns == 3
    assert settings.step_timeout_seconds == 60.0
    assert settings.search_max_results == 5


def test_prefixed_environment_is_loaded(monkeypatch) -> None:
    monkeypatch.setenv("DUET_API_KEY", "sk-duet")
    monkeypatch.setenv("DUET_MAX_TURNS", "5")
    monkeypatch.setenv("DUET_PLANNER_MODEL", "gpt-4o-mini")

    settings = Settings()

    assert settings.api_key == "sk-duet"
    assert settings.max_turns == 5
    assert settings.planner_model == "gpt-4o-mini"


def test_openai_api_key_is_accepted(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")

    assert Settings().api_key == "sk-openai"


def test_dotenv_file_is_read(tmp_path) -> None:
    (tmp_path / ".env").write_text("DUET_SPEAKER_TEMPERATURE=0.3\n", encoding="utf-8")

    assert Settings().speaker_temperature == 0.3


def test_max_turns_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(max_turns=0)


def test_get_settings_applies_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DUET_MAX_TURNS", "5")

    assert get_settings(max_turns=2, api_key="sk-x").max_turns == 2
