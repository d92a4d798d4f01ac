from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clear_duet_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in (
        "OPENAI_API_KEY",
        "DUET_API_KEY",
        "DUET_API_BASE",
        "DUET_MAX_TURNS",
        "DUET_LOG_LEVEL",
        "DUET_STEP_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of settings loaded during tests.
    monkeypatch.chdir(tmp_path)
