"""Shared test fixtures and configuration."""
import json
from typing import Iterator

import pytest

PRESETS = {
    "small": {"size": 40, "d": "identicon"},
    "large": {"s": 512, "max_rating": "pg", "extension": "png"},
}


@pytest.fixture(autouse=True)
def set_gravatar_env_vars(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Configure presets through the environment for all tests."""
    monkeypatch.setenv("GRAVATAR_PRESETS", json.dumps(PRESETS))
    monkeypatch.delenv("GRAVATAR_DEFAULT_PRESET", raising=False)
    monkeypatch.delenv("GRAVATAR_PRESETS_FILE", raising=False)

    from gravatar_app.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def config() -> dict:
    return {"default_preset": None, "presets": json.loads(json.dumps(PRESETS))}
