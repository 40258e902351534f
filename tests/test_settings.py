import pytest
from pydantic import ValidationError

from chatdex.config.settings import Settings


def test_defaults_match_calibrated_constants():
    config = Settings()
    assert (config.CHUNK_SIZE, config.CHUNK_OVERLAP, config.MIN_CHUNK_CHARS) == (800, 150, 30)
    assert (config.MAX_CHUNK_ITERATIONS, config.BOUNDARY_WINDOW) == (5000, 100)
    assert (config.TOP_K, config.MAX_CONTEXT_CHARS) == (4, 3000)
    assert config.RECENCY_WEIGHT == pytest.approx(0.3)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CHATDEX_TOP_K", "7")
    monkeypatch.setenv("CHATDEX_ENV", "prod")
    config = Settings()
    assert config.TOP_K == 7
    assert config.ENV == "prod"


@pytest.mark.parametrize("overrides", [
    {"CHUNK_SIZE": 50},
    {"CHUNK_OVERLAP": 800},
    {"CHUNK_OVERLAP": -1},
    {"BOUNDARY_WINDOW": 900},
    {"TOP_K": 0},
    {"MAX_CONTEXT_CHARS": 0},
    {"RECENCY_WEIGHT": 1.5},
    {"ENV": "staging"},
    {"LOG_LEVEL": "VERBOSE"},
])
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("CHATDEX_LOG_LEVEL", "WARNING")
    assert Settings().LOG_LEVEL == "WARNING"
    monkeypatch.delenv("CHATDEX_LOG_LEVEL")
    assert Settings(_env_file=None).LOG_LEVEL is None
