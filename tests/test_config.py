import pytest

from courserec.core.config import (
    AppSettings,
    Environment,
    ProductionSettings,
    TestingSettings,
    get_settings,
    validate_configuration,
)


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_defaults():
    settings = AppSettings()

    assert settings.recommendation_cache_ttl_seconds == 86400
    assert settings.max_recommendation_limit == 50
    assert settings.hybrid_strategy_limit == 10
    assert settings.trending_candidate_pool == 100
    assert settings.hybrid_isolate_strategy_failures is False


def test_environment_selects_settings_class(fresh_settings, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "testing")
    assert isinstance(fresh_settings(), TestingSettings)

    fresh_settings.cache_clear()
    monkeypatch.setenv("ENVIRONMENT", "staging")
    settings = fresh_settings()
    assert isinstance(settings, ProductionSettings)
    assert settings.environment == Environment.STAGING


def test_environment_variables_override_knobs(monkeypatch):
    monkeypatch.setenv("HYBRID_STRATEGY_LIMIT", "25")
    monkeypatch.setenv("HYBRID_ISOLATE_STRATEGY_FAILURES", "true")

    settings = AppSettings()

    assert settings.hybrid_strategy_limit == 25
    assert settings.hybrid_isolate_strategy_failures is True


def test_valid_configuration_passes(settings):
    assert validate_configuration(settings) is True


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"redis_url": "http://localhost"}, "REDIS_URL"),
        ({"dataset_path": "/nonexistent/snapshot"}, "DATASET_PATH"),
        ({"recommendation_cache_ttl_seconds": 0}, "RECOMMENDATION_CACHE_TTL_SECONDS"),
        ({"hybrid_strategy_limit": 0}, "HYBRID_STRATEGY_LIMIT"),
    ],
)
def test_invalid_configuration_is_reported(overrides, message):
    settings = TestingSettings(**overrides)

    with pytest.raises(ValueError, match=message):
        validate_configuration(settings)
