"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings


def test_settings_has_defaults():
    """Settings should have sensible defaults."""
    settings = Settings()

    assert settings.app_name == "SalesLeaderboard"
    assert settings.app_env == "development"
    assert settings.debug is False
    assert settings.log_format == "json"
    assert settings.seller_stats_revenue_policy == "per_item"
    assert settings.seller_stats_top_products_limit == 10
    assert settings.seller_stats_max_purchase_records == 100_000


@pytest.mark.parametrize(
    ("app_env", "development", "testing", "production"),
    [
        ("development", True, False, False),
        ("testing", False, True, False),
        ("staging", False, False, False),
        ("production", False, False, True),
    ],
)
def test_settings_environment_flags(app_env, development, testing, production):
    """Environment flags should follow app_env."""
    settings = Settings(app_env=app_env)

    assert settings.is_development is development
    assert settings.is_testing is testing
    assert settings.is_production is production


def test_get_settings_returns_singleton():
    """get_settings should return cached singleton."""
    assert get_settings() is get_settings()


def test_seller_stats_settings_from_environment(monkeypatch):
    """Seller stats settings should load from environment variables."""
    monkeypatch.setenv("SELLER_STATS_REVENUE_POLICY", "order_total")
    monkeypatch.setenv("SELLER_STATS_TOP_PRODUCTS_LIMIT", "3")
    monkeypatch.setenv("LOG_FORMAT", "console")

    settings = Settings()

    assert settings.seller_stats_revenue_policy == "order_total"
    assert settings.seller_stats_top_products_limit == 3
    assert settings.log_format == "console"


@pytest.mark.parametrize(
    "overrides",
    [
        {"seller_stats_revenue_policy": "gross"},
        {"seller_stats_top_products_limit": 0},
        {"seller_stats_top_products_limit": 101},
        {"seller_stats_max_purchase_records": 0},
    ],
)
def test_seller_stats_settings_rejected(overrides):
    """Out-of-range seller stats settings should fail validation."""
    with pytest.raises(ValidationError):
        Settings(**overrides)
