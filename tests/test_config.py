"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from meli_search.config import BotSettings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_read_nested_environment(monkeypatch):
    monkeypatch.setenv("MELI_TELEGRAM_TOKEN", "123:abc")
    monkeypatch.setenv("MELI_VISIBLE_ROWS", "3")
    monkeypatch.setenv("MELI_SEARCH__SITE_ID", "mla")
    monkeypatch.setenv("MELI_SEARCH__REQUEST_TIMEOUT_SECONDS", "15")

    settings = get_settings()

    assert settings.telegram_token.get_secret_value() == "123:abc"
    assert settings.visible_rows == 3
    assert settings.search.site_id == "MLA"
    assert settings.search.request_timeout_seconds == 15
    assert str(settings.search.base_url).rstrip("/") == "https://api.mercadolibre.com"
    assert settings.default_language == "es"
    assert get_settings() is settings


def test_settings_defaults_keep_client_timeout(monkeypatch):
    monkeypatch.setenv("MELI_TELEGRAM_TOKEN", "123:abc")
    settings = BotSettings(_env_file=None)

    assert settings.search.site_id == "MLC"
    assert settings.search.request_timeout_seconds is None
    assert settings.thumbnails.max_side_length == 256


def test_settings_reject_invalid_visible_rows(monkeypatch):
    monkeypatch.setenv("MELI_TELEGRAM_TOKEN", "123:abc")
    monkeypatch.setenv("MELI_VISIBLE_ROWS", "0")

    with pytest.raises(ValidationError):
        BotSettings(_env_file=None)
