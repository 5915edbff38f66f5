"""
Tests for Settings.from_env.
"""

from pathlib import Path

import pytest

from coinfolio_core import Settings


def test_defaults_with_empty_environment():
    s = Settings.from_env({})
    assert s == Settings()
    assert s.api_base_url == "https://api.coingecko.com/api/v3"
    assert s.api_key is None
    assert s.timeout is None
    assert s.storage_key == "cryptoPortfolio"


def test_values_from_environment():
    s = Settings.from_env(
        {
            "COINFOLIO_API_BASE_URL": "https://pro-api.example/api/v3",
            "COINFOLIO_API_KEY": "secret",
            "COINFOLIO_VS_CURRENCY": "EUR",
            "COINFOLIO_STORAGE_KEY": "mine",
            "COINFOLIO_STORAGE_DIR": "/tmp/coinfolio",
            "COINFOLIO_TIMEOUT": "7.5",
        }
    )
    assert s.api_base_url == "https://pro-api.example/api/v3"
    assert s.api_key == "secret"
    assert s.vs_currency == "eur"
    assert s.storage_key == "mine"
    assert s.storage_dir == Path("/tmp/coinfolio")
    assert s.timeout == 7.5


def test_blank_values_count_as_unset():
    s = Settings.from_env({"COINFOLIO_API_KEY": "  ", "COINFOLIO_TIMEOUT": ""})
    assert s.api_key is None
    assert s.timeout is None


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_bad_timeout_raises(raw):
    with pytest.raises(ValueError):
        Settings.from_env({"COINFOLIO_TIMEOUT": raw})


def test_reads_os_environ(monkeypatch):
    monkeypatch.setenv("COINFOLIO_VS_CURRENCY", "jpy")
    assert Settings.from_env().vs_currency == "jpy"
