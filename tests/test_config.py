"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from finledger.config import BaseConfig, parse_exchange_rates


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    for name in (
        "FINLEDGER_DATABASE_URL",
        "FINLEDGER_DEV_MODE",
        "FINLEDGER_REPORTING_CURRENCY",
        "FINLEDGER_EXCHANGE_RATES",
        "FINLEDGER_JOURNALS_PER_PAGE",
        "FINLEDGER_TIMEZONE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FINLEDGER_DATA_DIR", str(tmp_path / "data"))
    return tmp_path / "data"


def test_defaults(clean_env):
    config = BaseConfig()

    assert config.DATA_DIR == clean_env.resolve()
    assert config.DATA_DIR.exists()
    assert config.DATABASE_URL == f"sqlite:///{clean_env.resolve() / 'finledger.db'}"
    assert config.DEV_MODE is True
    assert config.REPORTING_CURRENCY == "USD"
    assert config.EXCHANGE_RATES == {}
    assert config.JOURNALS_PER_PAGE == 50
    assert config.TIMEZONE == "UTC"
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("FINLEDGER_DEV_MODE", "no")
    monkeypatch.setenv("FINLEDGER_JOURNALS_PER_PAGE", "20")
    monkeypatch.setenv("FINLEDGER_EXCHANGE_RATES", "eur=1.08, GBP=1.27,")
    monkeypatch.setenv("FINLEDGER_DATABASE_URL", "postgresql://localhost/finledger")

    config = BaseConfig()

    assert config.DEV_MODE is False
    assert config.JOURNALS_PER_PAGE == 20
    assert config.EXCHANGE_RATES == {"EUR": 1.08, "GBP": 1.27}
    assert config.sqlalchemy_engine_options() == {}


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_invalid_page_size(clean_env, monkeypatch, value):
    monkeypatch.setenv("FINLEDGER_JOURNALS_PER_PAGE", value)

    with pytest.raises(ValueError):
        BaseConfig()


@pytest.mark.parametrize("raw", ["EUR", "EURO=1.0", "EUR=abc", "EUR=0"])
def test_invalid_exchange_rates(raw):
    with pytest.raises(ValueError):
        parse_exchange_rates(raw)


def test_empty_exchange_rates():
    assert parse_exchange_rates(None) == {}
    assert parse_exchange_rates("") == {}
