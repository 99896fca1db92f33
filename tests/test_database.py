"""Tests for database bootstrap and session handling."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect, text
from sqlmodel import select

from finledger.config import BaseConfig
from finledger.domain.forms import CategoryData
from finledger.infra.database import bootstrap_database
from finledger.infra.repositories import SQLModelCategoryRepository
from finledger.models import User


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("FINLEDGER_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("FINLEDGER_DATABASE_URL", raising=False)
    monkeypatch.setenv("FINLEDGER_JOURNALS_PER_PAGE", "10")
    monkeypatch.setenv("FINLEDGER_TIMEZONE", "Europe/Berlin")
    return BaseConfig()


def test_bootstrap_creates_schema(config):
    engine, _ = bootstrap_database(config)
    try:
        assert {"user", "category", "journal"} <= set(inspect(engine).get_table_names())
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    finally:
        engine.dispose()


def test_session_factory_rolls_back_on_error(config):
    engine, factory = bootstrap_database(config)
    try:
        with pytest.raises(RuntimeError):
            with factory() as session:
                session.add(User(username="ghost"))
                session.flush()
                raise RuntimeError("boom")

        with factory() as session:
            assert session.exec(select(User)).all() == []
    finally:
        engine.dispose()


def test_repository_from_config(config):
    engine, factory = bootstrap_database(config)
    try:
        with factory() as session:
            owner = User(username="owner")
            session.add(owner)
            session.flush()
            owner_id = owner.id

        repo = SQLModelCategoryRepository.from_config(factory, config)
        assert repo.page_size == 10
        assert str(repo.tz) == "Europe/Berlin"

        created = repo.store(CategoryData(name="Utilities"), user_id=owner_id)
        assert repo.destroy(created, user_id=owner_id) is True
    finally:
        engine.dispose()
