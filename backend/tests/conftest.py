"""Shared fixtures: a throwaway SQLite ledger per test and an isolated config dir."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from household import config
from household.database import open_ledger, close_ledger
from household.services import ChangeHub, MetadataStore, TransactionStore


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    cfg = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_DIR", cfg)
    monkeypatch.setattr(config, "IDENTITY_FILE", cfg / "identity.json")
    monkeypatch.delenv("HOUSEHOLD_LEDGER", raising=False)
    return cfg


@pytest.fixture
def ledger(tmp_path):
    path = tmp_path / "ledger.db"
    open_ledger(path)
    yield path
    close_ledger()


@pytest.fixture
def hub():
    return ChangeHub()


@pytest.fixture
def meta_store(ledger, hub):
    return MetadataStore(hub=hub, budget_id="test")


@pytest.fixture
def tx_store(ledger, hub):
    return TransactionStore(hub=hub, budget_id="test")


@pytest.fixture
def client(ledger):
    from household.main import app

    # No context manager: the ledger fixture owns open/close, not the lifespan
    return TestClient(app)
