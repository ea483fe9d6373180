"""Ledger lifecycle and upgrades of ledgers written by earlier releases."""

from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy import inspect

from household import database
from household.services import ChangeHub, MetadataStore


def make_old_ledger(path):
    """A ledger from before savings_goal/savings_extra existed."""
    conn = sqlite3.connect(path)
    conn.execute(
        """
        CREATE TABLE period_meta (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            budget_id VARCHAR(64) NOT NULL,
            period_key VARCHAR(7) NOT NULL,
            income_primary FLOAT NOT NULL,
            income_secondary FLOAT NOT NULL,
            savings_target FLOAT NOT NULL,
            savings_accumulated FLOAT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP NOT NULL,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP NOT NULL,
            CONSTRAINT uq_period_meta UNIQUE (budget_id, period_key)
        )
        """
    )
    conn.execute(
        "INSERT INTO period_meta (budget_id, period_key, income_primary, income_secondary,"
        " savings_target, savings_accumulated) VALUES ('test', '2025-12', 2000, 1500, 300, 900)"
    )
    conn.commit()
    conn.close()


@pytest.fixture
def old_ledger(tmp_path):
    path = tmp_path / "old.db"
    make_old_ledger(path)
    yield path
    database.close_ledger()


def test_open_adds_missing_columns(old_ledger) -> None:
    database.open_ledger(old_ledger)

    columns = {c["name"]: c for c in inspect(database._current_engine).get_columns("period_meta")}
    assert "savings_goal" in columns
    assert "savings_extra" in columns

    meta = MetadataStore(hub=ChangeHub(), budget_id="test").read("2025-12")
    assert meta.income_primary == 2000
    assert meta.savings_accumulated == 900
    assert meta.savings_goal == 0
    assert meta.savings_extra == 0


def test_upgraded_ledger_accepts_writes(old_ledger) -> None:
    database.open_ledger(old_ledger)
    store = MetadataStore(hub=ChangeHub(), budget_id="test")

    store.write("2025-12", {"savings_extra": 40})

    assert store.read("2025-12").savings_extra == 40
    assert store.read("2025-12").savings_target == 300


def test_reopening_is_harmless(old_ledger) -> None:
    database.open_ledger(old_ledger)
    database.open_ledger(old_ledger)

    assert database.get_current_ledger_path() == old_ledger
    assert database.is_ledger_open()


def test_session_requires_open_ledger() -> None:
    database.close_ledger()

    assert database.is_ledger_open() is False
    with pytest.raises(RuntimeError):
        database.get_session()
