from __future__ import annotations

from household import config
from household.models import Participant


def test_identity_is_absent_by_default() -> None:
    assert config.load_identity() is None
    assert config.current_participant() is None


def test_save_and_clear_identity() -> None:
    config.save_identity(Participant.SECONDARY)

    assert config.current_participant() == Participant.SECONDARY
    assert config.IDENTITY_FILE.exists()

    config.clear_identity()
    assert config.current_participant() is None
    config.clear_identity()  # already gone


def test_corrupt_identity_file_is_ignored(config_dir) -> None:
    config_dir.mkdir(parents=True)
    config.IDENTITY_FILE.write_text("{not json")
    assert config.load_identity() is None

    config.IDENTITY_FILE.write_text('{"participant": "nobody", "chosen_at": "2026-01-01T00:00:00"}')
    assert config.load_identity() is None


def test_ledger_path(monkeypatch, tmp_path, config_dir) -> None:
    assert config.get_ledger_path() == config_dir / "household.db"

    monkeypatch.setenv("HOUSEHOLD_LEDGER", str(tmp_path / "elsewhere.db"))
    assert config.get_ledger_path() == tmp_path / "elsewhere.db"
