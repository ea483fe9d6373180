from __future__ import annotations

import threading

from household.services.consolidation import consolidate, plan_consolidation


def test_plan_moves_period_savings_into_accumulated() -> None:
    meta = {"savings_target": 100, "savings_extra": 50, "savings_accumulated": 1000}

    assert plan_consolidation(meta) == {
        "savings_target": 0.0,
        "savings_extra": 0.0,
        "savings_accumulated": 1150.0,
    }


def test_plan_refuses_when_nothing_saved() -> None:
    assert plan_consolidation({"savings_accumulated": 1000}) is None
    assert plan_consolidation({"savings_target": 20, "savings_extra": -50}) is None
    assert plan_consolidation(None) is None


def test_consolidate_writes_once_and_second_call_is_noop(meta_store, hub) -> None:
    meta_store.write("2026-01", {"savings_target": 100, "savings_extra": 50, "savings_accumulated": 1000})

    seen = []
    meta_store.subscribe("2026-01", seen.append)
    seen.clear()

    result = consolidate(meta_store, "2026-01")

    assert result.consolidated is True
    assert result.amount == 150
    assert (result.meta.savings_target, result.meta.savings_extra, result.meta.savings_accumulated) == (0, 0, 1150)
    # One merge-write: subscribers never see a half-applied state
    assert len(seen) == 1
    assert seen[0].savings_accumulated == 1150
    assert seen[0].savings_target == 0

    again = consolidate(meta_store, "2026-01")

    assert again.consolidated is False
    assert again.amount == 0
    assert len(seen) == 1
    assert meta_store.read("2026-01").savings_accumulated == 1150


def test_consolidate_keeps_other_fields(meta_store) -> None:
    meta_store.write("2026-02", {"income_primary": 2000, "savings_goal": 500, "savings_target": 300})

    consolidate(meta_store, "2026-02")
    meta = meta_store.read("2026-02")

    assert meta.income_primary == 2000
    assert meta.savings_goal == 500
    assert meta.savings_accumulated == 300


def test_consolidate_missing_period_is_noop(meta_store) -> None:
    result = consolidate(meta_store, "2026-03")

    assert result.consolidated is False
    assert result.meta is None
    assert meta_store.read("2026-03") is None


def test_write_during_consolidation_is_not_lost(meta_store) -> None:
    meta_store.write("2026-04", {"savings_target": 100, "savings_extra": 50, "savings_accumulated": 1000})
    errors = []

    def other_client():
        try:
            meta_store.write("2026-04", {"savings_extra": 70})
        except Exception as e:  # surfaced by the assertion below
            errors.append(e)

    writer = threading.Thread(target=other_client)

    def plan(before):
        writer.start()
        # The other write has to wait for this transaction to finish
        writer.join(timeout=0.2)
        assert writer.is_alive()
        return plan_consolidation(before)

    before, after = meta_store.apply("2026-04", plan)
    writer.join(timeout=5)

    assert not writer.is_alive()
    assert errors == []
    assert after.savings_accumulated == 1150
    meta = meta_store.read("2026-04")
    assert (meta.savings_target, meta.savings_extra, meta.savings_accumulated) == (0, 70, 1150)
