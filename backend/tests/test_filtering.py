from __future__ import annotations

from household.models import Participant
from household.services.filtering import (
    FALLBACK_COLOR,
    FilterSpec,
    category_detail,
    category_options,
    color_for_category,
    distribution,
    filter_transactions,
)


def sample_transactions():
    return [
        {"id": "1", "amount": 12.5, "category": "comida", "concept": "mercadona", "participant": "alba"},
        {"id": "2", "amount": 40, "category": "ocio", "concept": "cervezas", "participant": "alberto"},
        {"id": "3", "amount": 8, "category": "transporte", "concept": "metro", "participant": "alba"},
        {"id": "4", "amount": 30, "category": "comida", "concept": "Cena fuera", "participant": "alberto"},
        {"id": "5", "amount": 40, "category": "hogar", "concept": "bombillas", "participant": "alba"},
    ]


def ids(rows):
    return [r["id"] for r in rows]


def test_default_filter_returns_everything_in_order() -> None:
    txs = sample_transactions()
    assert filter_transactions(txs, FilterSpec()) == txs


def test_category_and_participant_filters() -> None:
    txs = sample_transactions()

    assert ids(filter_transactions(txs, FilterSpec(category="comida"))) == ["1", "4"]
    assert ids(filter_transactions(txs, FilterSpec(participant="alba"))) == ["1", "3", "5"]
    assert ids(filter_transactions(txs, FilterSpec(category="comida", participant="alba"))) == ["1"]
    assert filter_transactions(txs, FilterSpec(category="viajes")) == []


def test_participant_filter_accepts_enum_values() -> None:
    txs = [dict(t, participant=Participant(t["participant"])) for t in sample_transactions()]
    assert ids(filter_transactions(txs, FilterSpec(participant="alberto"))) == ["2", "4"]


def test_search_matches_concept_or_category_ignoring_case() -> None:
    txs = sample_transactions()

    assert ids(filter_transactions(txs, FilterSpec(search="CENA"))) == ["4"]
    assert ids(filter_transactions(txs, FilterSpec(search="com"))) == ["1", "4"]
    assert ids(filter_transactions(txs, FilterSpec(search="   "))) == ids(txs)


def test_search_keeps_surrounding_spaces() -> None:
    txs = sample_transactions()

    assert ids(filter_transactions(txs, FilterSpec(search=" fuera"))) == ["4"]
    assert filter_transactions(txs, FilterSpec(search=" metro")) == []
    assert filter_transactions(txs, FilterSpec(search="cena ")) == [txs[3]]
    assert filter_transactions(txs, FilterSpec(search="metro ")) == []


def test_filtering_is_idempotent() -> None:
    spec = FilterSpec(participant="alba", search="o")
    once = filter_transactions(sample_transactions(), spec)
    assert filter_transactions(once, spec) == once


def test_distribution_sorted_by_total_desc_with_stable_ties() -> None:
    dist = distribution(sample_transactions())

    assert [(d.category, d.total) for d in dist] == [
        ("comida", 42.5),
        ("ocio", 40),
        ("hogar", 40),
        ("transporte", 8),
    ]


def test_distribution_colors() -> None:
    colors = {d.category: d.color for d in distribution(sample_transactions())}

    assert colors["comida"] == "#34d399"
    assert colors["hogar"] == FALLBACK_COLOR
    assert color_for_category("  Ocio ") == "#60a5fa"


def test_distribution_of_nothing() -> None:
    assert distribution([]) == []


def test_category_options_are_sorted_and_unique() -> None:
    assert category_options(sample_transactions()) == ["comida", "hogar", "ocio", "transporte"]


def test_category_detail() -> None:
    detail = category_detail(sample_transactions(), "comida")

    assert detail.count == 2
    assert detail.total == 42.5
    assert ids(detail.items) == ["1", "4"]
    assert category_detail([], "comida").count == 0
