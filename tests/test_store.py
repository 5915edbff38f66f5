"""
Tests for PortfolioStore: load, upsert (weighted-average cost basis), remove.
"""

import math
from datetime import datetime, timezone

import pytest

from coinfolio_core import Holding, Portfolio, PortfolioStore, ValidationError
from coinfolio_core.codec import dumps_portfolio, loads_portfolio
from coinfolio_core.persistence import FilePersistence, InMemoryPersistence


def _store(initial: str | None = None) -> PortfolioStore:
    return PortfolioStore(InMemoryPersistence(initial=initial))


# --- load ---


def test_load_empty_when_nothing_persisted():
    assert _store().load() == Portfolio()


HUGE_AMOUNT_DOC = (
    '[{"id":"btc","name":"Bitcoin","amount":' + "1" + "0" * 400 + ',"buyPrice":null,"added":"2024-01-01T00:00:00"}]'
)


@pytest.mark.parametrize(
    "doc",
    [
        "",
        "{oops",
        "null",
        '{"a": 1}',
        '[{"id": 5}]',
        pytest.param(HUGE_AMOUNT_DOC, id="huge-int-amount"),
        pytest.param("[" * 100_000, id="deeply-nested"),
    ],
)
def test_load_malformed_document_is_empty(doc):
    assert _store(doc).load() == Portfolio()


def test_load_invalid_utf8_file_is_empty(tmp_path):
    persistence = FilePersistence(tmp_path)
    persistence.path.write_bytes(b'[{"id":"btc","name":"\xff"}]')
    assert PortfolioStore(persistence).load() == Portfolio()
    assert persistence.path.read_bytes() == b'[{"id":"btc","name":"\xff"}]'


def test_load_returns_persisted_holdings():
    store = _store()
    store.upsert("bitcoin", "Bitcoin", 1.0, 20000.0)
    again = PortfolioStore(store.persistence).load()
    assert again.ids == ["bitcoin"]
    assert again.get("bitcoin").cost_basis == 20000.0


# --- upsert ---


def test_upsert_new_holding_appends():
    store = _store()
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store.upsert("bitcoin", "Bitcoin", 0.5, 30000.0, now=ts)
    p = store.upsert("ethereum", "Ethereum", 2.0)
    assert p.ids == ["bitcoin", "ethereum"]
    btc = p.get("bitcoin")
    assert btc.amount == 0.5
    assert btc.cost_basis == 30000.0
    assert btc.added_at == ts
    assert p.get("ethereum").cost_basis is None


def test_upsert_weighted_average_cost():
    store = _store()
    store.upsert("x", "X", 2, 100)
    p = store.upsert("x", "X", 2, 200)
    h = p.get("x")
    assert h.amount == 4
    assert h.cost_basis == 150


def test_upsert_sequential_eth_buys():
    store = _store()
    store.upsert("eth", "Ethereum", 1, 1000)
    p = store.upsert("eth", "Ethereum", 3, 2000)
    assert p.get("eth").amount == 4
    assert p.get("eth").cost_basis == 1750


def test_upsert_amounts_accumulate():
    store = _store()
    buys = [0.25, 1.5, 3.0, 0.125]
    for i, qty in enumerate(buys):
        store.upsert("sol", "Solana", qty, 10.0 * (i + 1) if i % 2 == 0 else None)
    assert store.load().get("sol").amount == pytest.approx(sum(buys))
    assert len(store.load()) == 1


def test_upsert_without_price_keeps_cost_basis():
    store = _store()
    store.upsert("btc", "Bitcoin", 1, 20000)
    p = store.upsert("btc", "Bitcoin", 3)
    assert p.get("btc").amount == 4
    assert p.get("btc").cost_basis == 20000


def test_upsert_without_price_keeps_unknown_cost_basis():
    store = _store()
    store.upsert("btc", "Bitcoin", 1)
    p = store.upsert("btc", "Bitcoin", 1)
    assert p.get("btc").cost_basis is None


def test_upsert_price_onto_unknown_cost_treats_previous_as_zero():
    store = _store()
    store.upsert("btc", "Bitcoin", 1)
    p = store.upsert("btc", "Bitcoin", 1, 100)
    assert p.get("btc").cost_basis == 50


def test_upsert_existing_preserves_position_name_and_added_at():
    store = _store()
    first = datetime(2023, 6, 1, tzinfo=timezone.utc)
    store.upsert("btc", "Bitcoin", 1, 100, now=first)
    store.upsert("eth", "Ethereum", 1, 10)
    p = store.upsert("btc", "Renamed", 1, 300, now=datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert p.ids == ["btc", "eth"]
    assert p.get("btc").name == "Bitcoin"
    assert p.get("btc").added_at == first


def test_upsert_persists_every_mutation():
    persistence = InMemoryPersistence()
    store = PortfolioStore(persistence)
    p = store.upsert("btc", "Bitcoin", 1, 100)
    assert loads_portfolio(persistence.read()) == p


@pytest.mark.parametrize(
    "amount, price",
    [
        (0, None),
        (-1, None),
        (math.nan, None),
        (math.inf, None),
        ("1", None),
        (None, None),
        (True, None),
        (1, 0),
        (1, -5),
        (1, math.inf),
        (1, "100"),
        (10**400, None),
        (1, 10**400),
    ],
)
def test_upsert_invalid_input_rejected_without_change(amount, price):
    persistence = InMemoryPersistence()
    store = PortfolioStore(persistence)
    store.upsert("btc", "Bitcoin", 1, 100)
    before = persistence.read()
    with pytest.raises(ValidationError):
        store.upsert("btc", "Bitcoin", amount, price)
    assert persistence.read() == before


def test_upsert_invalid_input_on_empty_store_does_not_persist():
    persistence = InMemoryPersistence()
    with pytest.raises(ValidationError):
        PortfolioStore(persistence).upsert("btc", "Bitcoin", 0)
    assert persistence.read() is None


def test_upsert_rejects_empty_id():
    with pytest.raises(ValidationError):
        _store().upsert("", "Nothing", 1)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        _store().upsert("btc", "Bitcoin", -1)


# --- remove ---


def test_remove_deletes_holding():
    store = _store()
    store.upsert("btc", "Bitcoin", 1)
    store.upsert("eth", "Ethereum", 1)
    p = store.remove("btc")
    assert p.ids == ["eth"]
    assert store.load().ids == ["eth"]


def test_remove_missing_id_leaves_document_identical():
    persistence = InMemoryPersistence()
    store = PortfolioStore(persistence)
    store.upsert("btc", "Bitcoin", 1.5, 20000)
    store.upsert("eth", "Ethereum", 2)
    before = persistence.read()
    store.remove("dogecoin")
    assert persistence.read() == before


def test_remove_on_empty_store_writes_nothing():
    persistence = InMemoryPersistence()
    p = PortfolioStore(persistence).remove("btc")
    assert p == Portfolio()
    assert persistence.read() is None


def test_remove_missing_id_keeps_browser_document_verbatim():
    doc = '[{"id":"bitcoin","name":"Bitcoin","amount":1,"buyPrice":30000,"added":"2023-04-12T08:15:00.000Z"}]'
    persistence = InMemoryPersistence(initial=doc)
    p = PortfolioStore(persistence).remove("dogecoin")
    assert p.ids == ["bitcoin"]
    assert persistence.read() == doc


def test_remove_on_malformed_document_keeps_it():
    persistence = InMemoryPersistence(initial="{oops")
    PortfolioStore(persistence).remove("btc")
    assert persistence.read() == "{oops"


# --- overflow ---


def test_upsert_amount_overflow_rejected_and_portfolio_kept():
    persistence = InMemoryPersistence()
    store = PortfolioStore(persistence)
    store.upsert("keep", "Keep", 1, 10)
    store.upsert("a", "A", 1e308)
    before = persistence.read()
    with pytest.raises(ValidationError):
        store.upsert("a", "A", 1e308)
    assert persistence.read() == before
    assert store.load().ids == ["keep", "a"]
    assert store.load().get("a").amount == 1e308


def test_upsert_cost_overflow_rejected():
    store = _store()
    store.upsert("a", "A", 1e200, 1e200)
    with pytest.raises(ValidationError):
        store.upsert("a", "A", 1, 1)
    assert store.load().get("a").cost_basis == 1e200


def test_persisted_document_never_contains_non_finite_numbers():
    with pytest.raises(ValueError):
        dumps_portfolio(Portfolio(holdings=[Holding(id="a", name="A", amount=math.inf)]))
