"""Unit tests for mock transaction history generation"""

import random
import re
from datetime import date

from northwind_portal.domain.accounts import ACCOUNT_TYPE_LABELS
from northwind_portal.domain.mock_transactions import (
    MOCK_ANCHOR_DATE,
    TRANSACTION_CATEGORIES,
    TRANSACTION_POOL,
    get_mock_transactions,
)

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def test_one_transaction_per_pool_entry():
    txs = get_mock_transactions()
    assert len(txs) == len(TRANSACTION_POOL) == 15


def test_pool_order_is_preserved():
    txs = get_mock_transactions()
    assert [tx.description for tx in txs] == [entry.description for entry in TRANSACTION_POOL]


def test_every_entry_is_well_formed():
    for tx in get_mock_transactions():
        assert tx.amount > 0
        assert tx.type in {"credit", "debit"}
        assert tx.category in TRANSACTION_CATEGORIES
        assert ISO_DATE.match(tx.date)
        assert tx.account_label


def test_ids_are_unique():
    txs = get_mock_transactions()
    assert len({tx.id for tx in txs}) == len(txs)


def test_first_entry_is_anchor_date():
    txs = get_mock_transactions()
    assert txs[0].date == MOCK_ANCHOR_DATE.isoformat() == "2026-02-24"


def test_dates_strictly_decrease_by_one_day():
    txs = get_mock_transactions()
    dates = [date.fromisoformat(tx.date) for tx in txs]

    for newer, older in zip(dates, dates[1:]):
        assert (newer - older).days == 1


def test_dates_cross_month_boundary():
    txs = get_mock_transactions(anchor=date(2026, 3, 2))
    assert [tx.date for tx in txs[:4]] == ["2026-03-02", "2026-03-01", "2026-02-28", "2026-02-27"]


def test_account_labels_come_from_known_types():
    known = set(ACCOUNT_TYPE_LABELS.values())
    for tx in get_mock_transactions():
        assert tx.account_label in known


def test_seeded_rng_gives_reproducible_labels():
    first = get_mock_transactions(rng=random.Random(42))
    second = get_mock_transactions(rng=random.Random(42))

    assert [tx.account_label for tx in first] == [tx.account_label for tx in second]
