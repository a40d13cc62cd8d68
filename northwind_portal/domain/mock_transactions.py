"""Mock transaction history.

The Northwind API has no per-account transaction history endpoint, so the
dashboard shows entries generated from a fixed pool. Dates are anchored and
sequential (most recent first). The account label attached to each entry is
drawn at random from the known account-type labels; pass a seeded
``random.Random`` to get the same labels on every call.
"""

import random
from datetime import date, timedelta
from typing import FrozenSet, List, Optional, Tuple

from northwind_portal.domain.accounts import ACCOUNT_TYPE_LABELS
from northwind_portal.domain.models import MockTransaction, PoolEntry

MOCK_ANCHOR_DATE = date(2026, 2, 24)

TRANSACTION_CATEGORIES: FrozenSet[str] = frozenset({"restaurant", "store", "income", "payment", "transfer"})

TRANSACTION_POOL: Tuple[PoolEntry, ...] = (
    PoolEntry("Direct Deposit - Payroll", 2450.00, "credit", "income"),
    PoolEntry("Amazon.com", 87.43, "debit", "store"),
    PoolEntry("Netflix Subscription", 15.99, "debit", "payment"),
    PoolEntry("Grocery Store", 134.22, "debit", "store"),
    PoolEntry("Gas Station", 58.75, "debit", "store"),
    PoolEntry("Restaurant - Dinner", 46.30, "debit", "restaurant"),
    PoolEntry("Interest Payment", 12.50, "credit", "income"),
    PoolEntry("Utility Bill - Electric", 95.00, "debit", "payment"),
    PoolEntry("Online Transfer Received", 500.00, "credit", "transfer"),
    PoolEntry("Coffee Shop", 6.75, "debit", "restaurant"),
    PoolEntry("Pharmacy", 23.18, "debit", "store"),
    PoolEntry("Streaming Service", 13.99, "debit", "payment"),
    PoolEntry("ATM Withdrawal", 200.00, "debit", "transfer"),
    PoolEntry("Refund - Online Purchase", 42.00, "credit", "store"),
    PoolEntry("Monthly Savings Transfer", 300.00, "debit", "transfer"),
)


def get_mock_transactions(
    anchor: date = MOCK_ANCHOR_DATE,
    rng: Optional[random.Random] = None,
) -> List[MockTransaction]:
    """
    Return one transaction per pool entry, in pool order.

    Entry i is dated ``anchor - i days``. Not differentiated by account.
    """
    rng = rng or random.Random()
    # sorted so a seeded rng picks the same label regardless of dict order
    labels = sorted(set(ACCOUNT_TYPE_LABELS.values()))

    return [
        MockTransaction(
            id=f"mock-{i}",
            description=entry.description,
            amount=entry.amount,
            date=(anchor - timedelta(days=i)).isoformat(),
            type=entry.type,
            category=entry.category,
            account_label=rng.choice(labels),
        )
        for i, entry in enumerate(TRANSACTION_POOL)
    ]
