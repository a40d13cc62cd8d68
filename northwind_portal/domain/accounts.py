"""Account enrichment - friendly display names derived from account_type"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence

from northwind_portal.domain.models import EnrichedAccount
from northwind_portal.infrastructure.clients.schemas import AccountSummary

# Loaded once at import, read-only thereafter
ACCOUNT_TYPE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "CHECKING": "Checking Account",
        "SAVINGS": "Savings Account",
        "MONEY_MARKET": "Money Market Account",
        "CD": "Certificate of Deposit",
        "IRA": "IRA Account",
        "BUSINESS_CHECKING": "Business Checking",
        "BUSINESS_SAVINGS": "Business Savings",
    }
)


def label_for_type(account_type: str, labels: Mapping[str, str] = ACCOUNT_TYPE_LABELS) -> str:
    """Friendly label for a type; unknown types keep their original casing"""
    return labels.get(account_type.upper(), f"{account_type} Account")


def enrich_accounts(
    accounts: Sequence[AccountSummary],
    labels: Mapping[str, str] = ACCOUNT_TYPE_LABELS,
) -> List[EnrichedAccount]:
    """
    Attach a display_name to every account in the batch.

    Types are compared case-insensitively. When a type occurs more than once
    in the batch, each of its accounts gets a 1-based suffix in input order
    ("Checking Account 1", "Checking Account 2"); types seen once get none.

    Numbering depends on the whole batch and on its order, so re-run this
    whenever the account list changes.
    """
    type_counts: Dict[str, int] = {}
    for account in accounts:
        key = account.account_type.upper()
        type_counts[key] = type_counts.get(key, 0) + 1

    type_index: Dict[str, int] = {}
    enriched = []
    for account in accounts:
        key = account.account_type.upper()
        display_name = label_for_type(account.account_type, labels)

        if type_counts[key] > 1:
            type_index[key] = type_index.get(key, 0) + 1
            display_name = f"{display_name} {type_index[key]}"

        enriched.append(EnrichedAccount(**account.model_dump(), display_name=display_name))

    return enriched
