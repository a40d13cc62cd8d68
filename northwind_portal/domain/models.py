"""Domain models - display-only entities derived from Northwind data"""

from dataclasses import dataclass
from typing import Literal

from northwind_portal.infrastructure.clients.schemas import AccountSummary


class EnrichedAccount(AccountSummary):
    """AccountSummary plus a friendly name the API does not provide"""

    display_name: str


@dataclass(frozen=True)
class PoolEntry:
    """Fixed template for one synthetic transaction"""

    description: str
    amount: float  # always positive, sign is carried by type
    type: Literal["credit", "debit"]
    category: str


@dataclass
class MockTransaction:
    """Synthetic transaction shown as UI filler, not tied to any real account"""

    id: str
    description: str
    amount: float
    date: str  # YYYY-MM-DD
    type: Literal["credit", "debit"]
    category: str  # restaurant | store | income | payment | transfer
    account_label: str


@dataclass
class TransferForm:
    """Raw transfer form fields as submitted by the user"""

    from_account_number: str = ""
    from_routing_number: str = ""
    from_account_holder: str = ""
    to_account_number: str = ""
    to_routing_number: str = ""
    to_account_holder: str = ""
    amount: str = ""
    description: str = ""
