"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional

from northwind_portal.infrastructure.clients.schemas import PaginationInfo, TransferSummary


class DashboardAccount(BaseModel):
    """Enriched account with display-ready fields"""

    account_id: str
    account_number: str
    routing_number: str
    account_type: str
    account_type_label: str
    account_status: str
    account_holder_name: str
    balance: float
    formatted_balance: str
    currency: str
    opened_date: str
    display_name: str


class DashboardTransaction(BaseModel):
    """Mock transaction row (UI filler)"""

    id: str
    description: str
    amount: float
    date: str
    display_date: str
    type: str
    category: str
    account_label: str


class DashboardAccounts(BaseModel):
    accounts: List[DashboardAccount]
    pagination: PaginationInfo


class DashboardTransfers(BaseModel):
    transfers: List[TransferSummary]
    pagination: PaginationInfo


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    accounts: DashboardAccounts
    transfers: DashboardTransfers
    transactions: List[DashboardTransaction]
    load_error: Optional[str] = None


class TransferFormRequest(BaseModel):
    """Request body for POST /v1/transfers, mirrors the transfer form fields"""

    from_account_number: str = ""
    from_routing_number: str = ""
    from_account_holder: str = ""
    to_account_number: str = ""
    to_routing_number: str = ""
    to_account_holder: str = ""
    amount: str = Field("", description="Amount as typed by the user")
    description: str = ""


class TransferSubmitResponse(BaseModel):
    """Response for POST /v1/transfers"""

    success: bool = True
    transfer_id: str
    reference_number: str
    amount: float
    from_account_number: str
    to_account_number: str


class CancelTransferBody(BaseModel):
    reason: str = Field(..., min_length=1)


class ReverseTransferBody(BaseModel):
    reason: str = Field(..., min_length=1)
    description: str = ""
