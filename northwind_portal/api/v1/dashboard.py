"""GET /v1/dashboard - accounts, recent transfers and mock transaction history"""

import asyncio
import logging
import random
from fastapi import APIRouter, Depends, Request

from northwind_portal.api.v1.schemas import (
    DashboardAccount,
    DashboardAccounts,
    DashboardResponse,
    DashboardTransaction,
    DashboardTransfers,
)
from northwind_portal.api.dependencies import get_northwind_client, get_request_id
from northwind_portal.config import settings
from northwind_portal.domain.accounts import enrich_accounts
from northwind_portal.domain.mock_transactions import get_mock_transactions
from northwind_portal.infrastructure.clients.northwind import NorthwindClient
from northwind_portal.infrastructure.clients.schemas import PaginationInfo
from northwind_portal.utils.formatting import format_account_type, format_currency, format_date

router = APIRouter()

LOAD_ERROR_FALLBACK = "Failed to load account data."


def _mock_transactions() -> list[DashboardTransaction]:
    rng = random.Random(settings.mock_transaction_seed) if settings.mock_transaction_seed is not None else None
    return [
        DashboardTransaction(
            id=tx.id,
            description=tx.description,
            amount=tx.amount,
            date=tx.date,
            display_date=format_date(tx.date),
            type=tx.type,
            category=tx.category,
            account_label=tx.account_label,
        )
        for tx in get_mock_transactions(rng=rng)
    ]


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    client: NorthwindClient = Depends(get_northwind_client),
):
    """
    Load everything the accounts and transfer views render.

    Flow:
    1. Fetch accounts and recent transfers concurrently
    2. If either call fails, discard both and report load_error
    3. Enrich accounts with display names and formatted balances
    4. Attach mock transaction history
    """
    request_id = get_request_id(request)

    try:
        accounts_response, transfers_response = await asyncio.gather(
            client.accounts.list(limit=settings.dashboard_account_limit),
            client.transfers.list(per_page=settings.dashboard_transfer_page_size),
        )
    except Exception as e:
        logging.error(f"Dashboard load failed: {e}", extra={"request_id": request_id})
        return DashboardResponse(
            accounts=DashboardAccounts(accounts=[], pagination=PaginationInfo(page=1, per_page=0, total=0)),
            transfers=DashboardTransfers(transfers=[], pagination=PaginationInfo(page=1, per_page=0, total=0)),
            transactions=_mock_transactions(),
            load_error=str(e) or LOAD_ERROR_FALLBACK,
        )

    accounts = [
        DashboardAccount(
            account_id=account.account_id,
            account_number=account.account_number,
            routing_number=account.routing_number,
            account_type=account.account_type,
            account_type_label=format_account_type(account.account_type),
            account_status=account.account_status,
            account_holder_name=account.account_holder_name,
            balance=account.balance,
            formatted_balance=format_currency(account.balance, account.currency),
            currency=account.currency,
            opened_date=account.opened_date,
            display_name=account.display_name,
        )
        for account in enrich_accounts(accounts_response.accounts)
    ]

    return DashboardResponse(
        accounts=DashboardAccounts(accounts=accounts, pagination=accounts_response.pagination),
        transfers=DashboardTransfers(
            transfers=transfers_response.transfers,
            pagination=transfers_response.pagination,
        ),
        transactions=_mock_transactions(),
        load_error=None,
    )
