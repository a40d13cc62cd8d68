"""In-memory stand-in for the Northwind Bank API, for local development and e2e tests"""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

MOCK_API_KEY = "demo-key"
ROUTING_NUMBER = "021000021"

SEED_ACCOUNTS: List[Dict[str, Any]] = [
    {
        "account_id": "acct-001",
        "account_number": "1234567890",
        "routing_number": ROUTING_NUMBER,
        "account_type": "CHECKING",
        "account_status": "ACTIVE",
        "account_holder_name": "Jane Doe",
        "balance": 5000.00,
        "currency": "USD",
        "opened_date": "2020-01-15",
    },
    {
        "account_id": "acct-002",
        "account_number": "9876543210",
        "routing_number": ROUTING_NUMBER,
        "account_type": "SAVINGS",
        "account_status": "ACTIVE",
        "account_holder_name": "Jane Doe",
        "balance": 12500.50,
        "currency": "USD",
        "opened_date": "2020-06-01",
    },
    {
        "account_id": "acct-003",
        "account_number": "1111222233",
        "routing_number": ROUTING_NUMBER,
        "account_type": "CHECKING",
        "account_status": "ACTIVE",
        "account_holder_name": "Jane Doe",
        "balance": 250.00,
        "currency": "USD",
        "opened_date": "2022-03-10",
    },
]


class MockApiError(Exception):
    def __init__(self, status: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.status = status
        self.code = code
        self.message = message
        self.details = details


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MockBank:
    """Mutable demo state: accounts and transfers keyed by id"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.accounts = copy.deepcopy(SEED_ACCOUNTS)
        self.transfers: Dict[str, Dict[str, Any]] = {}

    def find_account(self, account_number: str) -> Dict[str, Any]:
        for account in self.accounts:
            if account["account_number"] == account_number:
                return account
        raise MockApiError(404, "ACCOUNT_NOT_FOUND", f"Account {account_number} not found")

    def find_transfer(self, transfer_id: str) -> Dict[str, Any]:
        if transfer_id not in self.transfers:
            raise MockApiError(404, "TRANSFER_NOT_FOUND", f"Transfer {transfer_id} not found")
        return self.transfers[transfer_id]

    def validate_transfer(self, body: Dict[str, Any]) -> List[Dict[str, str]]:
        issues = []
        amount = body.get("amount")
        if not isinstance(amount, (int, float)) or amount <= 0:
            issues.append(
                {"code": "INVALID_AMOUNT", "field": "amount", "message": "Amount must be positive", "severity": "error"}
            )
        source = (body.get("source_account") or {}).get("account_number")
        destination = (body.get("destination_account") or {}).get("account_number")
        if not source or not destination:
            issues.append(
                {"code": "MISSING_ACCOUNT", "field": "source_account", "message": "Both accounts are required", "severity": "error"}
            )
        elif source == destination:
            issues.append(
                {"code": "SAME_ACCOUNT", "field": "destination_account", "message": "Accounts must differ", "severity": "error"}
            )
        return issues

    def create_transfer(self, body: Dict[str, Any]) -> Dict[str, Any]:
        issues = self.validate_transfer(body)
        if issues:
            raise MockApiError(400, "VALIDATION_ERROR", issues[0]["message"], {"issues": issues})

        now = datetime.now(timezone.utc)
        transfer_id = f"trx-{uuid.uuid4().hex[:12]}"
        transfer = {
            "transfer_id": transfer_id,
            "status": "PENDING",
            "transfer_type": body["transfer_type"],
            "direction": body["direction"],
            "amount": body["amount"],
            "currency": body["currency"],
            "fee": 0.0,
            "exchange_rate": 1.0,
            "description": body.get("description", ""),
            "reference_number": body["reference_number"],
            "initiated_date": now.isoformat(),
            "processing_date": "",
            "expected_completion_date": (now + timedelta(days=2)).date().isoformat(),
            "completed_date": "",
            "source_account": self._account_details(body["source_account"]),
            "destination_account": self._account_details(body["destination_account"]),
            "status_history": [{"status": "PENDING", "description": "Transfer initiated", "timestamp": now.isoformat()}],
            "retry_count": 0,
        }
        self.transfers[transfer_id] = transfer
        return transfer

    @staticmethod
    def _account_details(account: Dict[str, Any]) -> Dict[str, str]:
        return {
            "account_holder_name": account.get("account_holder_name", ""),
            "account_number": account["account_number"],
            "institution_name": account.get("institution_name", "Northwind Bank"),
            "routing_number": account.get("routing_number", ""),
        }

    def transition(self, transfer_id: str, status: str, description: str) -> Dict[str, Any]:
        transfer = self.find_transfer(transfer_id)
        transfer["status"] = status
        transfer["status_history"].append({"status": status, "description": description, "timestamp": _now()})
        return transfer


def _error_response(status: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    error: Dict[str, Any] = {
        "code": code,
        "message": message,
        "request_id": f"req-{uuid.uuid4().hex[:8]}",
        "timestamp": _now(),
    }
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status, content={"error": error})


def _paginate(items: List[Dict[str, Any]], page: int, per_page: int) -> Dict[str, Any]:
    start = (page - 1) * per_page
    return {"items": items[start : start + per_page], "pagination": {"page": page, "per_page": per_page, "total": len(items)}}


def create_mock_app(api_key: str = MOCK_API_KEY) -> FastAPI:
    """Build a mock Northwind API that accepts ``Authorization: Bearer <api_key>``"""
    app = FastAPI(title="Mock Northwind Bank", version="1.0.0")
    bank = MockBank()
    app.state.bank = bank

    @app.exception_handler(MockApiError)
    async def handle_mock_error(request: Request, exc: MockApiError):
        return _error_response(exc.status, exc.code, exc.message, exc.details)

    @app.middleware("http")
    async def require_api_key(request: Request, call_next):
        if request.url.path.startswith("/external") and request.headers.get("Authorization") != f"Bearer {api_key}":
            return _error_response(401, "UNAUTHORIZED", "Invalid API key")
        return await call_next(request)

    @app.get("/health")
    def health():
        return {
            "status": "healthy",
            "database": "connected",
            "version": "1.0.0",
            "timestamp": _now(),
            "components": {"api": "ok", "database": "ok"},
            "transfer_workflow": {"enabled": True},
        }

    @app.get("/bank")
    def bank_info():
        return {
            "institution": {"name": "Northwind Bank", "city": "Seattle", "state": "WA", "established": "1998"},
            "routing_numbers": [
                {"routing_number": ROUTING_NUMBER, "status": "current", "description": "Primary", "valid_for": ["ACH", "WIRE"]}
            ],
            "services": {"ach_transfers": True, "wire_transfers": True, "check_processing": False, "mobile_banking": True},
            "business_hours": {"customer_service": "8am-8pm PT", "wire_cutoff": "3pm PT"},
        }

    @app.get("/domains")
    def domains():
        return {
            "account_types": [{"code": "CHECKING", "display_name": "Checking"}, {"code": "SAVINGS", "display_name": "Savings"}],
            "account_statuses": [{"code": "ACTIVE", "display_name": "Active"}, {"code": "CLOSED", "display_name": "Closed"}],
            "directions": [{"code": "INBOUND", "display_name": "Inbound"}, {"code": "OUTBOUND", "display_name": "Outbound"}],
            "transfer_types": [
                {"code": "ACH", "display_name": "ACH", "fee": 0.0, "min_amount": 0.01, "max_amount": 25000, "processing_days": 2}
            ],
        }

    @app.get("/external/accounts")
    def list_accounts(limit: int = 20, offset: int = 0, type: Optional[str] = None, status: Optional[str] = None):
        accounts = [
            a
            for a in bank.accounts
            if (type is None or a["account_type"] == type.upper())
            and (status is None or a["account_status"] == status.upper())
        ]
        return {
            "accounts": accounts[offset : offset + limit],
            "pagination": {"page": offset // limit + 1 if limit else 1, "per_page": limit, "total": len(accounts)},
        }

    @app.post("/external/accounts/validate")
    async def validate_account(request: Request):
        body = await request.json()
        issues = []
        try:
            account = bank.find_account(body.get("account_number", ""))
            if account["routing_number"] != body.get("routing_number"):
                issues.append({"code": "ROUTING_MISMATCH", "field": "routing_number", "message": "Routing number does not match", "severity": "error"})
            if account["account_holder_name"].lower() != str(body.get("account_holder_name", "")).lower():
                issues.append({"code": "NAME_MISMATCH", "field": "account_holder_name", "message": "Holder name does not match", "severity": "warning"})
        except MockApiError:
            issues.append({"code": "ACCOUNT_NOT_FOUND", "field": "account_number", "message": "Account not found", "severity": "error"})
        valid = not any(i["severity"] == "error" for i in issues)
        return {"validation": {"valid": valid, "issues": issues, "validation_time": _now()}}

    @app.get("/external/accounts/{account_number}/balance")
    def account_balance(account_number: str):
        account = bank.find_account(account_number)
        return {
            "account_number": account_number,
            "current_balance": account["balance"],
            "available_balance": account["balance"],
            "currency": account["currency"],
            "last_updated": _now(),
        }

    @app.get("/external/transfers")
    def list_transfers(
        page: int = 1,
        per_page: int = 20,
        status: Optional[str] = None,
        direction: Optional[str] = None,
        transfer_type: Optional[str] = None,
    ):
        transfers = [
            t
            for t in bank.transfers.values()
            if (status is None or t["status"] == status)
            and (direction is None or t["direction"] == direction)
            and (transfer_type is None or t["transfer_type"] == transfer_type)
        ]
        result = _paginate(transfers, page, per_page)
        return {"transfers": result["items"], "pagination": result["pagination"]}

    @app.post("/external/transfers/validate")
    async def validate_transfer(request: Request):
        issues = bank.validate_transfer(await request.json())
        return {"validation": {"valid": not issues, "issues": issues, "validation_time": _now()}}

    @app.post("/external/transfers/initiate")
    async def initiate_transfer(request: Request):
        return bank.create_transfer(await request.json())

    @app.post("/external/transfers/batch")
    async def batch_transfers(request: Request):
        body = await request.json()
        items = body.get("transfers", [])
        if len(items) > 100:
            raise MockApiError(400, "BATCH_TOO_LARGE", "A batch may contain at most 100 transfers")
        results = []
        for item in items:
            try:
                transfer = bank.create_transfer(item)
                results.append({"transfer_id": transfer["transfer_id"], "status": "PENDING", "reference_number": item["reference_number"]})
            except MockApiError as e:
                results.append({"transfer_id": "", "status": "REJECTED", "reference_number": item.get("reference_number", ""), "error": e.message})
        accepted = sum(1 for r in results if r["status"] != "REJECTED")
        return {
            "batch_id": f"batch-{uuid.uuid4().hex[:8]}",
            "total_transfers": len(results),
            "accepted": accepted,
            "rejected": len(results) - accepted,
            "transfers": results,
        }

    @app.get("/external/transfers/{transfer_id}")
    def get_transfer(transfer_id: str):
        return bank.find_transfer(transfer_id)

    @app.post("/external/transfers/{transfer_id}/cancel")
    async def cancel_transfer(transfer_id: str, request: Request):
        body = await request.json()
        if bank.find_transfer(transfer_id)["status"] != "PENDING":
            raise MockApiError(409, "INVALID_STATE", "Only pending transfers can be cancelled")
        transfer = bank.transition(transfer_id, "CANCELLED", body.get("reason", ""))
        return {
            "transfer_id": transfer_id,
            "status": transfer["status"],
            "cancellation_reason": body.get("reason", ""),
            "cancelled_at": _now(),
        }

    @app.post("/external/transfers/{transfer_id}/reverse")
    async def reverse_transfer(transfer_id: str, request: Request):
        await request.json()
        if bank.find_transfer(transfer_id)["status"] != "COMPLETED":
            raise MockApiError(409, "INVALID_STATE", "Only completed transfers can be reversed")
        bank.transition(transfer_id, "REVERSED", "Reversal requested")
        return {
            "reversal_id": f"rev-{uuid.uuid4().hex[:8]}",
            "transfer_id": transfer_id,
            "status": "REVERSAL_PENDING",
            "expected_completion_date": (datetime.now(timezone.utc) + timedelta(days=2)).date().isoformat(),
        }

    @app.post("/external/reset")
    def reset():
        bank.reset()
        return {"message": "Northwind state reset"}

    return app


app = create_mock_app()
