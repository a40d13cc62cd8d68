"""Pytest fixtures for testing"""

import json
import pytest
from typing import Any, Callable, Dict, List
import httpx
from fastapi.testclient import TestClient
from northwind_portal.api.main import create_app
from northwind_portal.api.dependencies import get_northwind_client
from northwind_portal.infrastructure.clients.northwind import NorthwindClient
from northwind_portal.infrastructure.clients.schemas import AccountSummary


TEST_BASE_URL = "https://api.test"
TEST_API_KEY = "test-key-abc"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Build a transport answering every request with the same response"""

    def factory(status_code: int = 200, json_body: Any = None, content: bytes | None = None, exc: Exception | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json={} if json_body is None else json_body)

        return RecordingTransport(handler)

    return factory


@pytest.fixture
def make_client() -> Callable[[httpx.AsyncBaseTransport], NorthwindClient]:
    """Northwind client pointed at the test base URL with the given transport"""

    def factory(transport: httpx.AsyncBaseTransport) -> NorthwindClient:
        return NorthwindClient(base_url=TEST_BASE_URL, api_key=TEST_API_KEY, transport=transport)

    return factory


@pytest.fixture
def app_client_for() -> Callable[[NorthwindClient], TestClient]:
    """FastAPI test client whose Northwind dependency is the given client"""

    def factory(northwind: NorthwindClient) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_northwind_client] = lambda: northwind
        return TestClient(app)

    return factory


@pytest.fixture
def raw_checking() -> Dict[str, Any]:
    return {
        "account_id": "acct-001",
        "account_number": "1234567890",
        "routing_number": "021000021",
        "account_type": "CHECKING",
        "account_status": "ACTIVE",
        "account_holder_name": "Jane Doe",
        "balance": 5000.0,
        "currency": "USD",
        "opened_date": "2020-01-15",
    }


@pytest.fixture
def raw_savings() -> Dict[str, Any]:
    return {
        "account_id": "acct-002",
        "account_number": "9876543210",
        "routing_number": "021000021",
        "account_type": "SAVINGS",
        "account_status": "ACTIVE",
        "account_holder_name": "Jane Doe",
        "balance": 12500.5,
        "currency": "USD",
        "opened_date": "2020-06-01",
    }


@pytest.fixture
def raw_closed() -> Dict[str, Any]:
    return {
        "account_id": "acct-003",
        "account_number": "1111222233",
        "routing_number": "021000021",
        "account_type": "CHECKING",
        "account_status": "CLOSED",
        "account_holder_name": "Jane Doe",
        "balance": 0,
        "currency": "USD",
        "opened_date": "2018-03-10",
    }


@pytest.fixture
def make_account(raw_checking: Dict[str, Any]) -> Callable[..., AccountSummary]:
    """AccountSummary based on the checking fixture with overrides"""

    def factory(**overrides: Any) -> AccountSummary:
        return AccountSummary(**{**raw_checking, **overrides})

    return factory


@pytest.fixture
def transfer_summary() -> Dict[str, Any]:
    return {
        "transfer_id": "trx-001",
        "status": "COMPLETED",
        "transfer_type": "ACH",
        "direction": "OUTBOUND",
        "amount": 250.0,
        "currency": "USD",
        "fee": 0.0,
        "description": "Rent",
        "reference_number": "REF-001",
        "initiated_date": "2026-02-20T10:00:00Z",
        "processing_date": "2026-02-21T10:00:00Z",
        "expected_completion_date": "2026-02-22",
        "completed_date": "2026-02-22T09:00:00Z",
        "source_account": {
            "account_holder_name": "Jane Doe",
            "account_number": "1234567890",
            "institution_name": "Northwind Bank",
            "routing_number": "021000021",
        },
        "destination_account": {
            "account_holder_name": "John Roe",
            "account_number": "5555666677",
            "institution_name": "Other Bank",
            "routing_number": "026009593",
        },
    }
