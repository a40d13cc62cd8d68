"""Integration tests for API endpoints"""

import json
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from northwind_portal.domain.exceptions import NorthwindApiError
from northwind_portal.infrastructure.clients.schemas import TransferStatusResponse


@pytest.fixture
def routed_transport(raw_checking, raw_savings, transfer_summary):
    """Northwind stand-in answering by path, recording every request"""
    second_checking = {**raw_checking, "account_id": "acct-004", "account_number": "4444555566"}
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path == "/external/accounts":
            return httpx.Response(
                200,
                json={
                    "accounts": [raw_checking, raw_savings, second_checking],
                    "pagination": {"page": 1, "per_page": 100, "total": 3},
                },
            )
        if path == "/external/transfers":
            return httpx.Response(
                200,
                json={"transfers": [transfer_summary], "pagination": {"page": 1, "per_page": 20, "total": 1}},
            )
        if path == "/external/transfers/initiate":
            return httpx.Response(200, json={"transfer_id": "trx-new", "status": "PENDING"})
        return httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": "No such route", "request_id": "r", "timestamp": ""}})

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport


@pytest.fixture
def client(routed_transport, make_client, app_client_for) -> TestClient:
    return app_client_for(make_client(routed_transport))


@pytest.fixture
def transfer_form() -> dict:
    return {
        "from_account_number": "1234567890",
        "from_routing_number": "021000021",
        "from_account_holder": "Jane Doe",
        "to_account_number": "9876543210",
        "to_routing_number": "021000021",
        "to_account_holder": "Jane Doe",
        "amount": "75.50",
        "description": "",
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.get("/v1/dashboard")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "northwind_upstream_requests_total" in response.text


def test_request_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_dashboard_loads_enriched_accounts(client: TestClient, routed_transport):
    """Test GET /v1/dashboard combines accounts, transfers and mock history"""
    response = client.get("/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["load_error"] is None
    assert [a["display_name"] for a in data["accounts"]["accounts"]] == [
        "Checking Account 1",
        "Savings Account",
        "Checking Account 2",
    ]
    assert data["accounts"]["accounts"][1]["formatted_balance"] == "$12,500.50"
    assert data["accounts"]["accounts"][0]["account_type_label"] == "Checking"
    assert data["transfers"]["transfers"][0]["transfer_id"] == "trx-001"
    assert len(data["transactions"]) == 15
    assert data["transactions"][0]["display_date"] == "Feb 24"


def test_dashboard_requests_expected_page_sizes(client: TestClient, routed_transport):
    client.get("/v1/dashboard")

    urls = {r.url.path: r.url.params for r in routed_transport.requests}
    assert urls["/external/accounts"]["limit"] == "100"
    assert urls["/external/transfers"]["per_page"] == "20"


@patch("northwind_portal.infrastructure.clients.northwind.TransfersEndpoints.list")
def test_dashboard_discards_partial_results_on_failure(
    mock_transfers: AsyncMock,
    client: TestClient,
):
    """Test GET /v1/dashboard reports load_error when either fetch fails"""
    mock_transfers.side_effect = NorthwindApiError(
        503, {"error": {"code": "DOWN", "message": "API unavailable", "request_id": "", "timestamp": ""}}
    )

    response = client.get("/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["load_error"] == "API unavailable"
    assert data["accounts"]["accounts"] == []
    assert data["transfers"]["transfers"] == []
    assert data["accounts"]["pagination"] == {"page": 1, "per_page": 0, "total": 0}
    assert data["transfers"]["pagination"] == {"page": 1, "per_page": 0, "total": 0}


def test_dashboard_transport_failure(make_client, app_client_for):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused")

    client = app_client_for(make_client(httpx.MockTransport(handler)))
    data = client.get("/v1/dashboard").json()

    assert data["load_error"] == "Connection refused"
    assert data["accounts"]["accounts"] == []


def test_submit_transfer_success(client: TestClient, routed_transport, transfer_form):
    """Test POST /v1/transfers initiates an outbound ACH transfer"""
    response = client.post("/v1/transfers", json=transfer_form)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["transfer_id"] == "trx-new"
    assert data["amount"] == 75.5
    assert data["reference_number"].startswith("TRF-")

    sent = routed_transport.requests[-1]
    assert sent.url.path == "/external/transfers/initiate"
    body = json.loads(sent.content)
    assert body["direction"] == "OUTBOUND"
    assert body["transfer_type"] == "ACH"
    assert body["description"] == "Balance Transfer"
    assert body["reference_number"] == data["reference_number"]


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"to_account_number": ""}, "Please select both From and To accounts."),
        ({"to_account_number": "1234567890"}, "Source and destination accounts must be different."),
        ({"amount": "abc"}, "Please enter a valid transfer amount."),
        ({"amount": "-1"}, "Please enter a valid transfer amount."),
    ],
)
def test_submit_transfer_form_errors(client: TestClient, routed_transport, transfer_form, overrides, message):
    response = client.post("/v1/transfers", json={**transfer_form, **overrides})

    assert response.status_code == 400
    assert response.json()["detail"] == message
    assert routed_transport.requests == []


@patch("northwind_portal.infrastructure.clients.northwind.TransfersEndpoints.initiate")
def test_submit_transfer_upstream_error(mock_initiate: AsyncMock, client: TestClient, transfer_form):
    mock_initiate.side_effect = NorthwindApiError(
        422, {"error": {"code": "LIMIT", "message": "Daily limit exceeded", "request_id": "", "timestamp": ""}}
    )

    response = client.post("/v1/transfers", json=transfer_form)

    assert response.status_code == 502
    assert response.json()["detail"] == "Daily limit exceeded"


@patch("northwind_portal.infrastructure.clients.northwind.TransfersEndpoints.get")
def test_get_transfer_passthrough(mock_get: AsyncMock, client: TestClient, transfer_summary):
    mock_get.return_value = TransferStatusResponse.model_validate(transfer_summary)

    response = client.get("/v1/transfers/trx-001")

    assert response.status_code == 200
    assert response.json()["status"] == "COMPLETED"
    mock_get.assert_awaited_once_with("trx-001")


def test_get_transfer_not_found_keeps_upstream_status(client: TestClient):
    response = client.get("/v1/transfers/missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "No such route"


def test_cancel_requires_reason(client: TestClient):
    response = client.post("/v1/transfers/trx-001/cancel", json={"reason": ""})
    assert response.status_code == 422


def test_reset_unreachable_returns_503(make_client, app_client_for):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out")

    client = app_client_for(make_client(httpx.MockTransport(handler)))
    response = client.post("/v1/reset")

    assert response.status_code == 503
    assert response.json()["detail"] == "Northwind service unavailable"
