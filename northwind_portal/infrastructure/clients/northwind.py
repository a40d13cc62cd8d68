"""Northwind Bank API HTTP client.

Request construction, bearer auth injection and translation of non-2xx
responses into ``NorthwindApiError``. Each call opens its own
``httpx.AsyncClient`` and sends exactly one request: no retries, no caching.
Transport failures (``httpx.RequestError``) propagate unwrapped.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from northwind_portal.config import settings
from northwind_portal.domain.exceptions import NorthwindApiError
from northwind_portal.infrastructure.clients.schemas import (
    AccountBalanceResponse,
    AccountListResponse,
    AccountValidationRequest,
    BankInfoResponse,
    BatchTransferResponse,
    DomainsResponse,
    HealthResponse,
    TransferCancelRequest,
    TransferCancelResponse,
    TransferListResponse,
    TransferRequest,
    TransferReverseRequest,
    TransferReverseResponse,
    TransferStatusResponse,
    ValidationResponse,
)
from northwind_portal.infrastructure.observability.metrics import (
    record_upstream_call,
    upstream_failure_counter,
    upstream_latency_histogram,
)

logger = logging.getLogger("northwind_portal.client")


def query_string(params: Optional[Mapping[str, Any]]) -> str:
    """Encode the non-None filters as ``?k=v&...``, or ``""`` when none remain"""
    defined = {key: str(value) for key, value in (params or {}).items() if value is not None}
    if not defined:
        return ""
    return f"?{httpx.QueryParams(defined)}"


def build_request(
    base_url: str,
    api_key: str,
    path: str,
    method: str = "GET",
    json_body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> httpx.Request:
    """
    Build an authenticated JSON request against the Northwind API.

    Content-Type and Authorization are always set; caller-supplied headers
    are merged on top and win on conflict. The body is JSON-encoded only
    when present.
    """
    merged = httpx.Headers(
        {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
    )
    if headers:
        merged.update(headers)

    return httpx.Request(
        method,
        f"{base_url.rstrip('/')}{path}",
        headers=merged,
        json=json_body,
    )


def parse_response(response: httpx.Response) -> Any:
    """
    Return the parsed JSON body of a successful response.

    Raises:
        NorthwindApiError: On any non-2xx status. When the error body is not
            JSON (or not an object) a fallback body is synthesized from the
            status code and reason phrase.
    """
    if response.is_success:
        return response.json()

    try:
        body = response.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        body = {
            "error": {
                "code": str(response.status_code),
                "message": response.reason_phrase,
                "request_id": "",
                "timestamp": "",
            }
        }

    raise NorthwindApiError(response.status_code, body)


class NorthwindClient:
    """Typed facade over the Northwind Bank REST API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.northwind_api_base_url
        self.api_key = api_key if api_key is not None else settings.northwind_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

        self.accounts = AccountsEndpoints(self)
        self.transfers = TransfersEndpoints(self)

    async def request(
        self,
        path: str,
        method: str = "GET",
        json_body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body"""
        request = build_request(self.base_url, self.api_key, path, method, json_body, headers)
        logger.debug("Northwind request", extra={"method": method, "path": path})

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with upstream_latency_histogram.time():
                    response = await client.send(request)
            except httpx.RequestError as e:
                upstream_failure_counter.labels(kind="transport").inc()
                logger.error(
                    f"Northwind transport failure: {e!r}",
                    extra={"method": method, "path": path},
                )
                raise

            record_upstream_call(method, response.status_code)
            try:
                return parse_response(response)
            except NorthwindApiError as e:
                upstream_failure_counter.labels(kind=e.kind).inc()
                logger.warning(
                    f"Northwind API error: {e}",
                    extra={
                        "method": method,
                        "path": path,
                        "status": e.status,
                        "code": e.code,
                        "upstream_request_id": e.request_id,
                    },
                )
                raise

    async def health(self) -> HealthResponse:
        """Check the health status of the API and database"""
        return HealthResponse.model_validate(await self.request("/health"))

    async def get_bank(self) -> BankInfoResponse:
        """Get institution details, routing numbers and services"""
        return BankInfoResponse.model_validate(await self.request("/bank"))

    async def get_domains(self) -> DomainsResponse:
        """Get all valid domain values"""
        return DomainsResponse.model_validate(await self.request("/domains"))

    async def reset(self) -> Dict[str, Any]:
        """Reset Northwind to its initial demo state"""
        return await self.request("/external/reset", method="POST")


class AccountsEndpoints:
    """``/external/accounts`` operations"""

    def __init__(self, client: NorthwindClient):
        self._client = client

    async def list(
        self,
        limit: int | None = None,
        offset: int | None = None,
        type: str | None = None,
        status: str | None = None,
    ) -> AccountListResponse:
        """List all accounts accessible to the authenticated candidate"""
        qs = query_string({"limit": limit, "offset": offset, "type": type, "status": status})
        return AccountListResponse.model_validate(await self._client.request(f"/external/accounts{qs}"))

    async def validate(self, body: AccountValidationRequest) -> ValidationResponse:
        """Validate account details before initiating transfers"""
        data = await self._client.request("/external/accounts/validate", method="POST", json_body=body.to_wire())
        return ValidationResponse.model_validate(data)

    async def get_balance(self, account_number: str) -> AccountBalanceResponse:
        """Get real-time account balance"""
        data = await self._client.request(f"/external/accounts/{account_number}/balance")
        return AccountBalanceResponse.model_validate(data)


class TransfersEndpoints:
    """``/external/transfers`` operations"""

    def __init__(self, client: NorthwindClient):
        self._client = client

    async def list(
        self,
        page: int | None = None,
        per_page: int | None = None,
        status: str | None = None,
        direction: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        transfer_type: str | None = None,
    ) -> TransferListResponse:
        """List all transfers with optional filters"""
        qs = query_string(
            {
                "page": page,
                "per_page": per_page,
                "status": status,
                "direction": direction,
                "date_from": date_from,
                "date_to": date_to,
                "transfer_type": transfer_type,
            }
        )
        return TransferListResponse.model_validate(await self._client.request(f"/external/transfers{qs}"))

    async def get(self, transfer_id: str) -> TransferStatusResponse:
        """Get detailed status of a specific transfer"""
        return TransferStatusResponse.model_validate(await self._client.request(f"/external/transfers/{transfer_id}"))

    async def validate(self, body: TransferRequest) -> ValidationResponse:
        """Validate a proposed transfer without creating it"""
        data = await self._client.request("/external/transfers/validate", method="POST", json_body=body.to_wire())
        return ValidationResponse.model_validate(data)

    async def initiate(self, body: TransferRequest) -> TransferStatusResponse:
        """Initiate a new external transfer"""
        data = await self._client.request("/external/transfers/initiate", method="POST", json_body=body.to_wire())
        return TransferStatusResponse.model_validate(data)

    async def batch(self, transfers: List[TransferRequest]) -> BatchTransferResponse:
        """Submit multiple transfers in a single request (the remote caps a batch at 100)"""
        data = await self._client.request(
            "/external/transfers/batch",
            method="POST",
            json_body={"transfers": [t.to_wire() for t in transfers]},
        )
        return BatchTransferResponse.model_validate(data)

    async def cancel(self, transfer_id: str, body: TransferCancelRequest) -> TransferCancelResponse:
        """Cancel a pending transfer"""
        data = await self._client.request(
            f"/external/transfers/{transfer_id}/cancel", method="POST", json_body=body.to_wire()
        )
        return TransferCancelResponse.model_validate(data)

    async def reverse(self, transfer_id: str, body: TransferReverseRequest) -> TransferReverseResponse:
        """Request reversal of a completed ACH transfer"""
        data = await self._client.request(
            f"/external/transfers/{transfer_id}/reverse", method="POST", json_body=body.to_wire()
        )
        return TransferReverseResponse.model_validate(data)
