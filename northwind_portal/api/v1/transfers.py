"""Transfer endpoints - form submission plus status, cancel and reverse pass-throughs"""

import logging
import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

from northwind_portal.api.v1.schemas import (
    CancelTransferBody,
    ReverseTransferBody,
    TransferFormRequest,
    TransferSubmitResponse,
)
from northwind_portal.api.dependencies import get_northwind_client, get_request_id
from northwind_portal.config import settings
from northwind_portal.domain.exceptions import NorthwindApiError, TransferFormError
from northwind_portal.domain.models import TransferForm
from northwind_portal.domain.transfers import (
    build_transfer_request,
    generate_reference_number,
    validate_transfer_form,
)
from northwind_portal.infrastructure.clients.northwind import NorthwindClient
from northwind_portal.infrastructure.clients.schemas import (
    TransferCancelRequest,
    TransferCancelResponse,
    TransferReverseRequest,
    TransferReverseResponse,
    TransferStatusResponse,
)
from northwind_portal.infrastructure.observability.logging import log_transfer_outcome
from northwind_portal.infrastructure.observability.metrics import record_transfer_submission

router = APIRouter()

TRANSFER_FAILED_FALLBACK = "Transfer failed. Please try again."


@router.post("/transfers", response_model=TransferSubmitResponse)
async def submit_transfer(
    body: TransferFormRequest,
    request: Request,
    client: NorthwindClient = Depends(get_northwind_client),
):
    """
    Validate the transfer form and initiate an outbound ACH transfer.

    Flow:
    1. Check both accounts are selected and distinct, amount is positive
    2. Generate a fresh reference number for this attempt
    3. Initiate the transfer with Northwind
    """
    request_id = get_request_id(request)
    form = TransferForm(**body.model_dump())

    try:
        amount = validate_transfer_form(form)
    except TransferFormError as e:
        record_transfer_submission("rejected")
        logging.warning(f"Transfer form rejected: {e.message}", extra={"request_id": request_id})
        raise HTTPException(status_code=e.status_code, detail=e.message)

    reference_number = generate_reference_number()
    transfer_request = build_transfer_request(
        form,
        amount,
        reference_number,
        currency=settings.default_currency,
        transfer_type=settings.default_transfer_type,
    )

    try:
        result = await client.transfers.initiate(transfer_request)
    except (NorthwindApiError, httpx.RequestError) as e:
        record_transfer_submission("failed")
        message = str(e) or TRANSFER_FAILED_FALLBACK
        log_transfer_outcome(request_id, reference_number, "failed", amount, error=message)
        raise HTTPException(status_code=502, detail=message)

    record_transfer_submission("initiated")
    log_transfer_outcome(request_id, reference_number, "initiated", amount, transfer_id=result.transfer_id)

    return TransferSubmitResponse(
        transfer_id=result.transfer_id,
        reference_number=reference_number,
        amount=amount,
        from_account_number=form.from_account_number,
        to_account_number=form.to_account_number,
    )


def _upstream_http_error(e: Exception, request_id: str) -> HTTPException:
    """Map a facade failure onto the response returned to the browser"""
    if isinstance(e, NorthwindApiError):
        return HTTPException(status_code=e.status, detail=e.message)
    logging.error(f"Northwind unreachable: {e!r}", extra={"request_id": request_id})
    return HTTPException(status_code=503, detail="Northwind service unavailable")


@router.get("/transfers/{transfer_id}", response_model=TransferStatusResponse)
async def get_transfer(
    transfer_id: str,
    request: Request,
    client: NorthwindClient = Depends(get_northwind_client),
):
    """Current status and history of one transfer"""
    try:
        return await client.transfers.get(transfer_id)
    except (NorthwindApiError, httpx.RequestError) as e:
        raise _upstream_http_error(e, get_request_id(request))


@router.post("/transfers/{transfer_id}/cancel", response_model=TransferCancelResponse)
async def cancel_transfer(
    transfer_id: str,
    body: CancelTransferBody,
    request: Request,
    client: NorthwindClient = Depends(get_northwind_client),
):
    try:
        return await client.transfers.cancel(transfer_id, TransferCancelRequest(reason=body.reason))
    except (NorthwindApiError, httpx.RequestError) as e:
        raise _upstream_http_error(e, get_request_id(request))


@router.post("/transfers/{transfer_id}/reverse", response_model=TransferReverseResponse)
async def reverse_transfer(
    transfer_id: str,
    body: ReverseTransferBody,
    request: Request,
    client: NorthwindClient = Depends(get_northwind_client),
):
    try:
        return await client.transfers.reverse(
            transfer_id,
            TransferReverseRequest(reason=body.reason, description=body.description),
        )
    except (NorthwindApiError, httpx.RequestError) as e:
        raise _upstream_http_error(e, get_request_id(request))


@router.post("/reset")
async def reset_demo(
    request: Request,
    client: NorthwindClient = Depends(get_northwind_client),
):
    """Reset Northwind demo data to its initial state"""
    try:
        return await client.reset()
    except (NorthwindApiError, httpx.RequestError) as e:
        raise _upstream_http_error(e, get_request_id(request))
