"""Transfer form validation and request construction"""

import math
import random
import string
import time
from typing import Optional

from northwind_portal.domain.exceptions import TransferFormError
from northwind_portal.domain.models import TransferForm
from northwind_portal.infrastructure.clients.schemas import ExternalAccountDetails, TransferRequest

DEFAULT_DESCRIPTION = "Balance Transfer"

_BASE36 = string.digits + string.ascii_uppercase


def validate_transfer_form(form: TransferForm) -> float:
    """
    Check a submitted transfer form and return the parsed amount.

    Raises:
        TransferFormError: Missing account, same account on both sides,
            or an amount that is not a positive number
    """
    if not form.from_account_number or not form.to_account_number:
        raise TransferFormError("Please select both From and To accounts.")

    if form.from_account_number == form.to_account_number:
        raise TransferFormError("Source and destination accounts must be different.")

    try:
        amount = float(form.amount)
    except (TypeError, ValueError):
        raise TransferFormError("Please enter a valid transfer amount.")

    if not math.isfinite(amount) or amount <= 0:
        raise TransferFormError("Please enter a valid transfer amount.")

    return amount


def generate_reference_number(now: Optional[float] = None, rng: Optional[random.Random] = None) -> str:
    """Reference number unique per attempt: TRF-<epoch ms>-<5 base36 chars>"""
    now = time.time() if now is None else now
    rng = rng or random.Random()
    suffix = "".join(rng.choice(_BASE36) for _ in range(5))
    return f"TRF-{int(now * 1000)}-{suffix}"


def build_transfer_request(
    form: TransferForm,
    amount: float,
    reference_number: str,
    currency: str = "USD",
    transfer_type: str = "ACH",
) -> TransferRequest:
    """Outbound transfer between the two accounts named on the form"""
    return TransferRequest(
        amount=amount,
        currency=currency,
        description=form.description.strip() or DEFAULT_DESCRIPTION,
        direction="OUTBOUND",
        transfer_type=transfer_type,
        reference_number=reference_number,
        source_account=ExternalAccountDetails(
            account_number=form.from_account_number,
            routing_number=form.from_routing_number,
            account_holder_name=form.from_account_holder,
        ),
        destination_account=ExternalAccountDetails(
            account_number=form.to_account_number,
            routing_number=form.to_routing_number,
            account_holder_name=form.to_account_holder,
        ),
    )
