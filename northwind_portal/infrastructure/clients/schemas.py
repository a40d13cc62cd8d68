"""Pydantic models for the Northwind API request/response contract"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class NorthwindModel(BaseModel):
    """Base for response payloads: tolerate keys the remote adds later"""

    model_config = ConfigDict(extra="allow")


class RequestModel(BaseModel):
    """Base for request payloads sent to the remote API"""

    model_config = ConfigDict(extra="forbid")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize for the JSON body, dropping optional fields left unset"""
        return self.model_dump(mode="json", exclude_none=True)


# Shared


class PaginationInfo(NorthwindModel):
    page: int = 1
    per_page: int = 0
    total: int = 0


class AccountDetails(NorthwindModel):
    account_holder_name: str = ""
    account_number: str
    institution_name: str = ""
    routing_number: str = ""


# Accounts


class AccountSummary(NorthwindModel):
    """Account as returned by GET /external/accounts"""

    account_id: str
    account_number: str
    routing_number: str
    account_type: str  # canonically CHECKING, SAVINGS, ... but not constrained
    account_status: str
    account_holder_name: str
    balance: float
    currency: str
    opened_date: str


class AccountListResponse(NorthwindModel):
    accounts: List[AccountSummary] = Field(default_factory=list)
    pagination: PaginationInfo = Field(default_factory=PaginationInfo)


class AccountBalanceResponse(NorthwindModel):
    account_number: str
    current_balance: float
    available_balance: float
    currency: str
    last_updated: str = ""


class AccountValidationRequest(RequestModel):
    account_holder_name: str
    account_number: str
    routing_number: str


# Validation


class ValidationIssue(NorthwindModel):
    code: str
    field: str
    message: str
    severity: Literal["error", "warning", "info"]


class ValidationResult(NorthwindModel):
    valid: bool
    issues: List[ValidationIssue] = Field(default_factory=list)
    validation_time: str = ""
    metadata: Optional[Dict[str, Any]] = None


class ValidationResponse(NorthwindModel):
    validation: ValidationResult
    data: Optional[Any] = None


# Transfers


class ExternalAccountDetails(RequestModel):
    account_number: str
    routing_number: Optional[str] = None
    account_holder_name: Optional[str] = None
    institution_name: Optional[str] = None


class TransferRequest(RequestModel):
    """Body for transfer validate/initiate/batch"""

    amount: float = Field(..., gt=0)
    currency: str
    description: str
    direction: Literal["INBOUND", "OUTBOUND"]
    transfer_type: str
    reference_number: str
    source_account: ExternalAccountDetails
    destination_account: ExternalAccountDetails
    scheduled_date: Optional[str] = None


class StatusHistoryEntry(NorthwindModel):
    status: str
    description: str = ""
    timestamp: str


class TransferSummary(NorthwindModel):
    transfer_id: str
    status: str
    transfer_type: str = ""
    direction: str = ""
    amount: float = 0.0
    currency: str = ""
    fee: float = 0.0
    description: str = ""
    reference_number: str = ""
    initiated_date: str = ""
    processing_date: str = ""
    expected_completion_date: str = ""
    completed_date: str = ""
    source_account: Optional[AccountDetails] = None
    destination_account: Optional[AccountDetails] = None


class TransferStatusResponse(TransferSummary):
    exchange_rate: float = 1.0
    status_history: List[StatusHistoryEntry] = Field(default_factory=list)
    retry_count: int = 0
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class TransferListResponse(NorthwindModel):
    transfers: List[TransferSummary] = Field(default_factory=list)
    pagination: PaginationInfo = Field(default_factory=PaginationInfo)


class BatchTransferItem(NorthwindModel):
    transfer_id: str = ""
    status: str
    reference_number: str
    error: Optional[str] = None


class BatchTransferResponse(NorthwindModel):
    batch_id: str
    total_transfers: int
    accepted: int
    rejected: int
    transfers: List[BatchTransferItem] = Field(default_factory=list)


class TransferCancelRequest(RequestModel):
    reason: str


class TransferCancelResponse(NorthwindModel):
    transfer_id: str
    status: str
    cancellation_reason: str = ""
    cancelled_at: str = ""


class TransferReverseRequest(RequestModel):
    reason: str
    description: str


class TransferReverseResponse(NorthwindModel):
    reversal_id: str
    transfer_id: str
    status: str
    expected_completion_date: str = ""


# Reference data


class DomainValue(NorthwindModel):
    code: str
    display_name: str
    description: str = ""


class TransferTypeValue(DomainValue):
    fee: float = 0.0
    min_amount: float = 0.0
    max_amount: float = 0.0
    processing_days: int = 0


class DomainsResponse(NorthwindModel):
    account_types: List[DomainValue] = Field(default_factory=list)
    account_statuses: List[DomainValue] = Field(default_factory=list)
    directions: List[DomainValue] = Field(default_factory=list)
    transfer_types: List[TransferTypeValue] = Field(default_factory=list)


class HealthResponse(NorthwindModel):
    status: str
    database: str = ""
    version: str = ""
    timestamp: str = ""
    components: Dict[str, str] = Field(default_factory=dict)
    transfer_workflow: Dict[str, Any] = Field(default_factory=dict)


class RoutingNumberInfo(NorthwindModel):
    routing_number: str
    status: Literal["current", "legacy"]
    description: str = ""
    valid_for: List[str] = Field(default_factory=list)
    acquired_from: Optional[str] = None


class InstitutionInfo(NorthwindModel):
    name: str
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    established: str = ""


class BankServices(NorthwindModel):
    ach_transfers: bool = False
    wire_transfers: bool = False
    check_processing: bool = False
    mobile_banking: bool = False


class BusinessHours(NorthwindModel):
    customer_service: str = ""
    wire_cutoff: str = ""


class BankInfoResponse(NorthwindModel):
    institution: InstitutionInfo
    routing_numbers: List[RoutingNumberInfo] = Field(default_factory=list)
    services: BankServices = Field(default_factory=BankServices)
    business_hours: BusinessHours = Field(default_factory=BusinessHours)


# Errors


class ErrorBody(NorthwindModel):
    code: str
    message: str
    request_id: str = ""
    timestamp: str = ""
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(NorthwindModel):
    error: ErrorBody
