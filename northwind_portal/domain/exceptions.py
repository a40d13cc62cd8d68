"""Domain-specific exceptions"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NorthwindApiError(DomainException):
    """Northwind API responded with a non-success status.

    Carries the numeric status and the structured error body
    ``{"error": {"code", "message", "request_id", "timestamp", "details"?}}``.
    """

    kind = "api_error"

    def __init__(self, status: int, body: Dict[str, Any]):
        self.status = status
        self.body = body
        super().__init__(self._resolve_message(status, body))

    @staticmethod
    def _resolve_message(status: int, body: Dict[str, Any]) -> str:
        error = body.get("error") if isinstance(body, dict) else None
        message = error.get("message") if isinstance(error, dict) else None
        return message or f"API error {status}"

    @property
    def message(self) -> str:
        return str(self)

    @property
    def _error(self) -> Dict[str, Any]:
        error = self.body.get("error")
        return error if isinstance(error, dict) else {}

    @property
    def code(self) -> str:
        return str(self._error.get("code", self.status))

    @property
    def request_id(self) -> str:
        return self._error.get("request_id") or ""

    @property
    def details(self) -> Optional[Dict[str, Any]]:
        return self._error.get("details")


class TransferFormError(DomainException):
    """Submitted transfer form is incomplete or invalid"""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
