"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from northwind_portal.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_transfer_outcome(
    request_id: str,
    reference_number: str,
    outcome: str,
    amount: float,
    transfer_id: str | None = None,
    error: str | None = None,
) -> None:
    """Log structured transfer submission outcome for analysis"""
    logging.info(
        "Transfer submission completed",
        extra={
            "request_id": request_id,
            "reference_number": reference_number,
            "step": "transfer_submit",
            "outcome": outcome,
            "amount": amount,
            "transfer_id": transfer_id,
            "error": error,
        },
    )
