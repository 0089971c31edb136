"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from sepa_pain.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = settings.log_level) -> None:
    """Configure structured JSON logging on the root logger"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_document_serialized(
    message_id: str,
    pain_format: str,
    payment_info_count: int,
    transaction_count: int,
    control_sum: str,
    duration_ms: float,
) -> None:
    """Log structured serialization outcome"""
    logging.getLogger("sepa_pain.document").info(
        "Document serialized",
        extra={
            "message_id": message_id,
            "pain_format": pain_format,
            "step": "document_serialized",
            "payment_info_count": payment_info_count,
            "transaction_count": transaction_count,
            "control_sum": control_sum,
            "duration_ms": duration_ms,
        },
    )


def log_validation_failure(entity: str, field: str, pain_format: str, message: str) -> None:
    """Log a rejected field before the error propagates"""
    logging.getLogger("sepa_pain.validation").warning(
        f"Validation failed: {message}",
        extra={"entity": entity, "field": field, "pain_format": pain_format, "step": "validation"},
    )
