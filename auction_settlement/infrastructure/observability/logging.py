"""Structured JSON logging for batch observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from auction_settlement.config import settings


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


def log_item_failure(pass_name: str, auction_id: Any, stage: str, error: Exception) -> None:
    """Log a single auction that failed within a batch pass"""
    logging.error(
        f"{pass_name}: auction {auction_id} failed at {stage}: {error}",
        extra={
            "pass": pass_name,
            "auction_id": auction_id,
            "stage": stage,
            "error": str(error),
            "error_type": type(error).__name__,
        },
    )


def log_batch_summary(
    pass_name: str,
    processed: int,
    succeeded: int,
    failed: int,
    duration_ms: float,
) -> None:
    """Log structured batch outcome for analysis"""
    logging.info(
        f"{pass_name} completed",
        extra={
            "pass": pass_name,
            "step": "batch_complete",
            "processed": processed,
            "succeeded": succeeded,
            "failed": failed,
            "duration_ms": duration_ms,
        },
    )
