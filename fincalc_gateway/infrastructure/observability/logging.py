"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "fincalc-gateway"


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

    # httpx logs every provider request at INFO; refresh outcomes are logged here instead
    logging.getLogger("httpx").setLevel(max(logger.level, logging.WARNING))


def log_rate_refresh(
    prime_rate: float,
    mortgage30: float,
    mortgage15: float,
    duration_ms: float,
    error: Optional[str] = None,
    fallback_series: Optional[List[str]] = None,
) -> None:
    """Log structured rate refresh outcome"""
    if error:
        level, outcome = logging.ERROR, "fallback"
    elif fallback_series:
        level, outcome = logging.WARNING, "partial"
    else:
        level, outcome = logging.INFO, "fresh"

    logging.log(
        level,
        "Rate refresh completed",
        extra={
            "step": "rate_refresh",
            "outcome": outcome,
            "prime_rate": prime_rate,
            "mortgage30": mortgage30,
            "mortgage15": mortgage15,
            "duration_ms": duration_ms,
            "error": error,
            "fallback_series": fallback_series or [],
        },
    )


def log_calculation(request_id: str, calculator: str, duration_ms: float, **fields: Any) -> None:
    """Log structured calculator outcome for analysis"""
    logging.info(
        "Calculation completed",
        extra={
            "request_id": request_id,
            "step": "calculation_complete",
            "calculator": calculator,
            "duration_ms": duration_ms,
            **fields,
        },
    )
