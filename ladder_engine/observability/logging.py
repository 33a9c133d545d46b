"""Structured JSON logging for the calculation engine"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from ladder_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger"""
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


def log_portfolio_snapshot(
    as_of: str,
    deposit_count: int,
    month_count: int,
    total_principal: float,
    duration_ms: float,
) -> None:
    """Log structured snapshot outcome"""
    logging.getLogger("ladder_engine.portfolio").info(
        "Portfolio snapshot computed",
        extra={
            "step": "portfolio_snapshot",
            "as_of": as_of,
            "deposit_count": deposit_count,
            "month_count": month_count,
            "total_principal": total_principal,
            "duration_ms": duration_ms,
        },
    )
