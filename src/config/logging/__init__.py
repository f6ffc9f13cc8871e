"""Logging estruturado (JSON) da ponte de gorjetas.

    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", secrets=[jwt, socket_token])
    logger = get_logger(__name__)
    logger.warning("tip_stage_failed", extra={"stage": "primary", "status_code": 400})
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    json_default,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "json_default",
    "log_fallback",
]
