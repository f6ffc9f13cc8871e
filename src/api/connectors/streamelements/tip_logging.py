"""Helpers de logging para a API de gorjetas (sem token e sem payload)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import TipApiError

logger = logging.getLogger(__name__)


def log_tip_error(tip_error: TipApiError, endpoint: str, body: str) -> None:
    """Loga recusa da API com status e corpo da resposta."""
    logger.warning(
        "tip_api_error",
        extra={
            "endpoint": endpoint,
            "status_code": tip_error.status_code,
            "error_type": tip_error.error,
            "error_message": tip_error.message,
            "response_body": body,
            "payload_rejection": tip_error.is_payload_rejection,
        },
    )


def log_tip_created(endpoint: str, status_code: int, tip_id: str | None) -> None:
    """Loga gorjeta registrada."""
    logger.debug(
        "tip_api_created",
        extra={
            "endpoint": endpoint,
            "status_code": status_code,
            "tip_id": tip_id,
        },
    )
