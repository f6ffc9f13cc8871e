"""Formatter JSON dos logs da ponte."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pythonjsonlogger.json import JsonFormatter

# Ordem estável das chaves no JSON
_FIELD_ORDER = ("asctime", "levelname", "name", "service", "correlation_id", "message")

REQUIRED_LOG_FIELDS = frozenset(_FIELD_ORDER)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def json_default(value: Any) -> Any:
    """Serializa tipos do domínio que o json padrão não conhece.

    Valores monetários (Decimal) saem como string para não perder precisão.
    """
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON.

    Exemplo de output:
        {"asctime": "...", "level": "WARNING", "logger": "app.services.forwarder",
         "service": "tip_bridge", "correlation_id": "abc-123",
         "message": "tip_stage_failed", "stage": "primary", "status_code": 400}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in _FIELD_ORDER),
        rename_fields=FIELD_RENAME_MAP,
        json_default=json_default,
    )
