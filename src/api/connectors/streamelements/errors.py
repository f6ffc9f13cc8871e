"""Erros e helpers de parsing para a API kappa do StreamElements."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

# Limite do corpo de resposta guardado em logs/erros
MAX_ERROR_BODY_CHARS = 500


@dataclass(frozen=True)
class TipApiError:
    """Erro retornado pela API de gorjetas."""

    status_code: int
    error: str
    message: str

    @property
    def is_payload_rejection(self) -> bool:
        """True se o erro indica payload recusado (vale degradar o payload)."""
        return self.status_code in {400, 413, 422}


def parse_tip_error(status_code: int, body: str) -> TipApiError:
    """Extrai erro do corpo de resposta (formato `{statusCode, error, message}`).

    Corpos não-JSON viram mensagem bruta truncada.
    """
    try:
        data: Any = json.loads(body) if body else {}
    except json.JSONDecodeError:
        data = {}

    if not isinstance(data, dict):
        data = {}

    return TipApiError(
        status_code=int(data.get("statusCode") or status_code),
        error=str(data.get("error") or "unknown"),
        message=str(data.get("message") or truncate_body(body)),
    )


def truncate_body(body: str | None) -> str:
    """Trunca corpo de resposta para logs."""
    if not body:
        return ""
    if len(body) <= MAX_ERROR_BODY_CHARS:
        return body
    return body[:MAX_ERROR_BODY_CHARS] + "..."
