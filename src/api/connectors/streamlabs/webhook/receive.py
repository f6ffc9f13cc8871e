"""Parse inicial do webhook de doações (sem PII em logs)."""

from __future__ import annotations

import json


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no corpo do webhook."""


def parse_webhook_body(raw_body: bytes) -> dict[str, object]:
    """Parseia o corpo bruto do webhook.

    Corpo vazio equivale a `{}` (e será descartado pelo normalizer).

    Raises:
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload
