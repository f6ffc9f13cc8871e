"""Endpoint de webhook do Streamlabs.

POST /webhook/streamlabs:
1. Lê body bruto e valida JSON (objeto)
2. Enfileira no dispatcher serial do webhook e aguarda o processamento
3. Responde 200 se todas as entregas terminaram (mesmo degradadas),
   500 se alguma esgotou a cadeia de fallback
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.streamlabs.webhook import InvalidJsonError, parse_webhook_body
from app.observability import correlation_scope

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"ok": False, "error": message}, status_code=status_code)


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> JSONResponse:
    """Recebimento de doações via webhook."""
    with correlation_scope(request.headers.get("x-correlation-id")) as correlation_id:
        raw_body = await request.body()
        try:
            payload = parse_webhook_body(raw_body)
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_invalid_body",
                extra={"channel": "streamlabs", "error": str(exc)},
            )
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)

        runtime = getattr(request.app.state, "runtime", None)
        if runtime is None:
            logger.error("webhook_runtime_unavailable", extra={"channel": "streamlabs"})
            return _error("service_not_ready", status.HTTP_503_SERVICE_UNAVAILABLE)

        logger.info("webhook_received", extra={"channel": "streamlabs"})
        try:
            result = await runtime.webhook_dispatcher.submit(payload, correlation_id)
        except Exception as exc:
            # Já logado pelo dispatcher com stack trace
            return _error(type(exc).__name__, status.HTTP_500_INTERNAL_SERVER_ERROR)

        if not result.ok:
            error = str(result.errors[0]) if result.errors else "tip_delivery_exhausted"
            return _error(error, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse(content={"ok": True}, status_code=status.HTTP_200_OK)
