"""Entrega de gorjetas com cadeia de fallback explícita.

Máquina de estados por entrega, terminal no primeiro sucesso ou no fim da
cadeia:

    PRIMARY -> EMPTY_MESSAGE -> SANITIZED_NAME -> PROBE

Cada estágio registra a própria falha (status e corpo). Esgotada a cadeia,
o erro do estágio PRIMARY é o que sobe; erros dos fallbacks são apenas
diagnóstico. A cadeia é finita: não há retry infinito.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any, Final

from api.connectors.streamelements import extract_tip_id
from api.payload_builders.streamelements import TipPayloadBuilder
from app.domain import DeliveryResult, DeliveryStage, StageAttempt
from app.observability import get_correlation_id, record_delivery, record_latency
from config.logging import log_fallback
from utils.errors import DeliveryError

if TYPE_CHECKING:
    from app.domain import DonationRecord
    from app.protocols import TipApiClientProtocol

logger = logging.getLogger(__name__)

FALLBACK_CHAIN: Final = (
    DeliveryStage.PRIMARY,
    DeliveryStage.EMPTY_MESSAGE,
    DeliveryStage.SANITIZED_NAME,
    DeliveryStage.PROBE,
)

DEFAULT_ATTEMPT_TIMEOUT_SECONDS: Final = 15.0


class TipForwarder:
    """Entrega DonationRecord à API de gorjetas."""

    def __init__(
        self,
        client: TipApiClientProtocol,
        endpoint: str,
        jwt: str,
        *,
        builder: TipPayloadBuilder | None = None,
        attempt_timeout_seconds: float = DEFAULT_ATTEMPT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self._jwt = jwt
        self._builder = builder or TipPayloadBuilder()
        self._attempt_timeout_seconds = attempt_timeout_seconds

    async def deliver(self, record: DonationRecord) -> DeliveryResult:
        """Percorre a cadeia até o primeiro estágio aceito.

        Raises:
            DeliveryError: Erro do estágio PRIMARY, se todos falharem.
        """
        attempts: list[StageAttempt] = []
        primary_error: DeliveryError | None = None

        for position, stage in enumerate(FALLBACK_CHAIN):
            payload = self._builder.build(record, stage)
            started_at = time.perf_counter()
            try:
                response = await self._attempt(payload)
            except DeliveryError as exc:
                error = exc.with_stage(stage.value)
                if primary_error is None:
                    primary_error = error
                attempts.append(
                    StageAttempt(stage, False, status_code=exc.status_code, error=str(exc))
                )
                self._log_stage_failure(record, stage, error, position)
                continue

            record_latency(
                "forwarder",
                stage.value,
                (time.perf_counter() - started_at) * 1000,
                get_correlation_id(),
            )
            attempts.append(StageAttempt(stage, True))
            result = DeliveryResult(
                stage=stage,
                tip_id=extract_tip_id(response),
                payload=payload,
                response=response,
                attempts=tuple(attempts),
            )
            record_delivery(stage.value, True, len(attempts), get_correlation_id())
            logger.info(
                "tip_forwarded",
                extra={
                    "identity": record.identity,
                    "stage": stage.value,
                    "tip_id": result.tip_id,
                    "amount": payload["amount"],
                    "currency": payload["currency"],
                    "degraded": result.degraded,
                },
            )
            return result

        record_delivery("exhausted", False, len(attempts), get_correlation_id())
        logger.error(
            "tip_delivery_exhausted",
            extra={
                "identity": record.identity,
                "attempts": [attempt.stage.value for attempt in attempts],
                "status_code": primary_error.status_code if primary_error else None,
            },
        )
        raise primary_error or DeliveryError("tip_delivery_exhausted")

    async def _attempt(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            return await asyncio.wait_for(
                self._client.create_tip(self._endpoint, self._jwt, payload),
                timeout=self._attempt_timeout_seconds,
            )
        except TimeoutError as exc:
            raise DeliveryError("tip_attempt_timeout") from exc

    def _log_stage_failure(
        self,
        record: DonationRecord,
        stage: DeliveryStage,
        error: DeliveryError,
        position: int,
    ) -> None:
        logger.warning(
            "tip_stage_failed",
            extra={
                "identity": record.identity,
                "stage": stage.value,
                "status_code": error.status_code,
                "response_body": error.body,
                "error": str(error),
            },
        )
        if position + 1 < len(FALLBACK_CHAIN):
            next_stage = FALLBACK_CHAIN[position + 1]
            log_fallback(
                logger,
                f"forwarder.{next_stage.value}",
                reason=f"status_{error.status_code}" if error.status_code else "no_response",
            )
