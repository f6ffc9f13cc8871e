"""Registro de métricas via structured logging.

As métricas saem como logs estruturados (`metric_type`) e podem ser
agregadas depois pelo coletor de logs.

Métricas suportadas:
- Latência: tempo por componente/operação (ex: forwarder/primary)
- Entrega: estágio que obteve sucesso ou esgotamento da cadeia
- Relay: contadores por evento processado

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("forwarder", "primary", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação."""
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_delivery(
    stage: str,
    success: bool,
    attempts: int,
    correlation_id: str | None = None,
) -> None:
    """Registra desfecho da cadeia de entrega.

    Args:
        stage: Estágio final (sucesso) ou "exhausted"
        success: Se alguma tentativa foi aceita
        attempts: Quantidade de tentativas feitas
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_delivery",
        extra={
            "metric_type": "delivery",
            "component": "forwarder",
            "stage": stage,
            "success": success,
            "attempts": attempts,
            "correlation_id": correlation_id,
        },
    )


def record_relay(
    transport: str,
    counters: dict[str, int],
    correlation_id: str | None = None,
) -> None:
    """Registra contadores de um evento inbound processado."""
    logger.info(
        "metric_relay",
        extra={
            "metric_type": "relay",
            "component": "relay",
            "transport": transport,
            **counters,
            "correlation_id": correlation_id,
        },
    )
