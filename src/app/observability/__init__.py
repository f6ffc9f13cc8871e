"""Observabilidade: correlation_id por evento e métricas em logs estruturados."""

from app.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
)
from app.observability.metrics import (
    record_delivery,
    record_latency,
    record_relay,
)

__all__ = [
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_delivery",
    "record_latency",
    "record_relay",
]
