"""Modelos de domínio da ponte de gorjetas."""

from app.domain.donation import (
    ANONYMOUS_DONOR,
    DeliveryResult,
    DeliveryStage,
    DonationRecord,
    StageAttempt,
    TransportKind,
)
from app.domain.rates import RateTable, round_cents

__all__ = [
    "ANONYMOUS_DONOR",
    "DeliveryResult",
    "DeliveryStage",
    "DonationRecord",
    "RateTable",
    "StageAttempt",
    "TransportKind",
    "round_cents",
]
