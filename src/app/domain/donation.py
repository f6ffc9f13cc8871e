"""Modelos de domínio de doação.

O registro canônico é imutável: conversão de moeda produz um novo registro
via `with_amount()`, nunca altera o original.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any

ANONYMOUS_DONOR = "Anonymous"


class TransportKind(str, Enum):
    """Transporte de origem do evento bruto."""

    SOCKET = "socket"
    WEBHOOK = "webhook"


class DeliveryStage(str, Enum):
    """Estágios da cadeia de entrega, na ordem em que são tentados."""

    PRIMARY = "primary"
    EMPTY_MESSAGE = "empty_message"
    SANITIZED_NAME = "sanitized_name"
    PROBE = "probe"


@dataclass(frozen=True, slots=True)
class DonationRecord:
    """Registro canônico de uma doação, independente de transporte.

    Attributes:
        identity: Chave de dedupe (id explícito ou composição best-effort)
        donor_name: Nome do doador ("Anonymous" quando ausente)
        amount: Valor não negativo em `currency`
        currency: Código ISO de 3 letras, maiúsculo
        message: Mensagem livre (pode ser vazia)
        transport: Transporte de origem
    """

    identity: str
    donor_name: str
    amount: Decimal
    currency: str
    message: str = ""
    transport: TransportKind = TransportKind.WEBHOOK

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("amount não pode ser negativo")

    def with_amount(self, amount: Decimal, currency: str) -> DonationRecord:
        """Retorna novo registro com valor e moeda substituídos."""
        return replace(self, amount=amount, currency=currency)


@dataclass(frozen=True, slots=True)
class StageAttempt:
    """Diagnóstico de uma tentativa de entrega."""

    stage: DeliveryStage
    success: bool
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Resultado terminal de sucesso da cadeia de entrega.

    Attributes:
        stage: Estágio que obteve sucesso
        tip_id: Identificador atribuído pela API de gorjetas
        payload: Payload efetivamente aceito
        response: Corpo JSON da resposta
        attempts: Tentativas na ordem, incluindo as falhas anteriores
    """

    stage: DeliveryStage
    tip_id: str | None
    payload: dict[str, Any]
    response: dict[str, Any] = field(default_factory=dict)
    attempts: tuple[StageAttempt, ...] = ()

    @property
    def success(self) -> bool:
        return True

    @property
    def degraded(self) -> bool:
        """True se a entrega só passou em um estágio de fallback."""
        return self.stage is not DeliveryStage.PRIMARY
