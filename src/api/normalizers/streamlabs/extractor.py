"""Extração e coerção de campos de uma doação bruta.

Falhas de coerção nunca derrubam o evento: valor inválido vira 0, texto
ausente vira vazio.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from .aliases import FIELD_ALIASES, WEBHOOK_NESTED_KEYS

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def first_present(source: Mapping[str, Any], field: str) -> Any | None:
    """Retorna o valor do primeiro alias não vazio do campo lógico."""
    for alias in FIELD_ALIASES[field]:
        value = source.get(alias)
        if not _is_empty(value):
            return value
    return None


def has_any_alias(source: Mapping[str, Any]) -> bool:
    """True se o objeto traz ao menos um campo reconhecido de doação."""
    return any(
        not _is_empty(source.get(alias))
        for aliases in FIELD_ALIASES.values()
        for alias in aliases
    )


def coerce_amount(raw: Any) -> Decimal:
    """Converte valor bruto em Decimal não negativo (0 em caso de falha)."""
    if raw is None or isinstance(raw, bool):
        return ZERO
    try:
        amount = Decimal(str(raw).strip().replace(",", ""))
    except InvalidOperation:
        logger.debug("donation_amount_unparseable", extra={"raw_type": type(raw).__name__})
        return ZERO
    if not amount.is_finite() or amount < 0:
        return ZERO
    return amount


def coerce_currency(raw: Any, default: str) -> str:
    """Normaliza código de moeda (maiúsculo); usa a moeda default se ausente."""
    if _is_empty(raw):
        return default.upper()
    return str(raw).strip().upper()


def coerce_text(raw: Any) -> str:
    """Normaliza campo de texto livre."""
    if _is_empty(raw):
        return ""
    return str(raw).strip()


def flatten_webhook_body(body: Mapping[str, Any]) -> dict[str, Any]:
    """Achata o corpo do webhook: topo > `data` > `donation`.

    Campos do nível superior têm prioridade sobre os aninhados.
    """
    flat: dict[str, Any] = {}
    for key in reversed(WEBHOOK_NESTED_KEYS):
        nested = body.get(key)
        if isinstance(nested, dict):
            flat.update(nested)
    flat.update({k: v for k, v in body.items() if k not in WEBHOOK_NESTED_KEYS})
    return flat
