"""Mapeamento declarativo de aliases por campo lógico.

A ordem de cada tupla é a prioridade: o primeiro alias com valor não vazio
vence. Variações de formato entre versões do provedor ficam aqui, fora da
lógica de negócio.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

IDENTITY_FIELD: Final = "identity"
DONOR_NAME_FIELD: Final = "donor_name"
AMOUNT_FIELD: Final = "amount"
CURRENCY_FIELD: Final = "currency"
MESSAGE_FIELD: Final = "message"

FIELD_ALIASES: Final = MappingProxyType(
    {
        IDENTITY_FIELD: ("donation_id", "id", "_id"),
        DONOR_NAME_FIELD: ("name", "display_name", "username", "donor", "from"),
        AMOUNT_FIELD: ("amount", "amount_paid"),
        CURRENCY_FIELD: ("currency", "currency_code"),
        MESSAGE_FIELD: ("message", "note", "comment"),
    }
)

# Chaves onde o webhook pode aninhar a doação (um nível), em ordem de prioridade
WEBHOOK_NESTED_KEYS: Final = ("data", "donation")

# Tag de tipo aceita no socket
SOCKET_DONATION_TYPE: Final = "donation"
