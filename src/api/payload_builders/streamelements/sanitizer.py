"""Sanitização de nome e mensagem antes da entrega externa.

Dois níveis para o nome:
- sanitize_donor_name: remove controles e limita tamanho (payload primário)
- restrict_donor_name: subconjunto ASCII restrito (fallback de nome)
"""

from __future__ import annotations

import re
import unicodedata
from typing import Final

from app.domain import ANONYMOUS_DONOR

MAX_DONOR_NAME_LENGTH: Final = 64
MAX_RESTRICTED_NAME_LENGTH: Final = 25
MAX_MESSAGE_LENGTH: Final = 255

_WHITESPACE: Final = re.compile(r"\s+")
_RESTRICTED_DISALLOWED: Final = re.compile(r"[^A-Za-z0-9_ ]")


def _strip_control_chars(text: str) -> str:
    return "".join(ch for ch in text if not unicodedata.category(ch).startswith("C"))


def _clean_text(text: str, max_length: int) -> str:
    cleaned = _WHITESPACE.sub(" ", unicodedata.normalize("NFKC", text))
    cleaned = _strip_control_chars(cleaned).strip()
    return cleaned[:max_length].rstrip()


def sanitize_donor_name(name: str) -> str:
    """Nome com caracteres de controle removidos e tamanho limitado."""
    return _clean_text(name, MAX_DONOR_NAME_LENGTH) or ANONYMOUS_DONOR


def restrict_donor_name(name: str) -> str:
    """Nome reduzido a `[A-Za-z0-9_ ]` (acentos transliterados).

    Exemplos:
        >>> restrict_donor_name("Zoë <script>")
        'Zoe script'
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    restricted = _RESTRICTED_DISALLOWED.sub("", ascii_name)
    restricted = _WHITESPACE.sub(" ", restricted).strip()
    return restricted[:MAX_RESTRICTED_NAME_LENGTH].rstrip() or ANONYMOUS_DONOR


def sanitize_message(message: str) -> str:
    """Mensagem sem caracteres de controle (quebras de linha viram espaço)."""
    return _clean_text(message, MAX_MESSAGE_LENGTH)
