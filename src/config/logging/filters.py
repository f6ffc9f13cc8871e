"""Filters que enriquecem e higienizam records antes da formatação."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

REDACTED = "***"

# Campos de `extra` que podem carregar URL/header com credencial
_SENSITIVE_EXTRA_FIELDS = ("url", "endpoint", "error", "response_body")


class CorrelationIdFilter(logging.Filter):
    """Carimba `service` e `correlation_id` em todo record.

    Um correlation_id passado via `extra` vence o do contexto.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            getter = self._correlation_id_getter
            record.correlation_id = getter() if getter else ""
        record.service = self._service_name
        return True


class SecretRedactionFilter(logging.Filter):
    """Mascara tokens conhecidos (JWT do canal, token do socket).

    O token do socket viaja na query string da URL de conexão e o JWT pode
    aparecer em mensagens de erro de terceiros.
    """

    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__()
        self._secrets = tuple(s for s in secrets if s)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        if isinstance(record.msg, str):
            record.msg = self._redact(record.msg)
        if record.args:
            record.args = tuple(self._redact_value(arg) for arg in _as_tuple(record.args))
        for field in _SENSITIVE_EXTRA_FIELDS:
            value = getattr(record, field, None)
            if isinstance(value, str):
                setattr(record, field, self._redact(value))
        return True

    def _redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text

    def _redact_value(self, value: Any) -> Any:
        return self._redact(value) if isinstance(value, str) else value


def _as_tuple(args: Any) -> tuple[Any, ...]:
    return args if isinstance(args, tuple) else (args,)
