"""Configuração do logging do processo.

Chamada uma única vez pelo bootstrap. Os módulos seguem usando
`logging.getLogger(__name__)`; o handler raiz formata em JSON, injeta
service/correlation_id e mascara credenciais.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "tip_bridge"

# Clientes HTTP/socket logam cada request/frame em INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "engineio.client", "socketio.client")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    secrets: Iterable[str] = (),
) -> None:
    """Instala um único handler JSON no logger raiz.

    Args:
        level: Nível de log (case-insensitive).
        service_name: Valor do campo `service`.
        correlation_id_getter: Leitor do correlation_id do contexto atual.
        secrets: Valores a mascarar em mensagens e campos de URL/erro.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_name = level.upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_name)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(SecretRedactionFilter(secrets))
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_name)
    root.handlers = [handler]

    third_party_level = logging.DEBUG if level_name == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um caminho degradado foi acionado.

    Args:
        logger: Logger do chamador.
        component: Estágio acionado (ex: "forwarder.empty_message").
        reason: Motivo curto (ex: "status_400").
        elapsed_ms: Tempo decorrido em ms, quando aplicável.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms
    logger.info("Fallback applied for %s", component, extra=extra)
