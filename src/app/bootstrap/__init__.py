"""Bootstrap da aplicação — inicialização e wiring.

Composition root: configura logging, valida settings e conecta
implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    initialize_app()
    validate_runtime_settings()  # ConfigurationError se faltar credencial
"""

from __future__ import annotations

import logging
import os

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_currency_settings,
    get_dedupe_settings,
    get_streamelements_settings,
    get_streamlabs_settings,
)
from utils.errors import ConfigurationError

SERVICE_NAME = "tip_bridge"

DEFAULT_LOG_LEVEL = "INFO"

# Valores mascarados em qualquer log
SECRET_ENV_VARS = ("SE_JWT", "SL_SOCKET_TOKEN")

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com correlation_id (uma vez por processo).

    Tokens lidos direto do ambiente: as settings ainda não foram validadas.
    """
    configure_logging(
        level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        secrets=[os.getenv(name, "").strip() for name in SECRET_ENV_VARS],
    )


def collect_settings_errors() -> list[str]:
    """Agrega erros de validação de todas as settings.

    Valores de ambiente que nem chegam a ser parseados (ex: timeout não
    numérico) também viram erro de configuração.
    """
    try:
        base = get_base_settings()
        groups = {
            "base": base.validate(),
            "dedupe": get_dedupe_settings().validate(),
            "streamelements": get_streamelements_settings().validate(),
            "streamlabs": get_streamlabs_settings().validate(socket_mode=base.is_socket_mode),
            "currency": get_currency_settings().validate(),
        }
    except ValueError as exc:
        return [f"env: valor inválido ({exc})"]

    return [f"{group}: {error}" for group, errors in groups.items() for error in errors]


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup (falha rápida em qualquer ambiente).

    Raises:
        ConfigurationError: Se houver qualquer erro de configuração.
    """
    errors = collect_settings_errors()
    if not errors:
        logger.info(
            "settings_validated",
            extra={
                "component": "bootstrap",
                "result": "ok",
                "mode": get_base_settings().mode,
            },
        )
        return

    logger.critical(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "error_count": len(errors),
            "errors": errors,
        },
    )
    details = "\n".join(f"- {error}" for error in errors)
    raise ConfigurationError(f"Configuração inválida:\n{details}")
