"""Entrypoint da ponte de gorjetas Streamlabs -> StreamElements.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3000

Uso (direto):
    python -m app.app
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.runtime import create_runtime
from config.logging import get_logger
from config.settings import get_base_settings
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (falha rápida)
    - Monta runtime e faz o primeiro refresh de câmbio em background
    - Conecta o socket (MODE=socket)

    Shutdown:
    - Desconecta o socket e drena as filas
    """
    logger.info("app_starting", extra={"service": "tip-bridge"})
    validate_runtime_settings()

    runtime = create_runtime()
    app.state.runtime = runtime
    await runtime.start()

    yield

    logger.info("app_shutting_down", extra={"service": "tip-bridge"})
    await runtime.stop(timeout_seconds=30.0)
    app.state.runtime = None


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="tip-bridge",
        description="Relay de doações Streamlabs para gorjetas StreamElements",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.state.runtime = None
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "tip-bridge"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta.

    Valida settings antes de subir o servidor para sair com código 1
    em vez de falhar dentro do lifespan.
    """
    import uvicorn

    try:
        validate_runtime_settings()
    except ConfigurationError as exc:
        logger.critical("startup_aborted", extra={"reason": str(exc)})
        sys.exit(1)

    settings = get_base_settings()
    logger.info("Starting tip-bridge", extra={"mode": settings.mode, "port": settings.port})
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
