"""Cliente HTTP da API de gorjetas do StreamElements.

Estende HttpClient genérico com:
- Autenticação Bearer (JWT do canal), validada antes do uso
- Tradução de respostas não-2xx em DeliveryError com status e corpo
- Logging estruturado sem token
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.streamelements.errors import parse_tip_error, truncate_body
from api.connectors.streamelements.tip_logging import log_tip_created, log_tip_error
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from utils.errors import DeliveryError

if TYPE_CHECKING:
    import httpx

    from config.settings import StreamElementsSettings

logger: logging.Logger = logging.getLogger(__name__)


class StreamElementsHttpClient(HttpClient):
    """Cliente HTTP especializado para a API kappa do StreamElements."""

    async def create_tip(
        self,
        endpoint: str,
        jwt: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Registra uma gorjeta no canal.

        Args:
            endpoint: URL `.../tips/{channel_id}`
            jwt: Token JWT do canal
            payload: `{username, amount, currency, message}`

        Returns:
            JSON da gorjeta criada (id atribuído em `_id`)

        Raises:
            ValueError: Se jwt está vazio
            DeliveryError: Se a API recusar ou estiver inacessível
        """
        if not jwt or not jwt.strip():
            logger.error("tip_jwt_missing", extra={"endpoint": endpoint})
            raise ValueError("jwt é obrigatório para registrar gorjetas (SE_JWT)")

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {jwt}",
        }
        try:
            response = await self.post(endpoint, json=payload, headers=headers)
        except HttpError as exc:
            raise DeliveryError(
                str(exc),
                status_code=exc.status_code,
                body=truncate_body(exc.body),
            ) from exc

        return self._process_tip_response(response, endpoint)

    def _process_tip_response(
        self,
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        """Valida status e corpo da resposta."""
        body = response.text
        if response.status_code >= 400:
            tip_error = parse_tip_error(response.status_code, body)
            log_tip_error(tip_error, endpoint, truncate_body(body))
            raise DeliveryError(
                f"tip_api_rejected: {tip_error.error} ({tip_error.status_code})",
                status_code=response.status_code,
                body=truncate_body(body),
            )

        try:
            data = response.json() if body else {}
        except ValueError as exc:
            logger.error("tip_response_invalid_json", extra={"endpoint": endpoint})
            raise DeliveryError(
                "tip_response_invalid_json",
                status_code=response.status_code,
                body=truncate_body(body),
            ) from exc

        if not isinstance(data, dict):
            data = {"data": data}

        log_tip_created(endpoint, response.status_code, extract_tip_id(data))
        return data


def extract_tip_id(data: dict[str, Any]) -> str | None:
    """Retorna o identificador atribuído pela API, se houver."""
    tip_id = data.get("_id") or data.get("id")
    return str(tip_id) if tip_id else None


def create_streamelements_http_client(
    settings: StreamElementsSettings | None = None,
) -> StreamElementsHttpClient:
    """Factory do cliente com timeout e retries da configuração."""
    # Import local para evitar dependência circular
    from config.settings import get_streamelements_settings

    streamelements = settings or get_streamelements_settings()
    config = HttpClientConfig(
        timeout_seconds=streamelements.request_timeout_seconds,
        max_retries=streamelements.max_retries,
    )
    return StreamElementsHttpClient(config=config)
