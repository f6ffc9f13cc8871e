"""Conector StreamElements — destino das gorjetas.

Único ponto de IO com a API kappa (`POST /tips/{channel_id}`).
"""

from .errors import TipApiError, parse_tip_error
from .http_client import (
    StreamElementsHttpClient,
    create_streamelements_http_client,
    extract_tip_id,
)

__all__ = [
    "StreamElementsHttpClient",
    "TipApiError",
    "create_streamelements_http_client",
    "extract_tip_id",
    "parse_tip_error",
]
