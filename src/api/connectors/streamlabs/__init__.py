"""Conector Streamlabs — origem das doações.

Ingress fino: socket em tempo real e webhook produzem payloads brutos que
seguem para o normalizer.
"""

from .socket_listener import StreamlabsSocketListener
from .webhook import InvalidJsonError, parse_webhook_body

__all__ = [
    "InvalidJsonError",
    "StreamlabsSocketListener",
    "parse_webhook_body",
]
