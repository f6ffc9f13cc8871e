"""Webhook inbound de doações."""

from .receive import InvalidJsonError, WebhookRequestError, parse_webhook_body

__all__ = ["InvalidJsonError", "WebhookRequestError", "parse_webhook_body"]
