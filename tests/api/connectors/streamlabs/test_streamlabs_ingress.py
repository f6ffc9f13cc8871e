"""Testes do ingress Streamlabs (socket e parse do webhook)."""

from __future__ import annotations

from typing import Any

import pytest
from socketio.exceptions import ConnectionError as SocketConnectionError

from api.connectors.streamlabs import StreamlabsSocketListener
from api.connectors.streamlabs.webhook import InvalidJsonError, parse_webhook_body
from config.settings import StreamlabsSettings
from utils.errors import TransportError


class FakeSocketClient:
    """Substituto mínimo do socketio.AsyncClient."""

    def __init__(self, fail_connect: bool = False) -> None:
        self.handlers: dict[str, Any] = {}
        self.connected = False
        self.fail_connect = fail_connect
        self.connect_calls: list[tuple[str, list[str]]] = []

    def on(self, event: str, handler: Any) -> None:
        self.handlers[event] = handler

    async def connect(self, url: str, transports: list[str]) -> None:
        self.connect_calls.append((url, transports))
        if self.fail_connect:
            raise SocketConnectionError("refused")
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False


@pytest.fixture
def settings() -> StreamlabsSettings:
    return StreamlabsSettings(socket_token="tok-1", socket_url="https://sockets.example.test")


class TestStreamlabsSocketListener:
    """Listener socket.io."""

    @pytest.mark.asyncio
    async def test_event_forwarded_to_callback(self, settings: StreamlabsSettings) -> None:
        received: list[Any] = []
        client = FakeSocketClient()
        StreamlabsSocketListener(settings, on_event=received.append, client=client)

        event = {"type": "donation", "message": [{"id": 1}]}
        await client.handlers["event"](event)
        await client.handlers["event"](None)

        assert received == [event]

    @pytest.mark.asyncio
    async def test_connect_uses_token_url(self, settings: StreamlabsSettings) -> None:
        client = FakeSocketClient()
        listener = StreamlabsSocketListener(settings, on_event=lambda _: None, client=client)

        await listener.connect_once()

        assert listener.connected is True
        assert client.connect_calls == [
            ("https://sockets.example.test?token=tok-1", ["websocket"])
        ]

        await listener.stop()
        assert listener.connected is False

    @pytest.mark.asyncio
    async def test_connect_failure_raises_transport_error(
        self, settings: StreamlabsSettings
    ) -> None:
        client = FakeSocketClient(fail_connect=True)
        listener = StreamlabsSocketListener(settings, on_event=lambda _: None, client=client)

        with pytest.raises(TransportError, match="socket_connect_failed"):
            await listener.connect_once()


class TestParseWebhookBody:
    """Parse do corpo bruto do webhook."""

    def test_object_body(self) -> None:
        assert parse_webhook_body(b'{"name": "Alice"}') == {"name": "Alice"}

    def test_empty_body_is_empty_object(self) -> None:
        assert parse_webhook_body(b"") == {}

    def test_invalid_json(self) -> None:
        with pytest.raises(InvalidJsonError, match="invalid_json"):
            parse_webhook_body(b"{not json")

    def test_non_object(self) -> None:
        with pytest.raises(InvalidJsonError, match="payload_not_object"):
            parse_webhook_body(b"[1, 2]")
