"""Testes do use case de relay (normalize -> dedupe -> convert -> deliver)."""

from __future__ import annotations

import pytest

from app.domain import DeliveryStage, TransportKind
from tests.fakes.fake_tip_api import FakeTipApiClient
from tests.fakes.relay_factory import build_relay_use_case


def _socket_event(*donations: dict[str, object]) -> dict[str, object]:
    return {"type": "donation", "message": list(donations)}


class TestRelayDonationUseCase:
    """Fluxo completo com fakes."""

    @pytest.mark.asyncio
    async def test_end_to_end_conversion(self) -> None:
        """100 THB vira gorjeta de 2.80 USD com nome e mensagem."""
        client = FakeTipApiClient()
        use_case = build_relay_use_case(client)

        result = await use_case.execute(
            payload=_socket_event(
                {"id": "d1", "name": "Alice", "amount": "100", "currency": "THB", "message": "hi"}
            ),
            transport=TransportKind.SOCKET,
        )

        assert result.ok is True
        assert result.counters() == {
            "received": 1,
            "duplicates": 0,
            "skipped": 0,
            "delivered": 1,
            "failed": 0,
        }
        assert client.payloads == [
            {"username": "Alice", "amount": 2.8, "currency": "USD", "message": "hi"}
        ]
        assert result.deliveries[0].stage is DeliveryStage.PRIMARY

    @pytest.mark.asyncio
    async def test_duplicate_delivered_once(self) -> None:
        """Mesmo id pelos dois transportes gera uma única gorjeta."""
        client = FakeTipApiClient()
        use_case = build_relay_use_case(client)
        donation = {"id": "same", "name": "Bob", "amount": "50"}

        first = await use_case.execute(
            payload=_socket_event(donation), transport=TransportKind.SOCKET
        )
        second = await use_case.execute(payload=donation, transport=TransportKind.WEBHOOK)

        assert first.delivered == 1
        assert second.duplicates == 1
        assert second.delivered == 0
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_duplicate_within_batch(self) -> None:
        client = FakeTipApiClient()
        use_case = build_relay_use_case(client)
        donation = {"id": "x", "name": "Carol", "amount": "1"}

        result = await use_case.execute(
            payload=_socket_event(donation, donation), transport=TransportKind.SOCKET
        )

        assert result.received == 2
        assert result.delivered == 1
        assert result.duplicates == 1

    @pytest.mark.asyncio
    async def test_non_base_currency_skipped_when_restricted(self) -> None:
        """Com a restrição ligada, doação fora da moeda base não é enviada."""
        client = FakeTipApiClient()
        use_case = build_relay_use_case(client, forward_only_base_currency=True)

        result = await use_case.execute(
            payload={"id": "e1", "name": "Dan", "amount": "10", "currency": "EUR"},
            transport=TransportKind.WEBHOOK,
        )

        assert result.skipped == 1
        assert result.ok is True
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_missing_rate_delivers_in_original_currency(self) -> None:
        """Sem taxa, a gorjeta vai com valor e moeda originais."""
        client = FakeTipApiClient()
        use_case = build_relay_use_case(client)

        await use_case.execute(
            payload={"id": "j1", "name": "Eve", "amount": "500", "currency": "JPY"},
            transport=TransportKind.WEBHOOK,
        )

        assert client.payloads[0]["amount"] == 500.0
        assert client.payloads[0]["currency"] == "JPY"

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_batch(self) -> None:
        """Primeira doação esgota a cadeia; a segunda ainda é entregue."""
        client = FakeTipApiClient([400, 400, 400, 400])
        use_case = build_relay_use_case(client)

        result = await use_case.execute(
            payload=_socket_event(
                {"id": "f1", "name": "A", "amount": "1"},
                {"id": "f2", "name": "B", "amount": "2"},
            ),
            transport=TransportKind.SOCKET,
        )

        assert result.failed == 1
        assert result.delivered == 1
        assert result.ok is False
        assert result.errors[0].stage == "primary"
        assert len(client.calls) == 5

    @pytest.mark.asyncio
    async def test_dropped_event_produces_nothing(self) -> None:
        client = FakeTipApiClient()
        use_case = build_relay_use_case(client)

        result = await use_case.execute(
            payload={"type": "subscription", "message": [{"name": "x"}]},
            transport=TransportKind.SOCKET,
        )

        assert result.received == 0
        assert client.calls == []
