"""Testes do forwarder e da cadeia de fallback."""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any

import httpx
import pytest

from api.connectors.streamelements import StreamElementsHttpClient
from app.domain import DeliveryStage, DonationRecord
from app.infra.http import HttpClientConfig
from app.services.forwarder import FALLBACK_CHAIN, TipForwarder
from tests.fakes.fake_tip_api import FakeTipApiClient
from utils.errors import DeliveryError

ENDPOINT = "https://api.example.test/kappa/v2/tips/channel-1"


def _record(**overrides: Any) -> DonationRecord:
    fields: dict[str, Any] = {
        "identity": "don-1",
        "donor_name": "Zoë <b>",
        "amount": Decimal("2.805"),
        "currency": "USD",
        "message": "line one\nline two",
    }
    fields.update(overrides)
    return DonationRecord(**fields)


def _stage_failures(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.message == "tip_stage_failed"]


class TestFallbackChain:
    """Ordem fixa dos estágios."""

    def test_chain_order(self) -> None:
        assert FALLBACK_CHAIN == (
            DeliveryStage.PRIMARY,
            DeliveryStage.EMPTY_MESSAGE,
            DeliveryStage.SANITIZED_NAME,
            DeliveryStage.PROBE,
        )


class TestTipForwarder:
    """Testes do TipForwarder.deliver."""

    @pytest.mark.asyncio
    async def test_primary_success(self) -> None:
        """Sucesso no primário: uma única chamada, sem degradação."""
        client = FakeTipApiClient([{"_id": "tip-abc"}])
        forwarder = TipForwarder(client, ENDPOINT, "jwt-token")

        result = await forwarder.deliver(_record())

        assert result.stage is DeliveryStage.PRIMARY
        assert result.tip_id == "tip-abc"
        assert result.degraded is False
        assert len(client.calls) == 1
        payload = client.payloads[0]
        assert payload["amount"] == 2.81
        assert payload["currency"] == "USD"
        assert payload["message"] == "line one line two"
        assert client.calls[0]["endpoint"] == ENDPOINT
        assert client.calls[0]["jwt"] == "jwt-token"

    @pytest.mark.asyncio
    async def test_empty_message_fallback(self) -> None:
        """Primário recusado: segundo estágio vai sem mensagem."""
        client = FakeTipApiClient([400, {"_id": "tip-2"}])
        forwarder = TipForwarder(client, ENDPOINT, "jwt")

        result = await forwarder.deliver(_record())

        assert result.stage is DeliveryStage.EMPTY_MESSAGE
        assert result.degraded is True
        assert client.payloads[1]["message"] == ""
        assert client.payloads[1]["username"] == "Zoë <b>"

    @pytest.mark.asyncio
    async def test_probe_success_after_three_failures(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Três estágios falham, probe aceita; três falhas registradas."""
        client = FakeTipApiClient([400, 400, 422, {"_id": "tip-probe"}])
        forwarder = TipForwarder(client, ENDPOINT, "jwt")

        with caplog.at_level(logging.WARNING):
            result = await forwarder.deliver(_record())

        assert result.stage is DeliveryStage.PROBE
        assert result.tip_id == "tip-probe"
        assert [a.stage for a in result.attempts] == list(FALLBACK_CHAIN)
        assert [a.success for a in result.attempts] == [False, False, False, True]

        failures = _stage_failures(caplog)
        assert len(failures) == 3
        assert [r.stage for r in failures] == ["primary", "empty_message", "sanitized_name"]
        assert [r.status_code for r in failures] == [400, 400, 422]
        assert all(r.response_body for r in failures)

        sanitized_payload = client.payloads[2]
        assert sanitized_payload["username"] == "Zoe b"
        probe_payload = client.payloads[3]
        assert probe_payload["username"] == "Anonymous"
        assert probe_payload["amount"] == 1.0
        assert probe_payload["message"] == ""

    @pytest.mark.asyncio
    async def test_exhaustion_raises_primary_error(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Todos os estágios falham: sobe o erro do primário."""
        client = FakeTipApiClient([400, 401, 402, 500])
        forwarder = TipForwarder(client, ENDPOINT, "jwt")

        with caplog.at_level(logging.WARNING), pytest.raises(DeliveryError) as exc_info:
            await forwarder.deliver(_record())

        assert exc_info.value.status_code == 400
        assert exc_info.value.stage == "primary"
        assert len(client.calls) == 4
        assert len(_stage_failures(caplog)) == 4
        assert any(r.message == "tip_delivery_exhausted" for r in caplog.records)

    @pytest.mark.asyncio
    async def test_fallback_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Cada degradação registra log_fallback com o próximo estágio."""
        client = FakeTipApiClient([400, {"_id": "tip-2"}])
        forwarder = TipForwarder(client, ENDPOINT, "jwt")

        with caplog.at_level(logging.INFO):
            await forwarder.deliver(_record())

        fallbacks = [r for r in caplog.records if getattr(r, "fallback_used", False)]
        assert len(fallbacks) == 1
        assert fallbacks[0].component == "forwarder.empty_message"
        assert fallbacks[0].reason == "status_400"

    @pytest.mark.asyncio
    async def test_attempt_timeout_moves_to_next_stage(self) -> None:
        """Tentativa lenta estoura o timeout e o próximo estágio é tentado."""

        class SlowThenOkClient(FakeTipApiClient):
            async def create_tip(self, endpoint, jwt, payload):  # type: ignore[override]
                if not self.calls:
                    self.calls.append({"payload": payload})
                    await asyncio.sleep(1)
                return await super().create_tip(endpoint, jwt, payload)

        client = SlowThenOkClient()
        forwarder = TipForwarder(client, ENDPOINT, "jwt", attempt_timeout_seconds=0.01)

        result = await forwarder.deliver(_record())

        assert result.stage is DeliveryStage.EMPTY_MESSAGE
        assert result.attempts[0].error == "tip_attempt_timeout"

    @pytest.mark.asyncio
    async def test_undecodable_primary_response_falls_back(self) -> None:
        """Erro httpx fora de transporte no primário ainda percorre a cadeia."""
        responses = [
            httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"garbage"),
            httpx.Response(200, json={"_id": "ok"}),
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        client = StreamElementsHttpClient(
            config=HttpClientConfig(transport=httpx.MockTransport(handler))
        )
        forwarder = TipForwarder(client, ENDPOINT, "jwt")

        result = await forwarder.deliver(_record())

        assert result.stage is DeliveryStage.EMPTY_MESSAGE
        assert result.tip_id == "ok"
        assert "DecodingError" in (result.attempts[0].error or "")
        assert responses == []
