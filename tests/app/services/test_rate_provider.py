"""Testes do provedor de câmbio."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from app.domain import DonationRecord, RateTable
from app.services.currency_converter import CurrencyConverter
from app.services.rate_provider import RateProvider
from tests.fakes.fake_tip_api import FakeRateSource
from utils.errors import RateFetchError


def _fresh_table(usd: str = "0.029") -> RateTable:
    return RateTable.build("THB", {"USD": Decimal(usd)}, updated_at=datetime.now(UTC))


def _provider(source: FakeRateSource, **kwargs: float) -> RateProvider:
    return RateProvider(
        source,
        RateTable.fallback("THB", "USD", Decimal("0.028")),
        refresh_interval_seconds=kwargs.get("refresh_interval_seconds", 3600.0),
        stale_after_seconds=kwargs.get("stale_after_seconds", 7200.0),
        min_retry_seconds=kwargs.get("min_retry_seconds", 60.0),
    )


class TestRateProviderRefresh:
    """Testes de refresh e troca atômica do snapshot."""

    @pytest.mark.asyncio
    async def test_refresh_swaps_table(self) -> None:
        """Refresh bem-sucedido troca o snapshot inteiro."""
        fresh = _fresh_table()
        provider = _provider(FakeRateSource([fresh]))

        await provider.refresh()

        assert provider.snapshot is fresh
        assert provider.is_stale() is False

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_table(self) -> None:
        """Falha na fonte mantém a tabela anterior."""
        fresh = _fresh_table()
        provider = _provider(FakeRateSource([fresh, RateFetchError("boom")]))
        await provider.refresh()

        with pytest.raises(RateFetchError):
            await provider.refresh()

        assert provider.snapshot is fresh

    @pytest.mark.asyncio
    async def test_refresh_safe_logs_and_returns_false(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """refresh_safe não propaga a falha."""
        provider = _provider(FakeRateSource([]))

        with caplog.at_level(logging.WARNING):
            ok = await provider.refresh_safe()

        assert ok is False
        assert any(r.message == "rates_refresh_failed" for r in caplog.records)
        assert provider.snapshot.rate_for("USD") == Decimal("0.028")

    @pytest.mark.asyncio
    async def test_base_mismatch_rejected(self) -> None:
        """Tabela com outra base não substitui o snapshot."""
        other = RateTable.build("USD", {"THB": Decimal("35")}, updated_at=datetime.now(UTC))
        provider = _provider(FakeRateSource([other]))

        with pytest.raises(RateFetchError, match="rates_base_mismatch"):
            await provider.refresh()
        assert provider.base_currency == "THB"


class TestRateProviderStartup:
    """Comportamento antes do primeiro refresh."""

    @pytest.mark.asyncio
    async def test_unreachable_source_still_converts_with_default(self) -> None:
        """Fonte inacessível no boot: conversão usa a taxa hardcoded (não zero)."""
        provider = _provider(FakeRateSource([]))
        await provider.refresh_safe()

        converted = CurrencyConverter("USD").convert_record(
            _donation("100"), provider.current_table()
        )

        assert converted.amount == Decimal("2.80")
        assert converted.amount > 0

    @pytest.mark.asyncio
    async def test_stale_read_schedules_single_refresh(self) -> None:
        """Leituras de tabela velha disparam um único refresh em background."""
        source = FakeRateSource([_fresh_table()])
        provider = _provider(source)

        first = provider.current_table()
        provider.current_table()
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        assert first.updated_at is None
        assert len(source.calls) == 1
        assert provider.snapshot.updated_at is not None

    @pytest.mark.asyncio
    async def test_lazy_refresh_respects_min_retry(self) -> None:
        """Após falha recente, leituras não voltam a bater na fonte."""
        source = FakeRateSource([])
        provider = _provider(source)
        await provider.refresh_safe()

        provider.current_table()
        await asyncio.sleep(0)

        assert len(source.calls) == 1

    @pytest.mark.asyncio
    async def test_start_and_stop_loop(self) -> None:
        """Loop faz refresh imediato e para sem erro."""
        source = FakeRateSource([_fresh_table()])
        provider = _provider(source)

        provider.start()
        for _ in range(5):
            await asyncio.sleep(0)
        await provider.stop()

        assert source.calls == ["THB"]
        assert provider.snapshot.updated_at is not None


def _donation(amount: str) -> DonationRecord:
    return DonationRecord(
        identity="don-1",
        donor_name="Alice",
        amount=Decimal(amount),
        currency="THB",
    )

    @pytest.mark.asyncio
    async def test_loop_survives_unexpected_error(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Erro inesperado da fonte não mata o timer; o próximo ciclo roda."""
        fresh = _fresh_table()
        source = FakeRateSource([RuntimeError("codec"), fresh])
        provider = _provider(source, refresh_interval_seconds=0.01)

        with caplog.at_level(logging.ERROR):
            provider.start()
            for _ in range(100):
                if len(source.calls) >= 2:
                    break
                await asyncio.sleep(0.01)
            await provider.stop()

        assert len(source.calls) >= 2
        assert provider.snapshot is fresh
        assert any(r.message == "rates_refresh_unexpected_error" for r in caplog.records)
