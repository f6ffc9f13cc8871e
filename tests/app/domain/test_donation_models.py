"""Testes dos modelos de domínio."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from app.domain import (
    DeliveryResult,
    DeliveryStage,
    DonationRecord,
    RateTable,
    TransportKind,
    round_cents,
)


def _record(**overrides: object) -> DonationRecord:
    fields: dict[str, object] = {
        "identity": "don-1",
        "donor_name": "Alice",
        "amount": Decimal("100"),
        "currency": "THB",
        "message": "hello",
        "transport": TransportKind.SOCKET,
    }
    fields.update(overrides)
    return DonationRecord(**fields)  # type: ignore[arg-type]


class TestDonationRecord:
    """Testes do DonationRecord."""

    def test_record_is_immutable(self) -> None:
        """Registro não aceita atribuição."""
        record = _record()
        with pytest.raises(FrozenInstanceError):
            record.amount = Decimal("1")  # type: ignore[misc]

    def test_with_amount_returns_new_record(self) -> None:
        """with_amount não altera o original."""
        record = _record()
        converted = record.with_amount(Decimal("2.80"), "USD")

        assert converted is not record
        assert converted.amount == Decimal("2.80")
        assert converted.currency == "USD"
        assert converted.identity == record.identity
        assert record.amount == Decimal("100")
        assert record.currency == "THB"

    def test_negative_amount_rejected(self) -> None:
        """Valor negativo é inválido."""
        with pytest.raises(ValueError):
            _record(amount=Decimal("-1"))


class TestRateTable:
    """Testes do RateTable."""

    def test_base_always_present(self) -> None:
        """Moeda base entra com taxa 1 mesmo se omitida."""
        table = RateTable.build("thb", {"usd": Decimal("0.028")})
        assert table.base_currency == "THB"
        assert table.rate_for("THB") == Decimal(1)
        assert table.rate_for("usd") == Decimal("0.028")

    def test_rates_are_read_only(self) -> None:
        """Mapa de taxas não pode ser alterado após a construção."""
        table = RateTable.build("THB", {"USD": Decimal("0.028")})
        with pytest.raises(TypeError):
            table.rates["EUR"] = Decimal("0.025")  # type: ignore[index]

    def test_fallback_table_has_no_update_time(self) -> None:
        """Tabela de boot não tem updated_at nem idade."""
        table = RateTable.fallback("THB", "USD", Decimal("0.028"))
        assert table.updated_at is None
        assert table.age_seconds() is None
        assert table.rate_for("USD") == Decimal("0.028")

    def test_age_seconds(self) -> None:
        """Idade é calculada a partir de updated_at."""
        now = datetime.now(UTC)
        table = RateTable.build("THB", {}, updated_at=now - timedelta(seconds=90))
        assert table.age_seconds(now) == pytest.approx(90)

    def test_unknown_currency_returns_none(self) -> None:
        """Moeda ausente retorna None."""
        table = RateTable.build("THB", {})
        assert table.rate_for("JPY") is None


class TestRoundCents:
    """Testes do arredondamento monetário."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2.805", "2.81"),
            ("2.804", "2.80"),
            ("0.005", "0.01"),
            ("10", "10.00"),
        ],
    )
    def test_half_up(self, raw: str, expected: str) -> None:
        """Arredonda para 2 casas, metade para cima."""
        assert round_cents(Decimal(raw)) == Decimal(expected)


class TestDeliveryResult:
    """Testes do DeliveryResult."""

    def test_primary_is_not_degraded(self) -> None:
        result = DeliveryResult(stage=DeliveryStage.PRIMARY, tip_id="t1", payload={})
        assert result.success is True
        assert result.degraded is False

    def test_fallback_stage_is_degraded(self) -> None:
        result = DeliveryResult(stage=DeliveryStage.PROBE, tip_id="t1", payload={})
        assert result.degraded is True
