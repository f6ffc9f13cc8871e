"""Testes do builder de payload de gorjeta e da sanitização."""

from __future__ import annotations

from decimal import Decimal

import pytest

from api.payload_builders.streamelements import (
    PROBE_AMOUNT,
    TipPayloadBuilder,
    restrict_donor_name,
    sanitize_donor_name,
    sanitize_message,
)
from app.domain import DeliveryStage, DonationRecord


@pytest.fixture
def record() -> DonationRecord:
    return DonationRecord(
        identity="don-1",
        donor_name="  José\tda Silva ",
        amount=Decimal("12.345"),
        currency="USD",
        message="obrigado!\r\nvaleu",
    )


class TestTipPayloadBuilder:
    """Payload por estágio."""

    def test_primary_payload(self, record: DonationRecord) -> None:
        payload = TipPayloadBuilder().build(record, DeliveryStage.PRIMARY)

        assert payload == {
            "username": "José da Silva",
            "amount": 12.35,
            "currency": "USD",
            "message": "obrigado! valeu",
        }

    def test_empty_message_stage(self, record: DonationRecord) -> None:
        payload = TipPayloadBuilder().build(record, DeliveryStage.EMPTY_MESSAGE)

        assert payload["message"] == ""
        assert payload["username"] == "José da Silva"

    def test_sanitized_name_stage(self, record: DonationRecord) -> None:
        payload = TipPayloadBuilder().build(record, DeliveryStage.SANITIZED_NAME)

        assert payload["username"] == "Jose da Silva"
        assert payload["message"] == ""
        assert payload["amount"] == 12.35

    def test_probe_stage_ignores_record_content(self, record: DonationRecord) -> None:
        payload = TipPayloadBuilder().build(record, DeliveryStage.PROBE)

        assert payload == {
            "username": "Anonymous",
            "amount": float(PROBE_AMOUNT),
            "currency": "USD",
            "message": "",
        }


class TestSanitizer:
    """Sanitização de nome e mensagem."""

    def test_donor_name_truncated(self) -> None:
        assert len(sanitize_donor_name("x" * 200)) == 64

    def test_blank_donor_name_becomes_anonymous(self) -> None:
        assert sanitize_donor_name("\u200b\n ") == "Anonymous"

    def test_restricted_name_removes_symbols(self) -> None:
        assert restrict_donor_name("💜 Ann_99!!") == "Ann_99"

    def test_restricted_name_only_symbols(self) -> None:
        assert restrict_donor_name("💜💜") == "Anonymous"

    def test_restricted_name_length(self) -> None:
        assert len(restrict_donor_name("a" * 40)) == 25

    def test_message_control_chars_removed(self) -> None:
        assert sanitize_message("hi\x00 there\x07") == "hi there"

    def test_message_truncated(self) -> None:
        assert len(sanitize_message("m" * 1000)) == 255
