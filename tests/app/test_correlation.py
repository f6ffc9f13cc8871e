"""Testes do escopo de correlation_id."""

from __future__ import annotations

from app.observability import correlation_scope, get_correlation_id


class TestCorrelationScope:
    """correlation_scope."""

    def test_sets_and_restores(self) -> None:
        assert get_correlation_id() == ""
        with correlation_scope("outer") as outer:
            assert outer == "outer"
            with correlation_scope("inner"):
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"
        assert get_correlation_id() == ""

    def test_generates_when_missing(self) -> None:
        with correlation_scope(None) as generated:
            assert generated
            assert get_correlation_id() == generated
