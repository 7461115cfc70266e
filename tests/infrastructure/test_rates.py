"""Tests for rate decoding and endpoint fallback."""

from __future__ import annotations

import httpx
import pytest

from tests.conftest import DIRECT_URL, WRAPPED_URL, json_handler, mock_client
from ujcon.infrastructure import rates
from ujcon.infrastructure.rates import (
    DEFAULT_ENDPOINTS,
    MOCK_SOURCE,
    RateDecodeError,
    RateFetcher,
    RateFetchError,
    decode_rate,
)

URLS = (DIRECT_URL, WRAPPED_URL)


class TestDecodeRate:
    def test_direct_shape(self) -> None:
        assert decode_rate({"conversion_rates": {"JPY": 149.5, "EUR": 0.92}}) == 149.5

    def test_wrapped_shape(self) -> None:
        payload = {"result": "success", "base_code": "USD", "rates": {"JPY": 151.25}}
        assert decode_rate(payload) == 151.25

    def test_integer_rate(self) -> None:
        assert decode_rate({"rates": {"JPY": 150}}) == 150.0

    def test_direct_shape_tried_first(self) -> None:
        payload = {"conversion_rates": {"JPY": 1.0}, "rates": {"JPY": 2.0}}
        assert decode_rate(payload) == 1.0

    def test_falls_through_to_wrapped_when_direct_incomplete(self) -> None:
        payload = {"conversion_rates": {"EUR": 0.9}, "rates": {"JPY": 2.0}}
        assert decode_rate(payload) == 2.0

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"rates": {"EUR": 0.92}},
            {"rates": {"JPY": "not-a-number"}},
            [1, 2, 3],
            None,
        ],
    )
    def test_unknown_shape(self, payload: object) -> None:
        with pytest.raises(RateDecodeError):
            decode_rate(payload)


class TestRateFetcherMock:
    def test_mock_rate_skips_network(self) -> None:
        calls: list[str] = []
        client = mock_client(json_handler({}, calls))
        fetched = RateFetcher(mock_rate=123.45, client=client, urls=URLS).fetch()
        assert fetched.rate == 123.45
        assert fetched.source == MOCK_SOURCE
        assert calls == []

    def test_mock_rate_never_builds_client(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _boom(**_kwargs: object) -> httpx.Client:
            raise AssertionError("network client built")

        monkeypatch.setattr(rates, "build_client", _boom)
        assert RateFetcher(mock_rate=150.0).fetch().rate == 150.0


class TestRateFetcherFallback:
    def test_first_endpoint_wins(self) -> None:
        calls: list[str] = []
        handler = json_handler(
            {
                DIRECT_URL: (200, {"conversion_rates": {"JPY": 150.0}}),
                WRAPPED_URL: (200, {"rates": {"JPY": 999.0}}),
            },
            calls,
        )
        fetched = RateFetcher(client=mock_client(handler), urls=URLS).fetch()
        assert fetched.rate == 150.0
        assert fetched.source == DIRECT_URL
        assert calls == [DIRECT_URL]

    def test_falls_back_on_connection_error(self) -> None:
        handler = json_handler({WRAPPED_URL: (200, {"rates": {"JPY": 151.0}})})
        fetched = RateFetcher(client=mock_client(handler), urls=URLS).fetch()
        assert fetched.rate == 151.0
        assert fetched.source == WRAPPED_URL

    def test_falls_back_on_http_error_status(self) -> None:
        handler = json_handler(
            {
                DIRECT_URL: (503, {"error": "unavailable"}),
                WRAPPED_URL: (200, {"rates": {"JPY": 152.0}}),
            }
        )
        assert RateFetcher(client=mock_client(handler), urls=URLS).fetch().rate == 152.0

    def test_falls_back_on_unknown_body(self) -> None:
        handler = json_handler(
            {
                DIRECT_URL: (200, {"unexpected": True}),
                WRAPPED_URL: (200, {"rates": {"JPY": 153.0}}),
            }
        )
        assert RateFetcher(client=mock_client(handler), urls=URLS).fetch().rate == 153.0

    def test_falls_back_on_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == DIRECT_URL:
                return httpx.Response(200, text="<html>oops</html>")
            return httpx.Response(200, json={"rates": {"JPY": 154.0}})

        assert RateFetcher(client=mock_client(handler), urls=URLS).fetch().rate == 154.0

    def test_all_endpoints_fail(self) -> None:
        handler = json_handler({DIRECT_URL: (500, {})})
        with pytest.raises(RateFetchError) as exc_info:
            RateFetcher(client=mock_client(handler), urls=URLS).fetch()

        failures = exc_info.value.failures
        assert [f.url for f in failures] == [DIRECT_URL, WRAPPED_URL]
        assert failures[0].reason == "HTTPエラー: 500 Internal Server Error"
        assert "connection refused" in failures[1].reason
        # The message is the last concrete failure.
        assert str(exc_info.value) == failures[1].reason

    def test_status_failure_names_reason_phrase(self) -> None:
        handler = json_handler({DIRECT_URL: (503, {}), WRAPPED_URL: (404, {})})
        with pytest.raises(RateFetchError) as exc_info:
            RateFetcher(client=mock_client(handler), urls=URLS).fetch()
        assert [f.reason for f in exc_info.value.failures] == [
            "HTTPエラー: 503 Service Unavailable",
            "HTTPエラー: 404 Not Found",
        ]

    def test_empty_endpoint_list(self) -> None:
        with pytest.raises(RateFetchError) as exc_info:
            RateFetcher(client=mock_client(json_handler({})), urls=()).fetch()
        assert exc_info.value.failures == []
        assert "すべてのAPIエンドポイントが失敗しました" in str(exc_info.value)

    def test_builds_and_closes_own_client(self, monkeypatch: pytest.MonkeyPatch) -> None:
        built: list[httpx.Client] = []

        def _build(**_kwargs: object) -> httpx.Client:
            client = mock_client(json_handler({DIRECT_URL: (200, {"rates": {"JPY": 150.0}})}))
            built.append(client)
            return client

        monkeypatch.setattr(rates, "build_client", _build)
        assert RateFetcher(urls=URLS).fetch().rate == 150.0
        assert len(built) == 1
        assert built[0].is_closed


class TestDefaultEndpoints:
    def test_priority_order(self) -> None:
        assert DEFAULT_ENDPOINTS == (
            "https://api.exchangerate-api.com/v4/latest/USD",
            "https://open.er-api.com/v6/latest/USD",
        )
