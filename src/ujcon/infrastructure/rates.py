"""USD→JPY rate fetching with ordered endpoint fallback.

Endpoints are tried in priority order; the first one that answers with a
2xx status and a recognisable JSON body wins.  Two body shapes are known:

- :class:`DirectResponse`: ``{"conversion_rates": {"JPY": 150.1, ...}}``
- :class:`WrappedResponse`: ``{"rates": {"JPY": 150.1, ...}}``

Shapes are attempted in that order so a provider that drifts between the
two keeps working.  A mock rate injected at construction short-circuits
the network entirely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError

from ujcon.infrastructure.http import build_client

log = structlog.get_logger(__name__)

DEFAULT_ENDPOINTS: tuple[str, ...] = (
    "https://api.exchangerate-api.com/v4/latest/USD",
    "https://open.er-api.com/v6/latest/USD",
)

MOCK_SOURCE = "mock"


# ── Response shapes ──────────────────────────────────────────────────


class JpyRates(BaseModel):
    """Rate table; only the JPY entry is read."""

    model_config = {"frozen": True}

    jpy: float = Field(alias="JPY")


class DirectResponse(BaseModel):
    model_config = {"frozen": True}

    conversion_rates: JpyRates


class WrappedResponse(BaseModel):
    model_config = {"frozen": True}

    rates: JpyRates


RESPONSE_SHAPES: tuple[type[DirectResponse] | type[WrappedResponse], ...] = (
    DirectResponse,
    WrappedResponse,
)


class RateDecodeError(ValueError):
    """Raised when a response body matches none of the known shapes."""


def decode_rate(payload: Any) -> float:
    """Extract the JPY rate from a decoded JSON *payload*.

    Raises:
        RateDecodeError: If no known response shape matches.
    """
    for shape in RESPONSE_SHAPES:
        try:
            parsed = shape.model_validate(payload)
        except ValidationError:
            continue
        if isinstance(parsed, DirectResponse):
            return parsed.conversion_rates.jpy
        return parsed.rates.jpy
    raise RateDecodeError("レスポンスにJPYレートが含まれていません")


# ── Fetcher ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FetchedRate:
    """A rate and the endpoint (or ``"mock"``) it came from."""

    rate: float
    source: str


@dataclass(frozen=True)
class EndpointFailure:
    url: str
    reason: str


class RateFetchError(Exception):
    """Raised when every endpoint failed.

    The message is the last concrete failure; :attr:`failures` keeps all
    of them in the order they were tried.
    """

    def __init__(self, failures: list[EndpointFailure]) -> None:
        self.failures = failures
        message = failures[-1].reason if failures else "すべてのAPIエンドポイントが失敗しました"
        super().__init__(message)


class RateFetcher:
    """Fetch the current JPY-per-USD rate.

    Args:
        mock_rate: When set, returned as-is without any network I/O.
        client: Client to issue requests with.  If omitted, one is built per
            :meth:`fetch` call and closed afterwards.
        urls: Endpoints in priority order.
    """

    def __init__(
        self,
        *,
        mock_rate: float | None = None,
        client: httpx.Client | None = None,
        urls: tuple[str, ...] = DEFAULT_ENDPOINTS,
    ) -> None:
        self._mock_rate = mock_rate
        self._client = client
        self._urls = urls

    def fetch(self) -> FetchedRate:
        if self._mock_rate is not None:
            log.debug("rate.mock", rate=self._mock_rate)
            return FetchedRate(rate=self._mock_rate, source=MOCK_SOURCE)

        if self._client is not None:
            return self._fetch_first(self._client)
        with build_client() as client:
            return self._fetch_first(client)

    def _fetch_first(self, client: httpx.Client) -> FetchedRate:
        failures: list[EndpointFailure] = []
        for url in self._urls:
            try:
                rate = self._fetch_one(client, url)
            except httpx.HTTPStatusError as exc:
                reason = f"HTTPエラー: {exc.response.status_code} {exc.response.reason_phrase}"
            except (httpx.HTTPError, ValueError) as exc:
                reason = str(exc) or type(exc).__name__
            else:
                log.debug("rate.fetched", url=url, rate=rate)
                return FetchedRate(rate=rate, source=url)

            log.info("rate.endpoint_failed", url=url, reason=reason)
            failures.append(EndpointFailure(url=url, reason=reason))

        raise RateFetchError(failures)

    @staticmethod
    def _fetch_one(client: httpx.Client, url: str) -> float:
        response = client.get(url)
        response.raise_for_status()
        return decode_rate(response.json())
