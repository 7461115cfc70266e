"""ConvertService: fetch a rate, parse an amount, convert it.

The order is fixed: the rate is fetched before the amount is parsed, so an
unreachable API is reported even when the amount is also malformed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ujcon.domain.amount import AmountInput, AmountParseError, Range, parse_amount
from ujcon.domain.conversion import Direction, InvalidRateError, convert
from ujcon.infrastructure.rates import RateFetcher, RateFetchError
from ujcon.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

OP = "convert"


def _local_now() -> datetime:
    return datetime.now().astimezone()


def amount_to_dict(amount: AmountInput) -> dict[str, Any]:
    """Serialize an AmountInput into the ``data`` payload shape."""
    if isinstance(amount, Range):
        return {"kind": "range", "start": amount.start, "end": amount.end}
    return {"kind": "single", "value": amount.value}


def _error(code: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=OP,
        error=ServiceError(code=code, message=message, detail=detail),
    )


class ConvertService:
    """Convert a raw amount string between USD and JPY.

    Args:
        fetcher: Source of the current rate.
        clock: Returns the timestamp reported alongside the rate.
    """

    def __init__(
        self,
        fetcher: RateFetcher,
        *,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._fetcher = fetcher
        self._clock = clock

    def convert(self, raw_amount: str, direction: Direction) -> ServiceResult:
        try:
            fetched = self._fetcher.fetch()
        except RateFetchError as exc:
            return _error(
                "RATE_FETCH_FAILED",
                f"為替レートの取得に失敗しました: {exc}",
                failures=[{"url": f.url, "reason": f.reason} for f in exc.failures],
            )
        fetched_at = self._clock()

        try:
            amount = parse_amount(raw_amount)
        except AmountParseError as exc:
            return _error("INVALID_AMOUNT", exc.message, reason=exc.code.value, input=raw_amount)

        try:
            converted = convert(amount, fetched.rate, direction)
        except InvalidRateError as exc:
            return _error("INVALID_RATE", str(exc), rate=fetched.rate, source=fetched.source)

        logger.debug(
            "Converted %r (%s) at %s from %s", raw_amount, direction, fetched.rate, fetched.source
        )
        return ServiceResult(
            ok=True,
            op=OP,
            data={
                "direction": direction.value,
                "rate": fetched.rate,
                "source": fetched.source,
                "fetched_at": fetched_at,
                "amount": amount_to_dict(amount),
                "result": amount_to_dict(converted),
            },
        )
