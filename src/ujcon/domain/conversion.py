"""USD/JPY conversion at a given rate (JPY per 1 USD)."""

from __future__ import annotations

import math
from enum import StrEnum

from ujcon.domain.amount import AmountInput, Range, Single


class Direction(StrEnum):
    """Conversion direction."""

    USD_TO_JPY = "usd_to_jpy"
    JPY_TO_USD = "jpy_to_usd"


class InvalidRateError(ValueError):
    """Raised when a rate cannot be used for conversion (zero, negative, NaN)."""


def convert_usd_to_jpy(amount: float, rate: float) -> float:
    return amount * rate


def convert_jpy_to_usd(amount: float, rate: float) -> float:
    return amount / rate


_CONVERTERS = {
    Direction.USD_TO_JPY: convert_usd_to_jpy,
    Direction.JPY_TO_USD: convert_jpy_to_usd,
}


def convert(amount: AmountInput, rate: float, direction: Direction) -> AmountInput:
    """Convert *amount* element-wise, preserving its Single/Range shape.

    Raises:
        InvalidRateError: If *rate* is zero, negative, or NaN.
    """
    if math.isnan(rate) or rate <= 0:
        raise InvalidRateError(f"為替レートが不正です: {rate}")

    fn = _CONVERTERS[direction]
    if isinstance(amount, Range):
        return Range(fn(amount.start, rate), fn(amount.end, rate))
    return Single(fn(amount.value, rate))
