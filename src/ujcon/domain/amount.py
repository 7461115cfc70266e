"""Amount parsing: single values and ``start-end`` ranges.

A raw CLI argument is either a plain number (``"100"``, ``"100.50"``) or a
range with exactly one hyphen (``"100-200"``, ``"100 - 200"``).  Whitespace
around each number is ignored.  Parsing is pure; failures raise
:class:`AmountParseError` carrying a machine-readable ``code``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum


class ParseErrorCode(StrEnum):
    """Reasons an amount string can be rejected."""

    RANGE_FORMAT = "RANGE_FORMAT"
    NOT_A_NUMBER = "NOT_A_NUMBER"
    RANGE_ORDER = "RANGE_ORDER"


class AmountParseError(ValueError):
    """Raised when an amount string cannot be parsed."""

    def __init__(self, code: ParseErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True)
class Single:
    """A single scalar amount."""

    value: float


@dataclass(frozen=True)
class Range:
    """A closed interval ``[start, end]`` with ``start < end``."""

    start: float
    end: float


AmountInput = Single | Range

RANGE_SEPARATOR = "-"


# ASCII decimal or exponent notation, or inf/infinity/nan.  Narrower than
# float(), which also takes underscores and non-ASCII digits.
_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def _parse_number(text: str, label: str) -> float:
    stripped = text.strip()
    if _NUMBER_RE.fullmatch(stripped) is None:
        raise AmountParseError(
            ParseErrorCode.NOT_A_NUMBER,
            f"{label} '{text}' を数値としてパースできません",
        )
    return float(stripped)


def parse_amount(raw: str) -> AmountInput:
    """Parse *raw* into a :class:`Single` or :class:`Range`.

    Raises:
        AmountParseError: ``RANGE_FORMAT`` when a hyphenated string does not
            split into exactly two parts, ``NOT_A_NUMBER`` when a part is not
            numeric, ``RANGE_ORDER`` unless ``start < end`` (a NaN bound
            fails too).
    """
    if RANGE_SEPARATOR not in raw:
        return Single(_parse_number(raw, "値"))

    parts = raw.split(RANGE_SEPARATOR)
    if len(parts) != 2:
        raise AmountParseError(
            ParseErrorCode.RANGE_FORMAT,
            "レンジ形式が正しくありません。例: 100-200",
        )

    start = _parse_number(parts[0], "開始値")
    end = _parse_number(parts[1], "終了値")
    if not start < end:
        raise AmountParseError(
            ParseErrorCode.RANGE_ORDER,
            "開始値は終了値より小さい必要があります",
        )
    return Range(start, end)
