"""Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

A successful result renders the conversion banner; a failed one renders a
single error line.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rich.text import Text

from ujcon.domain.conversion import Direction
from ujcon.output.console import create_console, get_output, style_for_currency

if TYPE_CHECKING:
    from datetime import datetime

    from rich.console import Console

    from ujcon.services.result import ServiceResult


RULE = "━" * 33
TITLE = "📊 USD/JPY 為替レート変換"
TIMESTAMP_FORMAT = "%Y年%m月%d日 %H:%M:%S"
ERROR_PREFIX = "エラー: "

# direction -> (source icon, source code, target icon, target code)
_LEGS: dict[str, tuple[str, str, str, str]] = {
    Direction.USD_TO_JPY: ("💵", "USD", "💴", "JPY"),
    Direction.JPY_TO_USD: ("💴", "JPY", "💵", "USD"),
}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _render_conversion(result, console)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


def format_amount(value: float) -> str:
    """Format a user-supplied amount in its shortest natural form.

    Shortest round-trip digits, never exponent notation, and integral
    values drop the fractional part (``100.0`` -> ``"100"``,
    ``1e-05`` -> ``"0.00001"``).
    """
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    return text.removesuffix(".0")


def format_money(value: float) -> str:
    """Format a rate or converted amount to two decimal places."""
    return f"{value:.2f}"


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as ``YYYY年MM月DD日 HH:MM:SS``."""
    return moment.strftime(TIMESTAMP_FORMAT)


# ── Helpers ───────────────────────────────────────────────────────────


def _rule(console: Console) -> None:
    console.print(Text(RULE, style="ujcon.rule"))


def _money(text: str, code: str) -> Text:
    return Text(f"{text} {code}", style=style_for_currency(code))


def _conversion_line(data: dict[str, Any]) -> Text:
    src_icon, src_code, dst_icon, dst_code = _LEGS[data["direction"]]
    amount = data["amount"]
    converted = data["result"]

    if amount["kind"] == "range":
        source = f"{format_amount(amount['start'])} - {format_amount(amount['end'])}"
        target = f"{format_money(converted['start'])} - {format_money(converted['end'])}"
    else:
        source = format_amount(amount["value"])
        target = format_money(converted["value"])

    return Text.assemble(
        f"{src_icon} ",
        _money(source, src_code),
        f" → {dst_icon} ",
        _money(target, dst_code),
    )


# ── Renderers ─────────────────────────────────────────────────────────


def _render_conversion(result: ServiceResult, console: Console) -> None:
    data = result.data
    _rule(console)
    console.print(Text(TITLE, style="ujcon.title"))
    _rule(console)
    console.print(
        Text.assemble(
            "💱 現在のレート: 1 USD = ",
            Text(format_money(data["rate"]), style="ujcon.rate"),
            " JPY",
        )
    )
    console.print(
        Text.assemble(
            "🕐 取得時刻: ",
            Text(format_timestamp(data["fetched_at"]), style="ujcon.time"),
        )
    )
    _rule(console)
    console.print(_conversion_line(data))
    _rule(console)


def _render_error(result: ServiceResult, console: Console) -> None:
    message = result.error.message if result.error else "不明なエラー"
    console.print(Text(f"{ERROR_PREFIX}{message}", style="ujcon.error"))
