"""Rich Console factory and theme for ujcon output.

Creates Console instances that render to a StringIO buffer, preserving
the ``render_*() -> str`` contract.  In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

UJCON_THEME = Theme(
    {
        "ujcon.rule": "dim",
        "ujcon.title": "bold",
        "ujcon.rate": "bold cyan",
        "ujcon.time": "dim",
        "ujcon.usd": "green",
        "ujcon.jpy": "magenta",
        "ujcon.error": "bold red",
    }
)

_CURRENCY_STYLES: dict[str, str] = {
    "USD": "ujcon.usd",
    "JPY": "ujcon.jpy",
}


def create_console() -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=UJCON_THEME,
        highlight=False,
        emoji=False,
        width=120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_currency(code: str) -> str:
    """Return the Rich style name for a currency code."""
    return _CURRENCY_STYLES.get(code, "")
