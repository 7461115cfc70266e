"""ujcon: USD/JPY exchange rate conversion CLI."""

__version__ = "0.1.0"
