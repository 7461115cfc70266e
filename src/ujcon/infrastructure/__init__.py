"""Infrastructure: HTTP client construction and exchange rate endpoints."""
