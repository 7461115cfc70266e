"""Shared ``httpx.Client`` construction.

Every outbound request goes through a client built here so the
User-Agent, Accept header and redirect policy stay consistent and tests
can swap in an ``httpx.MockTransport``.
"""

from __future__ import annotations

import httpx

from ujcon import __version__

USER_AGENT = f"ujcon/{__version__}"


def build_client(
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create a blocking ``httpx.Client`` with the project defaults.

    Args:
        transport: Optional transport override (tests use ``httpx.MockTransport``).
    """
    headers: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
    return httpx.Client(
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
