"""AppContext: settings, logging and result emission for one invocation.

Created once by the root command.  Centralizes stdout/stderr routing and
exit codes so the command body only sequences service calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ujcon.output.renderers import render_result

if TYPE_CHECKING:
    from ujcon.config.settings import UjconSettings
    from ujcon.infrastructure.rates import RateFetcher
    from ujcon.services.result import ServiceResult


class AppContext:
    """Shared state for a single CLI run.

    The rate fetcher is built lazily so ``--help`` and ``--version`` never
    construct an HTTP client.
    """

    def __init__(self, settings: UjconSettings) -> None:
        self.settings = settings
        self._fetcher: RateFetcher | None = None

        from ujcon.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def fetcher(self) -> RateFetcher:
        """The rate fetcher (created lazily on first access)."""
        if self._fetcher is None:
            from ujcon.infrastructure.rates import RateFetcher

            self._fetcher = RateFetcher(mock_rate=self.settings.mock_rate)
        return self._fetcher

    def emit(self, result: ServiceResult) -> None:
        """Render a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = render_result(result)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
