"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Builds the registry client lazily so hashing and
checksum commands never touch the registry file, and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import anyio
import click

from cnsctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cnsctl.config.settings import CnsSettings
    from cnsctl.infrastructure.registry import RegistryClient
    from cnsctl.services.resolution import ResolutionService
    from cnsctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: CnsSettings) -> None:
        self.settings = settings
        self._registry: RegistryClient | None = None

        from cnsctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from cnsctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def registry(self) -> RegistryClient:
        """The registry client (loaded on first access).

        Without a configured registry file, an empty registry is used and
        every supported domain reports as unregistered.
        """
        if self._registry is None:
            from cnsctl.infrastructure.registry import RegistryTransportError, StaticRegistryClient

            path = self.settings.registry_file()
            if path is None:
                self._registry = StaticRegistryClient()
            else:
                try:
                    self._registry = StaticRegistryClient.from_file(path)
                except RegistryTransportError as exc:
                    raise click.ClickException(str(exc)) from exc
        return self._registry

    def resolution(self) -> ResolutionService:
        """A ResolutionService bound to the registry and naming config."""
        from cnsctl.services.resolution import ResolutionService

        naming = self.settings.naming
        return ResolutionService(
            self.registry,
            tlds=naming.tlds,
            checksum_tickers=naming.checksum_tickers,
        )

    def run(self, lookup: Callable[..., Awaitable[ServiceResult]], *args: Any) -> None:
        """Drive an async lookup to completion and emit its result."""
        self.emit(anyio.run(lookup, *args))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
