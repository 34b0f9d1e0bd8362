"""Command group: record resolution through the registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cnsctl.commands._base import CnsGroup

if TYPE_CHECKING:
    from cnsctl.commands._context import AppContext


@click.group(
    "resolve",
    cls=CnsGroup,
    examples="""\
  cnsctl --registry registry.toml resolve address brad.crypto ETH
  cnsctl resolve record brad.crypto ipfs.html.value
  cnsctl -q resolve ipfs brad.crypto
  cnsctl --json resolve owner brad.crypto""",
)
def resolve() -> None:
    """Resolve domain records through the configured registry."""


@resolve.command()
@click.argument("domain")
@click.argument("key")
@click.pass_obj
def record(app: AppContext, domain: str, key: str) -> None:
    """Resolve an arbitrary record KEY on DOMAIN."""
    svc = app.resolution()
    app.run(svc.resolve_record, domain, key)


@resolve.command()
@click.argument("domain")
@click.argument("ticker")
@click.pass_obj
def address(app: AppContext, domain: str, ticker: str) -> None:
    """Resolve the TICKER coin address on DOMAIN."""
    svc = app.resolution()
    app.run(svc.address, domain, ticker)


@resolve.command()
@click.argument("domain")
@click.pass_obj
def ipfs(app: AppContext, domain: str) -> None:
    """Resolve the IPFS content hash of DOMAIN."""
    svc = app.resolution()
    app.run(svc.ipfs_hash, domain)


@resolve.command("http-url")
@click.argument("domain")
@click.pass_obj
def http_url(app: AppContext, domain: str) -> None:
    """Resolve the redirect URL of DOMAIN."""
    svc = app.resolution()
    app.run(svc.http_url, domain)


@resolve.command()
@click.argument("domain")
@click.pass_obj
def email(app: AppContext, domain: str) -> None:
    """Resolve the contact e-mail of DOMAIN."""
    svc = app.resolution()
    app.run(svc.email, domain)


@resolve.command()
@click.argument("domain")
@click.pass_obj
def owner(app: AppContext, domain: str) -> None:
    """Print the owner address of DOMAIN."""
    svc = app.resolution()
    app.run(svc.owner, domain)


@resolve.command("resolver")
@click.argument("domain")
@click.pass_obj
def resolver_cmd(app: AppContext, domain: str) -> None:
    """Print the resolver address bound to DOMAIN."""
    svc = app.resolution()
    app.run(svc.resolver, domain)


@resolve.command()
@click.argument("domain")
@click.pass_obj
def ttl(app: AppContext, domain: str) -> None:
    """Print the TTL of DOMAIN."""
    svc = app.resolution()
    app.run(svc.ttl, domain)
