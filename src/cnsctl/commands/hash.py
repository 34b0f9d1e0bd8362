"""Command group: namehash computation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cnsctl.commands._base import CnsGroup

if TYPE_CHECKING:
    from cnsctl.commands._context import AppContext


@click.group(
    "hash",
    cls=CnsGroup,
    examples="""\
  cnsctl hash namehash brad.crypto
  cnsctl hash childhash 0x0f4a10a4f46c288cea365fcf45cccf0e9d901b945b9829ccdb54c10dc3cb7a6f brad
  cnsctl -q hash namehash crypto""",
)
def hash_group() -> None:
    """Compute namehashes for domain names."""


@hash_group.command(
    examples="""\
  cnsctl hash namehash crypto
  cnsctl --json hash namehash -- -hello.crypto""",
)
@click.argument("domain")
@click.pass_obj
def namehash(app: AppContext, domain: str) -> None:
    """Hash DOMAIN (lowercased first)."""
    from cnsctl.services.codec import CodecService

    app.emit(CodecService().namehash(domain))


@hash_group.command(
    examples="""\
  cnsctl hash childhash 0x0f4a10a4f46c288cea365fcf45cccf0e9d901b945b9829ccdb54c10dc3cb7a6f brad""",
)
@click.argument("parent")
@click.argument("label")
@click.pass_obj
def childhash(app: AppContext, parent: str, label: str) -> None:
    """Combine PARENT namehash with one new leftmost LABEL."""
    from cnsctl.services.codec import CodecService

    app.emit(CodecService().childhash(parent, label))
