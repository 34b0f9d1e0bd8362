"""Command group: address checksum and ICAP conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cnsctl.commands._base import CnsGroup

if TYPE_CHECKING:
    from cnsctl.commands._context import AppContext


@click.group(
    "address",
    cls=CnsGroup,
    examples="""\
  cnsctl address checksum 0x45b31e01aa6f42f0549ad482be81635ed3149abb
  cnsctl address checksum XE7338O073KYGTWWZN0F2WZ0R8PX5ZPPZS
  cnsctl address icap 0x00c5496aee77c1ba1f0854206a26dda82a81d6d8""",
)
def address_group() -> None:
    """Validate and convert account addresses."""


@address_group.command()
@click.argument("address")
@click.pass_obj
def checksum(app: AppContext, address: str) -> None:
    """Print the mixed-case checksum form of a hex or ICAP ADDRESS."""
    from cnsctl.services.codec import CodecService

    app.emit(CodecService().checksum_address(address))


@address_group.command()
@click.argument("address")
@click.pass_obj
def icap(app: AppContext, address: str) -> None:
    """Encode a hex ADDRESS as a direct ICAP address."""
    from cnsctl.services.codec import CodecService

    app.emit(CodecService().icap_address(address))
