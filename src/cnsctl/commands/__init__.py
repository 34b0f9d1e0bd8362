"""Subcommand modules for cnsctl.

Provides register_commands(), which imports command groups only when the
CLI is assembled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the hash, address, and resolve groups on the root CLI."""
    from cnsctl.commands.address import address_group
    from cnsctl.commands.hash import hash_group
    from cnsctl.commands.resolve import resolve

    cli.add_command(hash_group)
    cli.add_command(address_group)
    cli.add_command(resolve)
