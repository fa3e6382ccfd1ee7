"""Subcommand modules for ordertypes.

Provides register_commands() which uses deferred imports to keep
``ordertypes --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    from ordertypes.commands.concept_class import concept_class
    from ordertypes.commands.init_cmd import init_cmd
    from ordertypes.commands.order_type import order_type

    cli.add_command(order_type)
    cli.add_command(concept_class)
    cli.add_command(init_cmd)
