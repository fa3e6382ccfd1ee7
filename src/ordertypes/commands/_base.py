"""Shared Click decorators for ordertypes commands.

:func:`examples` adds an eager ``--examples`` flag that prints sample
invocations and exits. Sample lines are written without the program
name; it is prefixed here so every listing reads as a full command line.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

PROG_NAME = "ordertypes"


def format_examples(command_path: str, lines: tuple[str, ...]) -> str:
    """Render the ``--examples`` listing for *command_path*."""
    body = "\n".join(f"  {PROG_NAME} {line}" for line in lines)
    return f"Examples for '{command_path}':\n\n{body}"


def examples[F: Callable[..., Any]](*lines: str) -> Callable[[F], F]:
    """Decorate a command or group with ``--examples`` listing *lines*.

    Apply beneath ``@click.command``/``@click.group`` like any option.
    """

    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(format_examples(ctx.command_path, lines))
        ctx.exit(0)

    return click.option(
        "--examples",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )
