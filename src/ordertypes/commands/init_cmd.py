"""Command: create the order type database."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ordertypes.commands._base import examples
from ordertypes.services.result import ServiceResult

if TYPE_CHECKING:
    from ordertypes.commands._context import AppContext


@click.command("init")
@examples("init", "--json init", "--config ../ordertypes.toml init")
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the database in the project directory (idempotent)."""
    store = app.store
    app.emit(ServiceResult(ok=True, op="init", data={"database": str(store.db_path)}))
