"""Command group: create, edit, retire, and browse order types."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ordertypes.commands._base import examples

if TYPE_CHECKING:
    from ordertypes.commands._context import AppContext


@click.group("order-type")
@examples(
    'order-type create "Lab Order" --concept-class Test',
    'order-type create "Radiology" --parent "Test Order"',
    'order-type update "Lab Order" --rename "Laboratory Order"',
    'order-type subtypes "Test Order"',
    "order-type list --include-retired",
)
def order_type() -> None:
    """Manage order types."""


@order_type.command()
@examples(
    'order-type create "Drug Order"',
    'order-type create "Lab Order" --parent "Test Order" --concept-class LabSet',
    'order-type create "Imaging" --concept-class Radiology --dry-run',
)
@click.argument("name")
@click.option("--parent", default=None, help="Name of the parent order type.")
@click.option(
    "--concept-class",
    "concept_classes",
    multiple=True,
    help="Concept class to attach (repeatable).",
)
@click.option("--description", default=None, help="Free-text description.")
@click.option("--dry-run", is_flag=True, help="Validate only; do not save.")
@click.pass_obj
def create(
    app: AppContext,
    name: str,
    parent: str | None,
    concept_classes: tuple[str, ...],
    description: str | None,
    dry_run: bool,
) -> None:
    """Create an order type."""
    from ordertypes.services.order_type import OrderTypeService

    app.emit(
        OrderTypeService(app.store).create(
            name,
            parent=parent,
            concept_classes=concept_classes,
            description=description,
            dry_run=dry_run,
        )
    )


@order_type.command()
@examples(
    'order-type update "Lab Order" --rename "Laboratory Order"',
    'order-type update "Lab Order" --parent "Test Order"',
    'order-type update "Lab Order" --no-parent',
    'order-type update "Lab Order" --concept-class LabSet --concept-class Test',
)
@click.argument("name")
@click.option("--rename", "new_name", default=None, help="New name.")
@click.option("--parent", default=None, help="New parent order type.")
@click.option("--no-parent", is_flag=True, help="Detach from the current parent.")
@click.option(
    "--concept-class",
    "concept_classes",
    multiple=True,
    help="Replace the concept classes (repeatable).",
)
@click.option("--description", default=None, help="New description.")
@click.option("--dry-run", is_flag=True, help="Validate only; do not save.")
@click.pass_obj
def update(
    app: AppContext,
    name: str,
    new_name: str | None,
    parent: str | None,
    no_parent: bool,
    concept_classes: tuple[str, ...],
    description: str | None,
    dry_run: bool,
) -> None:
    """Edit an existing order type."""
    from ordertypes.services.order_type import OrderTypeService

    if parent is not None and no_parent:
        raise click.UsageError("--parent and --no-parent are mutually exclusive.")

    app.emit(
        OrderTypeService(app.store).update(
            name,
            new_name=new_name,
            parent=parent,
            clear_parent=no_parent,
            concept_classes=concept_classes or None,
            description=description,
            dry_run=dry_run,
        )
    )


@order_type.command()
@examples('order-type retire "Old Order" --reason "Replaced"')
@click.argument("name")
@click.option("--reason", required=True, help="Why the order type is retired.")
@click.pass_obj
def retire(app: AppContext, name: str, reason: str) -> None:
    """Retire an order type."""
    from ordertypes.services.order_type import OrderTypeService

    app.emit(OrderTypeService(app.store).retire(name, reason))


@order_type.command()
@examples('order-type unretire "Old Order"')
@click.argument("name")
@click.pass_obj
def unretire(app: AppContext, name: str) -> None:
    """Restore a retired order type."""
    from ordertypes.services.order_type import OrderTypeService

    app.emit(OrderTypeService(app.store).unretire(name))


@order_type.command("list")
@examples(
    "order-type list",
    "order-type list --include-retired",
    "--json order-type list",
)
@click.option("--include-retired", is_flag=True, help="Include retired order types.")
@click.pass_obj
def list_cmd(app: AppContext, include_retired: bool) -> None:
    """List order types."""
    from ordertypes.services.order_type import OrderTypeService

    app.emit(OrderTypeService(app.store).list_order_types(include_retired=include_retired))


@order_type.command()
@examples('order-type show "Lab Order"')
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show one order type with its ancestors and children."""
    from ordertypes.services.order_type import OrderTypeService

    app.emit(OrderTypeService(app.store).show(name))


@order_type.command()
@examples(
    'order-type subtypes "Test Order"',
    'order-type subtypes "Test Order" --include-retired',
)
@click.argument("name")
@click.option("--include-retired", is_flag=True, help="Include retired subtypes.")
@click.pass_obj
def subtypes(app: AppContext, name: str, include_retired: bool) -> None:
    """List every order type below NAME."""
    from ordertypes.services.order_type import OrderTypeService

    app.emit(OrderTypeService(app.store).subtypes(name, include_retired=include_retired))
