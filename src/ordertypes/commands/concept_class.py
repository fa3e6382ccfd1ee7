"""Command group: concept class tags."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ordertypes.commands._base import examples

if TYPE_CHECKING:
    from ordertypes.commands._context import AppContext


@click.group("concept-class")
@examples(
    'concept-class add LabSet --description "Lab panels"',
    "concept-class list",
)
def concept_class() -> None:
    """Manage concept classes."""


@concept_class.command()
@examples('concept-class add LabSet --description "Lab panels"')
@click.argument("name")
@click.option("--description", default=None, help="Free-text description.")
@click.pass_obj
def add(app: AppContext, name: str, description: str | None) -> None:
    """Register a concept class."""
    from ordertypes.services.concept_class import ConceptClassService

    app.emit(ConceptClassService(app.store).add(name, description=description))


@concept_class.command("list")
@examples("concept-class list", "--json concept-class list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List concept classes and the order type owning each."""
    from ordertypes.services.concept_class import ConceptClassService

    app.emit(ConceptClassService(app.store).list_concept_classes())
