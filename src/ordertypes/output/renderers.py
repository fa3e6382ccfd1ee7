"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from ordertypes.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from ordertypes.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    no_color: bool = False,
    width: int | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console(no_color=no_color, width=width)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="ot.ok")
    op = Text(f"  {result.op}", style="ot.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}:", style="ot.key")
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value) or "-"
    style = "ot.uuid" if key == "uuid" else "ot.name" if key == "name" else ""
    console.print(k, Text("-" if value is None else str(value), style=style))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ot.error")
    op = Text(f"  {result.op}", style="ot.op")
    console.print(label, op, Text(f"— {msg}"))
    if err is None:
        return

    for rejection in err.detail.get("rejections", []):
        line = Text("  ")
        line.append(str(rejection.get("field", "?")), style="ot.field")
        line.append(f": {rejection.get('message', '')}")
        if verbose:
            line.append(f"  [{rejection.get('code', '')}]", style="dim")
        console.print(line)

    if verbose:
        for k, v in err.detail.items():
            if k != "rejections":
                console.print(Text(f"    {k}: {v}"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    keys = ["name", "parent", "concept_classes", "retired"]
    if verbose:
        keys = ["uuid", *keys, "description", "retire_reason"]
    for key in keys:
        if key in result.data:
            _field(console, key, result.data[key])
    if result.meta and result.meta.get("dry_run"):
        console.print(Text("  dry run: nothing saved", style="ot.warning"))


def _render_order_type_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="ot.name")
    table.add_column("Parent")
    table.add_column("Concept Classes")
    table.add_column("Retired")
    if verbose:
        table.add_column("UUID", style="ot.uuid", no_wrap=True)

    for item in items:
        indent = "  " * int(item.get("depth", 0))
        row = [
            f"{indent}{item.get('name', '')}",
            str(item.get("parent") or ""),
            ", ".join(item.get("concept_classes", [])),
            "yes" if item.get("retired") else "",
        ]
        if verbose:
            row.append(str(item.get("uuid", "")))
        table.add_row(*row, style="ot.retired" if item.get("retired") else None)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} order types")


def _render_concept_class_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="ot.name")
    table.add_column("Order Type")
    table.add_column("Description")
    for item in items:
        table.add_row(
            str(item.get("name", "")),
            str(item.get("order_type") or ""),
            str(item.get("description") or ""),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} concept classes")


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    keys = ["name", "description", "parent", "ancestors", "children", "concept_classes", "retired"]
    if verbose:
        keys.insert(0, "uuid")
    for key in keys:
        _field(console, key, result.data.get(key))
    if result.data.get("retired"):
        _field(console, "retire_reason", result.data.get("retire_reason"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "create_order_type": _render_mutation,
    "update_order_type": _render_mutation,
    "retire_order_type": _render_mutation,
    "unretire_order_type": _render_mutation,
    "list_order_types": _render_order_type_table,
    "list_subtypes": _render_order_type_table,
    "show_order_type": _render_show,
    "list_concept_classes": _render_concept_class_table,
}
