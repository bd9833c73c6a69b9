"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shipctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from shipctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, list_limit: int = 0) -> str:
    """Render a ServiceResult to a styled string via Rich.

    *list_limit* caps the rows shown by table renderers (0 = all).
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, list_limit=list_limit)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="ship.ok")
    op = Text(f"  {result.op}", style="ship.op")
    console.print(Text.assemble(label, op))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ship.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="ship.id")
    elif key in _MONEY_KEYS:
        v = Text(str(value), style="ship.money")
    elif key in ("status", "previous_status"):
        v = Text(str(value), style=style_for_status(str(value)))
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":"), default=str))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


_MONEY_KEYS = frozenset(
    {
        "price",
        "total_revenue",
        "total_spent",
        "base_price",
        "price_per_kg",
        "address_delivery_fee",
    }
)


def _destination(item: dict[str, Any]) -> str:
    if item.get("office_delivery"):
        return f"office {item.get('delivery_office_id')}"
    return str(item.get("delivery_address", ""))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry timing (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry" and isinstance(v, dict):
            duration = float(v.get("duration_ms", 0.0))
            style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
            console.print(f"    [{style}]{duration:>8.2f}ms[/{style}]  {v.get('name', '?')}")
        else:
            console.print(f"    {k}: {v}")


def _shipment_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="ship.id", no_wrap=True)
    table.add_column("Status")
    table.add_column("Sender", justify="right")
    table.add_column("Recipient", justify="right")
    table.add_column("Destination")
    table.add_column("Weight", justify="right")
    table.add_column("Price", style="ship.money", justify="right")
    if verbose:
        table.add_column("Registered", style="dim")
        table.add_column("Delivered", style="dim")

    for item in items:
        status = str(item.get("status", ""))
        row: list[Any] = [
            str(item.get("id", "")),
            Text(status, style=style_for_status(status)),
            str(item.get("sender_id", "")),
            str(item.get("recipient_id", "")),
            _destination(item),
            str(item.get("weight", "")),
            str(item.get("price", "")),
        ]
        if verbose:
            row.append(str(item.get("registered_at", "")))
            row.append(str(item.get("delivered_at") or ""))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    label = Text("ERROR", style="ship.error")
    op = Text(f"  {result.op}{code}", style="ship.op")
    console.print(Text.assemble(label, op, " - ", msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Shipment renderers ────────────────────────────────────────────────


def _render_shipment_mutation(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    """Render register/update/status-change results."""
    _status_line(console, result)
    d = result.data
    for key in ("id", "previous_status", "status", "weight", "price"):
        if key in d:
            _field(console, key, d[key])
    if "office_delivery" in d:
        _field(console, "destination", _destination(d))
    if d.get("changed") is False:
        _field(console, "changed", "no (already in this status)")
    if d.get("delivered_at"):
        _field(console, "delivered_at", d["delivered_at"])
    if verbose:
        _render_meta(console, result)


def _render_delete(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    _status_line(console, result)
    _field(console, "id", result.data.get("id"))
    if verbose:
        _render_meta(console, result)


def _render_shipment(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    """Render a single shipment as a panel."""
    d = result.data
    lines = [
        f"status: {d.get('status')}",
        f"sender: {d.get('sender_id')}",
        f"recipient: {d.get('recipient_id')}",
        f"registered by: {d.get('registered_by_id')}",
    ]
    if d.get("origin_office_id") is not None:
        lines.append(f"origin office: {d['origin_office_id']}")
    lines.append(f"destination: {_destination(d)}")
    lines.append(f"weight: {d.get('weight')} kg")
    lines.append(f"price: {d.get('price')}")
    lines.append(f"registered: {d.get('registered_at')}")
    if d.get("delivered_at"):
        lines.append(f"delivered: {d['delivered_at']}")
    if verbose:
        lines.append(f"updated: {d.get('updated_at')}")
    allowed = d.get("allowed_transitions")
    if allowed is not None:
        lines.append(f"next: {', '.join(allowed) if allowed else '(terminal)'}")

    style = style_for_status(str(d.get("status", "")))
    title = f"Shipment {d.get('id', '?')}"
    console.print(Panel("\n".join(lines), title=title, border_style=style or "dim", expand=False))
    if verbose:
        _render_meta(console, result)


def _render_shipment_list(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    list_limit: int = 0,
    **_: Any,
) -> None:
    items = result.data.get("items", [])
    shown = items[:list_limit] if list_limit > 0 else items
    console.print(_shipment_table(shown, verbose=verbose))
    count = result.data.get("count", len(items))
    suffix = f" (showing {len(shown)})" if len(shown) < len(items) else ""
    console.print(f"\n{count} shipments{suffix}")
    if verbose:
        _render_meta(console, result)


# ── Pricing renderers ─────────────────────────────────────────────────


def _render_config(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    """Render get_active_config / update_config / seed results."""
    _status_line(console, result)
    d = result.data
    for key in ("id", "base_price", "price_per_kg", "address_delivery_fee", "created_at"):
        if key in d:
            _field(console, key, d[key])
    if d.get("previous_id") is not None:
        _field(console, "previous_id", d["previous_id"])
    if d.get("seeded") is False:
        _field(console, "seeded", "no (pricing already configured)")
    if verbose:
        _render_meta(console, result)


def _render_quote(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "weight", d.get("weight"))
    _field(console, "destination", "office" if d.get("office_delivery") else "address")
    _field(console, "price", d.get("price"))
    if verbose:
        _field(console, "config_id", d.get("config_id"))
        _render_meta(console, result)


def _render_config_history(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="ship.id", no_wrap=True)
    table.add_column("Active")
    table.add_column("Base", style="ship.money", justify="right")
    table.add_column("Per kg", style="ship.money", justify="right")
    table.add_column("Address fee", style="ship.money", justify="right")
    table.add_column("Created", style="dim")
    for item in result.data.get("items", []):
        table.add_row(
            str(item.get("id", "")),
            Text("yes", style="ship.ok") if item.get("active") else "",
            str(item.get("base_price", "")),
            str(item.get("price_per_kg", "")),
            str(item.get("address_delivery_fee", "")),
            str(item.get("created_at", "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} configs")
    if verbose:
        _render_meta(console, result)


# ── Report renderers ──────────────────────────────────────────────────


def _render_report(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    """Render aggregate reports as a two-column table."""
    title = result.op.replace("_", " ").title()
    table = Table(title=title, show_header=False, pad_edge=False, expand=False)
    table.add_column("Metric", style="ship.key")
    table.add_column("Value", justify="right")
    for key, value in result.data.items():
        style = "ship.money" if key in _MONEY_KEYS else ""
        table.add_row(key.replace("_", " "), Text(str(value), style=style))
    console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Init/upgrade renderers ────────────────────────────────────────────


def _render_init(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("db_path", "config_path", "revision", "pricing_seeded"):
        if key in d:
            _field(console, key, d[key])
    if verbose:
        _render_meta(console, result)


def _render_upgrade(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    """Render upgrade/migration results."""
    _status_line(console, result)
    d = result.data
    for key in ("applied_count", "pending_count", "current", "head", "backup_path", "message"):
        if key in d:
            _field(console, key, d[key])
    if verbose and d.get("pending"):
        console.print()
        for p in d["pending"]:
            console.print(f"  {p['revision']}: {p['description']}")


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(
    result: ServiceResult, console: Console, *, verbose: bool = False, **_: Any
) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Shipments
    "register_shipment": _render_shipment_mutation,
    "update_status": _render_shipment_mutation,
    "update_shipment": _render_shipment_mutation,
    "delete_shipment": _render_delete,
    "get_shipment": _render_shipment,
    "list_shipments": _render_shipment_list,
    # Pricing
    "calculate_price": _render_quote,
    "get_active_config": _render_config,
    "update_config": _render_config,
    "seed_default_config": _render_config,
    "config_history": _render_config_history,
    # Reports
    "revenue_report": _render_report,
    "dashboard_metrics": _render_report,
    "customer_metrics": _render_report,
    # Lifecycle
    "init_project": _render_init,
    "upgrade": _render_upgrade,
}
