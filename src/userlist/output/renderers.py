"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from userlist.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from userlist.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("id", "")) for item in items)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="ul.ok")
    op = Text(f"  {result.op}", style="ul.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ul.key")
    v = Text(str(value), style="ul.id" if key == "id" else "")
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    telemetry = result.meta.get("telemetry")
    if telemetry:
        console.print(f"    {telemetry['duration_ms']:>8.2f}ms  {telemetry['name']}")
    for k, v in result.meta.items():
        if k != "telemetry":
            console.print(f"    {k}: {v}")


def user_table(items: list[dict[str, Any]]) -> Table:
    """Build the user listing table from wire-shaped records."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="ul.id", no_wrap=True)
    table.add_column("Name", style="ul.name")
    table.add_column("Company")
    table.add_column("Role")
    table.add_column("Country")

    for item in items:
        company = item.get("company", {})
        name = f"{item.get('firstName', '')} {item.get('lastName', '')}".strip()
        cells = (
            str(item.get("id", "")),
            name,
            str(company.get("name", "")),
            str(company.get("title", "")),
            str(item.get("address", {}).get("country", "")),
        )
        table.add_row(*(Text(cell) for cell in cells))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    label = Text("ERROR", style="ul.error")
    op = Text(f"  {result.op}", style="ul.op")
    if err is None:
        console.print(label, op, Text(" — "), "Unknown error", sep="")
        return

    field_errors = err.detail.get("errors")
    if err.code == "VALIDATION" and field_errors:
        console.print(label, op, Text(" — "), "invalid user", sep="")
        for name, message in field_errors.items():
            console.print(f"  [ul.field]{name}[/ul.field]: {message}")
        return

    console.print(label, op, Text(" — "), Text(err.message), sep="")
    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Listing renderers ─────────────────────────────────────────────────


def _render_listing(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list/search/refresh results as a user table."""
    d = result.data
    items = d.get("items", [])
    if items:
        console.print(user_table(items))
    else:
        console.print("No users to show.")

    count = d.get("count", len(items))
    total = d.get("total", count)
    summary = f"\n{count} of {total} users" if count != total else f"\n{count} users"
    if d.get("search"):
        summary += f" matching '{d['search']}'"
    console.print(summary, markup=False)


# ── Mutation renderers ────────────────────────────────────────────────


def _render_added(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "id", d.get("id", ""))
    _field(console, "name", f"{d.get('firstName', '')} {d.get('lastName', '')}".strip())
    _field(console, "company", d.get("company", {}).get("name", ""))
    _field(console, "role", d.get("company", {}).get("title", ""))
    _field(console, "country", d.get("address", {}).get("country", ""))


def _render_deleted(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if d.get("removed"):
        _status_line(console, result)
        _field(console, "id", d.get("id", ""))
    else:
        console.print(f"No user with id {d.get('id', '')!r}; nothing deleted.", markup=False)


def _render_validated(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text("OK", style="ul.ok"), Text("  candidate is valid"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "list_users": _render_listing,
    "search": _render_listing,
    "refresh": _render_listing,
    "add_user": _render_added,
    "delete_user": _render_deleted,
    "validate": _render_validated,
}
