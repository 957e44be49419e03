"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console backed by StringIO; the caller
extracts the text via ``get_output(console)``. Renderers are dispatched by
``result.op`` in :func:`render_result`. Unknown ops fall through to a
generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from memoctl.output.console import HEAT_STYLES, create_console, get_output, style_for_type

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from memoctl.services.result import ServiceResult

    Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: paths for listings, raw text for share."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "share":
        return str(result.data.get("text", ""))

    if "path" in result.data:
        return str(result.data["path"])

    # Listings: one path per line, nothing at all for an empty result.
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items if isinstance(item, dict))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def stars(priority: int) -> str:
    """Five-star rating string, e.g. ``★★★☆☆`` for 3."""
    filled = max(0, min(int(priority), 5))
    return "★" * filled + "☆" * (5 - filled)


def heat_glyph(intensity: float) -> Text:
    """One heatmap cell: a dot for an empty day, a shaded block otherwise."""
    if intensity <= 0:
        return Text("·", style=HEAT_STYLES[0])
    band = min(int(intensity * 4), 3) + 1
    return Text("■", style=HEAT_STYLES[band])


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="memo.ok"), Text(f"  {result.op}", style="memo.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="memo.key")
    if key in ("path", "topic", "source", "notification"):
        v = Text(str(value), style="memo.path")
    elif key == "context":
        v = Text(str(value), style="memo.context")
    elif key == "priority":
        v = Text(f"{value} {stars(int(value))}", style="memo.star")
    elif isinstance(value, (list, dict)):
        v = Text(_json.dumps(value, ensure_ascii=False, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_telemetry_tree(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a span tree with color-coded timings."""
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _flags(item: dict[str, Any]) -> Text:
    text = Text()
    if item.get("pinned"):
        text.append("pinned ", style="memo.pinned")
    if item.get("archived"):
        text.append("archived", style="memo.archived")
    return text


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="memo.error"),
        Text(f"  {result.op}{code}", style="memo.op"),
        Text(f"  {msg}"),
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


# ── Mutation renderers ────────────────────────────────────────────────

_MUTATION_KEYS = (
    "path",
    "type",
    "context",
    "links",
    "created",
    "archived",
    "pinned",
    "previous",
    "priority",
    "changed",
)


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create / archive / pin / priority / delete results."""
    _status_line(console, result)
    for key in _MUTATION_KEYS:
        value = result.data.get(key)
        if value is None or value == []:
            continue
        _field(console, key, value)

    items = result.data.get("items")
    if items:
        console.print()
        for item in items:
            console.print(f"  - [ ] {item}", markup=False)
    if verbose:
        _render_meta(console, result)


def _render_promote(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    action = "appended to" if d.get("updated") else "created"
    topic = Text(str(d.get("topic", "")), style="memo.context")
    console.print(Text.assemble(f"  topic {action}: ", topic))
    for key in ("source", "context", "notification"):
        if d.get(key):
            _field(console, key, d[key])
    if verbose:
        _render_meta(console, result)


# ── Query renderers ───────────────────────────────────────────────────


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Listing table: pinned first, newest first, as returned by the service."""
    items: list[dict[str, Any]] = result.data.get("items", [])

    table = Table(show_header=True, show_lines=verbose, pad_edge=False, expand=False)
    table.add_column("Date", style="dim", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Context")
    table.add_column("Priority", style="memo.star", no_wrap=True)
    table.add_column("Flags", no_wrap=True)
    if verbose:
        table.add_column("Preview")
    table.add_column("Path", style="memo.path")

    for item in items:
        doc_type = str(item.get("type") or "")
        row: list[Any] = [
            str(item.get("date", ""))[:16].replace("T", " "),
            Text(doc_type, style=style_for_type(doc_type)),
            Text(str(item.get("context") or "")),
            stars(int(item.get("priority", 0))),
            _flags(item),
        ]
        if verbose:
            row.append(Text(str(item.get("preview", ""))))
        row.append(Text(str(item.get("path", ""))))
        table.add_row(*row)

    console.print(table)
    count = result.data.get("count", len(items))
    console.print(f"\n{count} of {result.data.get('total', 0)} documents")

    if verbose:
        tags = result.data.get("hashtags") or []
        if tags:
            console.print(Text.assemble(("tags: ", "memo.key"), (" ".join(tags), "memo.tag")))
        dates = result.data.get("dates") or []
        if dates:
            console.print(Text.assemble(("dates: ", "memo.key"), ", ".join(dates)))
        _render_meta(console, result)


def _render_document(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render query-get as a panel with the parsed fields above the body."""
    d = result.data
    lines: list[str] = [f"date: {d.get('date', '')}"]
    for key in ("type", "context"):
        if d.get(key):
            lines.append(f"{key}: {d[key]}")
    lines.append(f"priority: {stars(int(d.get('priority', 0)))}")
    flags = [name for name in ("pinned", "archived") if d.get(name)]
    if flags:
        lines.append(f"flags: {', '.join(flags)}")
    if d.get("links"):
        lines.append(f"links: {', '.join(d['links'])}")

    content = Text("\n".join(lines), style="dim")
    body = str(d.get("body", "")).strip()
    if body:
        content.append("\n\n")
        content.append(body, style="")

    style = style_for_type(d.get("type"))
    title = Text(str(d.get("name", "?")))
    console.print(Panel(content, title=title, border_style=style or "dim", expand=False))
    if verbose:
        _render_meta(console, result)


def _render_references(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(Text(f"References for {d.get('name', '?')}", style="memo.context"))

    for key, label in (("backlinks", "Backlinks"), ("frontlinks", "Frontlinks")):
        rows = d.get(key) or []
        console.print(Text(f"\n{label} ({len(rows)})", style="memo.op"))
        for row in rows:
            name = Text(f"  [[{row['name']}]]  ")
            console.print(name, Text(str(row["path"]), style="memo.path"))

    related = d.get("related") or []
    console.print(Text(f"\nRelated keywords ({len(related)})", style="memo.op"))
    for row in related:
        console.print(
            Text(f"  [[{row['name']}]]  "),
            Text(" ".join(row.get("shared", [])), style="memo.tag"),
        )
    if verbose:
        _render_meta(console, result)


def _render_share(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Share text verbatim, no status line, so it can be copied or piped."""
    console.print(str(result.data.get("text", "")), markup=False, soft_wrap=True)


# ── Stats renderer ────────────────────────────────────────────────────


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Summary counters and the 7x12 activity heatmap (oldest week on the left)."""
    d = result.data
    summary = d.get("summary", {})
    _status_line(console, result)
    for key in ("total", "active", "archived", "active_days", "total_chars", "mean_chars_per_day"):
        if key in summary:
            _field(console, key, summary[key])

    console.print()
    for label, row in zip(d.get("weekdays", []), d.get("grid", []), strict=False):
        line = Text(f"  {label} ", style="memo.key")
        for cell in row:
            line.append_text(heat_glyph(cell.get("intensity", 0.0)))
            line.append(" ")
        console.print(line)

    if verbose:
        console.print()
        for day, count in d.get("days", {}).items():
            console.print(f"  {day}: {count}")
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Status line plus all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    # Create
    "create_memo": _render_mutation,
    "create_listify": _render_mutation,
    "create_deep_dive": _render_mutation,
    "create_article": _render_mutation,
    "create_topic_notification": _render_mutation,
    # Update
    "archive": _render_mutation,
    "unarchive": _render_mutation,
    "toggle_pin": _render_mutation,
    "set_priority": _render_mutation,
    "click_star": _render_mutation,
    "delete": _render_mutation,
    # Query
    "list_documents": _render_list,
    "get": _render_document,
    "references": _render_references,
    "share": _render_share,
    # Topics and stats
    "promote": _render_promote,
    "stats": _render_stats,
}
