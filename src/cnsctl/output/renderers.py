"""Rich renderers for ServiceResult.

Every result renders as a status line followed by its data fields; the
resolved ``value`` is printed first and emphasized.  Verbose mode appends
error detail and the telemetry span tree.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from cnsctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from cnsctl.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _render_success(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render only the value (or a one-line error) for ``--quiet`` mode."""
    if not result.ok:
        code = result.error.code if result.error else "ERROR"
        return f"{code}: {result.op}"
    value = result.data.get("value")
    if value is None:
        return f"OK: {result.op}"
    return str(value)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="cns.key")
    if key == "value":
        v = Text(str(value), style="cns.value")
    elif key in ("namehash", "parent"):
        v = Text(str(value), style="cns.hash")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations")
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line, soft_wrap=True)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_success(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text.assemble(("OK", "cns.ok"), (f"  {result.op}", "cns.op")))
    if "value" in result.data:
        _field(console, "value", result.data["value"])
    for key, value in result.data.items():
        if key != "value":
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f"  [{err.code}]" if err else ""
    console.print(
        Text.assemble(
            ("ERROR", "cns.error"),
            (f"  {result.op}", "cns.op"),
            (code, "cns.code"),
            " — ",
            msg,
        )
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")
    if verbose:
        _render_meta(console, result)
