"""Output helpers for the shexec CLI."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from .context import CliContext
from .errors import (
    IllegalArraySubstitution,
    InvalidEscapeSequence,
    MissingSubstitution,
    ShexecError,
    excerpt,
)


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_result(ctx: CliContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a successful command result."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "ok"}
        if data is not None:
            payload["result"] = data
        else:
            payload["message"] = message
        print(_json_dump(payload))
    else:
        print(message)


def emit_error(ctx: CliContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit an error message respecting JSON mode."""
    payload: Dict[str, Any] = {"status": "error", "error": message}
    if data:
        payload["details"] = dict(data)
    if ctx.json_output:
        print(_json_dump(payload))
    else:
        print(f"error: {message}")


def error_details(exc: ShexecError) -> Dict[str, Any]:
    """Structured fields of ``exc`` suitable for JSON output."""
    details: Dict[str, Any] = {"type": type(exc).__name__}
    if isinstance(exc, InvalidEscapeSequence):
        details.update(section=exc.run_index + 1, character=exc.offset + 1, text=exc.text)
    elif isinstance(exc, (IllegalArraySubstitution, MissingSubstitution)):
        details["section"] = exc.run_index + 1
    executable = getattr(exc, "executable", None)
    if executable is not None:
        details["executable"] = executable
    return details


def format_parse_error(exc: InvalidEscapeSequence, *, width: int = 40) -> str:
    """Render an escape error with a one-line snippet of the offending text."""
    return (
        f"Invalid escape sequence at section {exc.run_index + 1}, character {exc.offset + 1}:\n"
        f"> \\{excerpt(exc.text, width)}"
    )


def render_command(result: Mapping[str, Any]) -> str:
    """Plain-text listing of a parsed command line."""
    lines = [f"executable: {result['executable']!r}"]
    arguments = result.get("arguments") or []
    if not arguments:
        lines.append("arguments: (none)")
    else:
        lines.append("arguments:")
        for idx, argument in enumerate(arguments):
            lines.append(f"  [{idx}] {argument!r}")
    return "\n".join(lines)


__all__ = [
    "emit_error",
    "emit_result",
    "error_details",
    "format_parse_error",
    "render_command",
]
