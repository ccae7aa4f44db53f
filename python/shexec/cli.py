"""shexec CLI entry point."""

from __future__ import annotations

import argparse
import codecs
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from .context import MODE_INHERIT, MODE_PARSE, MODE_RUN, CliContext
from .errors import InvalidEscapeSequence, ParseError, ShexecError
from .output import emit_error, emit_result, error_details, format_parse_error, render_command
from .parser import parse
from .process import INHERIT, PIPED, collect_output, launch, wait_status

LOG = logging.getLogger("shexec.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _encoding_name(value: str) -> str:
    try:
        codecs.lookup(value)
    except LookupError as exc:
        raise argparse.ArgumentTypeError(f"unknown encoding: {value}") from exc
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shexec",
        description="Parse a shell-like command template and optionally run it",
    )
    parser.add_argument("template", nargs="?", help="Command template (quote it for your shell)")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--run", action="store_true", help="Run the command and print its captured output")
    mode.add_argument("--inherit", action="store_true", help="Run the command with inherited stdio")
    parser.add_argument("--strict", action="store_true", help="Reject unterminated quotes and dangling escapes")
    parser.add_argument(
        "--script",
        type=Path,
        help="Read one template per line from a file ('#' starts a comment line)",
    )
    parser.add_argument("--timeout", type=float, help="Seconds to wait for the command when running it")
    parser.add_argument(
        "--encoding",
        type=_encoding_name,
        default=os.environ.get("SHEXEC_ENCODING") or None,
        help="Encoding used to decode captured output (default: platform)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("SHEXEC_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    if args.template is None and args.script is None:
        parser.error("a template or --script is required")
    mode = MODE_RUN if args.run else MODE_INHERIT if args.inherit else MODE_PARSE
    ctx = CliContext(
        json_output=args.json,
        strict=args.strict,
        mode=mode,
        encoding=args.encoding,
        timeout=args.timeout,
    )
    if args.script is not None:
        return _run_script(ctx, str(args.script))
    try:
        return run_template(ctx, args.template)
    except KeyboardInterrupt:
        print()
        return 130


def _run_script(ctx: CliContext, path: str) -> int:
    try:
        lines = Path(path).expanduser().read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        emit_error(ctx, message=f"cannot read script {path}: {exc}")
        return 1
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        LOG.debug("script line %d: %s", lineno, line)
        rc = run_template(ctx, line)
        if rc != 0:
            LOG.info("script stopped at line %d (rc=%d)", lineno, rc)
            return rc
    return 0


def run_template(ctx: CliContext, template: str) -> int:
    """Parse ``template`` and parse/run it according to ``ctx.mode``."""
    try:
        command = parse(template, strict=ctx.strict)
    except ParseError as exc:
        message = str(exc)
        if isinstance(exc, InvalidEscapeSequence) and not ctx.json_output:
            message = format_parse_error(exc)
        emit_error(ctx, message=message, data=error_details(exc))
        return 1

    if not ctx.executes:
        result = command.to_dict()
        emit_result(ctx, message=render_command(result), data=result)
        return 0

    try:
        if ctx.mode == MODE_RUN:
            output = collect_output(launch(command, PIPED), timeout=ctx.timeout, encoding=ctx.encoding)
            data = {
                "command": command.to_dict(),
                "success": output.success,
                "code": output.code,
                "signal": output.signal,
                "stdout": output.decoded.stdout,
                "stderr": output.decoded.stderr,
            }
            if ctx.json_output:
                emit_result(ctx, message="", data=data)
            else:
                sys.stdout.write(output.decoded.stdout)
                sys.stderr.write(output.decoded.stderr)
            return output.code
        process = launch(command, INHERIT)
        try:
            status = wait_status(process, timeout=ctx.timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
            raise
    except subprocess.TimeoutExpired as exc:
        emit_error(ctx, message=f"command timed out after {exc.timeout} seconds")
        return 1
    except ShexecError as exc:
        emit_error(ctx, message=str(exc), data=error_details(exc))
        return 1
    if ctx.json_output:
        emit_result(
            ctx,
            message="",
            data={"command": command.to_dict(), "success": status.success, "code": status.code, "signal": status.signal},
        )
    return status.code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
