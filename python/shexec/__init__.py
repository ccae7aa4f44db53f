"""
shexec - run shell-like command templates without a shell.

A template is split into an executable and an argument vector by a small
quote/escape aware scanner, then (optionally) started as a child process.
Each module has one job:

    escapes.py       → backslash escape decoding
    scanner.py       → quote/whitespace splitting of literal runs
    substitution.py  → merging interpolated values into arguments
    parser.py        → template normalisation and the ``parse`` entry point
    process.py       → spawning/running parsed commands
    decode.py        → decoding captured output bytes
    cli.py           → ``shexec`` command-line front end
"""

from __future__ import annotations

from .decode import decode  # noqa: F401
from .errors import (  # noqa: F401
    DanglingEscape,
    IllegalArraySubstitution,
    InvalidEscapeSequence,
    LaunchError,
    MissingExecutable,
    MissingSubstitution,
    ParseError,
    ShexecError,
    UnterminatedQuote,
)
from .parser import CommandLine, parse  # noqa: F401
from .process import (  # noqa: F401
    DecodedOutput,
    ExitStatus,
    PipedOutput,
    run,
    run_inherit,
    spawn,
    spawn_inherit,
    wait_status,
)

__all__ = [
    "CommandLine",
    "DanglingEscape",
    "DecodedOutput",
    "ExitStatus",
    "IllegalArraySubstitution",
    "InvalidEscapeSequence",
    "LaunchError",
    "MissingExecutable",
    "MissingSubstitution",
    "ParseError",
    "PipedOutput",
    "ShexecError",
    "UnterminatedQuote",
    "decode",
    "parse",
    "run",
    "run_inherit",
    "spawn",
    "spawn_inherit",
    "wait_status",
]
__version__ = "0.1.0"
