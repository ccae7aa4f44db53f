"""Spawn and run parsed command templates as child processes.

Processes are started directly (never through a shell) from the parsed
executable and argument vector.
"""

from __future__ import annotations

import codecs
import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .decode import decode
from .errors import LaunchError
from .parser import CommandLine, parse

LOGGER = logging.getLogger("shexec.process")

PIPED = "piped"
INHERIT = "inherit"

PathArg = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class ExitStatus:
    """How a child process finished."""

    success: bool
    code: int
    signal: Optional[str]

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitStatus":
        # POSIX reports death by signal N as -N.
        if returncode < 0:
            signum = -returncode
            try:
                name = signal.Signals(signum).name
            except ValueError:
                name = f"SIG{signum}"
            return cls(success=False, code=128 + signum, signal=name)
        return cls(success=returncode == 0, code=returncode, signal=None)


@dataclass(frozen=True)
class DecodedOutput:
    stdout: str
    stderr: str


@dataclass(frozen=True)
class PipedOutput(ExitStatus):
    """Exit status plus the captured (raw and decoded) output streams."""

    stdout: bytes
    stderr: bytes
    decoded: DecodedOutput


def create_process(
    stdio: str,
    template: Any,
    *substitutions: Any,
    strict: bool = False,
    cwd: Optional[PathArg] = None,
    env: Optional[Mapping[str, str]] = None,
) -> subprocess.Popen:
    """Parse ``template`` and start it with ``stdio`` set to piped or inherit."""
    command = parse(template, *substitutions, strict=strict)
    return launch(command, stdio, cwd=cwd, env=env)


def launch(
    command: CommandLine,
    stdio: str = PIPED,
    *,
    cwd: Optional[PathArg] = None,
    env: Optional[Mapping[str, str]] = None,
) -> subprocess.Popen:
    """Start an already parsed command."""
    if stdio not in (PIPED, INHERIT):
        raise ValueError(f"stdio must be {PIPED!r} or {INHERIT!r}, not {stdio!r}")
    stream = subprocess.PIPE if stdio == PIPED else None
    LOGGER.debug("spawning %s (%s stdio)", command.argv, stdio)
    try:
        process = subprocess.Popen(
            command.argv,
            stdin=stream,
            stdout=stream,
            stderr=stream,
            cwd=cwd,
            env=dict(env) if env is not None else None,
        )
    except OSError as exc:
        LOGGER.warning("failed to launch %s: %s", command.executable, exc)
        raise LaunchError(command.executable, str(exc)) from exc
    LOGGER.debug("spawned pid %s", process.pid)
    return process


def spawn(template: Any, *substitutions: Any, **options: Any) -> subprocess.Popen:
    """Start the command with piped stdio and return the live process."""
    return create_process(PIPED, template, *substitutions, **options)


def spawn_inherit(template: Any, *substitutions: Any, **options: Any) -> subprocess.Popen:
    """Start the command sharing this process's stdio and return it."""
    return create_process(INHERIT, template, *substitutions, **options)


def wait_status(process: subprocess.Popen, timeout: Optional[float] = None) -> ExitStatus:
    returncode = process.wait(timeout=timeout)
    LOGGER.debug("pid %s exited with %s", process.pid, returncode)
    return ExitStatus.from_returncode(returncode)


def run(
    template: Any,
    *substitutions: Any,
    input: Optional[bytes] = None,
    timeout: Optional[float] = None,
    encoding: Optional[str] = None,
    **options: Any,
) -> PipedOutput:
    """Run the command to completion with piped stdio and capture its output.

    Standard input receives ``input`` (if any) and is then closed.
    """
    if encoding:
        codecs.lookup(encoding)
    process = create_process(PIPED, template, *substitutions, **options)
    return collect_output(process, input=input, timeout=timeout, encoding=encoding)


def collect_output(
    process: subprocess.Popen,
    *,
    input: Optional[bytes] = None,
    timeout: Optional[float] = None,
    encoding: Optional[str] = None,
) -> PipedOutput:
    """Wait for a piped process and gather its exit status and output."""
    try:
        stdout, stderr = process.communicate(input=input, timeout=timeout)
    except subprocess.TimeoutExpired:
        process.kill()
        process.communicate()
        raise
    status = ExitStatus.from_returncode(process.returncode)
    LOGGER.debug("pid %s exited with %s", process.pid, process.returncode)
    stdout = stdout or b""
    stderr = stderr or b""
    return PipedOutput(
        success=status.success,
        code=status.code,
        signal=status.signal,
        stdout=stdout,
        stderr=stderr,
        decoded=DecodedOutput(
            stdout=decode(stdout, encoding=encoding),
            stderr=decode(stderr, encoding=encoding),
        ),
    )


def run_inherit(
    template: Any,
    *substitutions: Any,
    timeout: Optional[float] = None,
    **options: Any,
) -> ExitStatus:
    """Run the command to completion sharing this process's stdio."""
    process = create_process(INHERIT, template, *substitutions, **options)
    try:
        return wait_status(process, timeout=timeout)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()
        raise


__all__ = [
    "DecodedOutput",
    "ExitStatus",
    "INHERIT",
    "PIPED",
    "PipedOutput",
    "collect_output",
    "create_process",
    "launch",
    "run",
    "run_inherit",
    "spawn",
    "spawn_inherit",
    "wait_status",
]
