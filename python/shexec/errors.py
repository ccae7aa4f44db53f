"""Exception types raised by shexec."""

from __future__ import annotations

from typing import Optional


class ShexecError(Exception):
    """Base class for every error raised by shexec."""


class ParseError(ShexecError, ValueError):
    """Raised when a command template cannot be turned into a command line."""


class InvalidEscapeSequence(ParseError):
    """A backslash is followed by an unknown or malformed escape body."""

    def __init__(self, run_index: int, offset: int, text: str) -> None:
        self.run_index = run_index
        self.offset = offset
        self.text = text
        super().__init__(
            f"invalid escape sequence at section {run_index + 1}, character {offset + 1}: \\{excerpt(text)}"
        )


class IllegalArraySubstitution(ParseError):
    """A sequence substitution touches other argument content."""

    def __init__(self, run_index: int) -> None:
        self.run_index = run_index
        super().__init__("array substitution cannot be combined with other argument content")


class MissingExecutable(ParseError):
    """The template produced no arguments at all."""

    def __init__(self) -> None:
        super().__init__("no executable provided")


class MissingSubstitution(ParseError):
    """A substitution slot is absent while template text remains (strict mode)."""

    def __init__(self, run_index: int) -> None:
        self.run_index = run_index
        super().__init__(f"substitution {run_index + 1} is missing but template text follows it")


class UnterminatedQuote(ParseError):
    """The template ended inside a double-quoted section (strict mode)."""

    def __init__(self) -> None:
        super().__init__("unterminated double quote")


class DanglingEscape(ParseError):
    """The template ended right after a backslash (strict mode)."""

    def __init__(self) -> None:
        super().__init__("template ends with an unfinished escape")


class LaunchError(ShexecError, RuntimeError):
    """Raised when the operating system refuses to start the child process."""

    def __init__(self, executable: str, reason: Optional[str] = None) -> None:
        self.executable = executable
        message = f"failed to launch {executable!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


def excerpt(text: str, limit: int = 24) -> str:
    """Collapse ``text`` to one line, cut to ``limit`` characters."""
    line = text.replace("\n", " ").strip()
    if len(line) > limit:
        return line[:limit] + "..."
    return line


__all__ = [
    "ShexecError",
    "ParseError",
    "InvalidEscapeSequence",
    "IllegalArraySubstitution",
    "MissingExecutable",
    "MissingSubstitution",
    "UnterminatedQuote",
    "DanglingEscape",
    "LaunchError",
    "excerpt",
]
