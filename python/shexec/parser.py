"""Command template parsing.

A template is a list of raw literal runs with substitution values sitting
between consecutive runs::

    parse(["cp ", " ", ""], "a.txt", "b.txt")   # cp a.txt b.txt
    parse('echo "hello world"')                 # one run, no substitutions
    parse(rt'echo "Hello, {name}!"')            # PEP 750 template string

Rules:

* arguments split on unquoted whitespace, double quotes group text and always
  end the argument being built (``foo"bar"`` is two arguments);
* backslash escapes follow JavaScript string escapes (``\\n``, ``\\x41``,
  ``\\u00e9``, ``\\u{1F600}`` ...); an escaped whitespace still separates
  arguments unless it is quoted;
* scalar substitutions join the argument they touch, list/tuple
  substitutions expand to one argument per element and must stand alone.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence, Tuple

from .errors import DanglingEscape, MissingExecutable, MissingSubstitution, UnterminatedQuote
from .scanner import Scanner
from .substitution import expand

LOGGER = logging.getLogger("shexec.parser")


@dataclass(frozen=True)
class CommandLine:
    """Parsed command: program name plus its argument vector."""

    executable: str
    arguments: Tuple[str, ...]

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.arguments]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["arguments"] = list(self.arguments)
        return data


def split_template(template: Any, substitutions: Sequence[Any]) -> Tuple[List[str], List[Any]]:
    """Normalise the accepted template shapes into ``(runs, substitutions)``."""
    strings = getattr(template, "strings", None)
    interpolations = getattr(template, "interpolations", None)
    if strings is not None and interpolations is not None:
        if substitutions:
            raise TypeError("template strings carry their own substitutions")
        return list(strings), [item.value for item in interpolations]
    if isinstance(template, str):
        return [template], list(substitutions)
    if isinstance(template, (list, tuple)):
        runs = list(template)
        for run in runs:
            if not isinstance(run, str):
                raise TypeError(f"template runs must be str, not {type(run).__name__}")
        return runs, list(substitutions)
    raise TypeError(f"unsupported template type {type(template).__name__}")


def parse(template: Any, *substitutions: Any, strict: bool = False) -> CommandLine:
    """Split a command template into an executable and its arguments.

    With ``strict`` set, templates that end inside a quote or right after a
    backslash, or that leave a substitution slot empty before more text, are
    rejected instead of being accepted leniently.
    """
    runs, pending = split_template(template, substitutions)
    scanner = Scanner()
    for run_index, run in enumerate(runs):
        scanner.feed(run, run_index)
        if run_index >= len(pending) or pending[run_index] is None:
            if strict and any(runs[run_index + 1 :]):
                raise MissingSubstitution(run_index)
            break
        expand(scanner, pending[run_index], run_index)

    if strict:
        if scanner.state.quoted:
            raise UnterminatedQuote()
        if scanner.state.escaped:
            raise DanglingEscape()

    scanner.flush()
    if not scanner.arguments:
        raise MissingExecutable()
    executable, *arguments = scanner.arguments
    LOGGER.debug("parsed %r with %d argument(s)", executable, len(arguments))
    return CommandLine(executable=executable, arguments=tuple(arguments))


__all__ = ["CommandLine", "parse", "split_template"]
