"""Character scanner that splits literal template runs into arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .errors import InvalidEscapeSequence
from .escapes import decode_escape

BACKSLASH = "\\"
QUOTE = '"'

# Separator characters: the ECMAScript WhiteSpace and LineTerminator sets.
WHITESPACE = frozenset(
    "\t\n\v\f\r \xa0\u1680\u2028\u2029\u202f\u205f\u3000\ufeff"
    + "".join(chr(code) for code in range(0x2000, 0x200B))
)


@dataclass
class ScanState:
    """Quote/escape flags carried across literal runs of one template."""

    quoted: bool = False
    escaped: bool = False


@dataclass
class Scanner:
    """Accumulates completed arguments plus the argument being built.

    A scanner lives for exactly one parse; literal runs are fed in order with
    :meth:`feed` and substitutions are merged between runs by the caller.
    """

    state: ScanState = field(default_factory=ScanState)
    arguments: List[str] = field(default_factory=list)
    buffer: str = ""

    def feed(self, run: str, run_index: int) -> None:
        state = self.state
        index = 0
        length = len(run)
        while index < length:
            char = run[index]
            if not state.escaped and char == BACKSLASH:
                state.escaped = True
                index += 1
                continue
            if not state.escaped and char == QUOTE:
                state.quoted = not state.quoted
                if self.buffer:
                    self.flush()
                elif not state.quoted:
                    # "" closes an empty pair: that is an explicit empty argument.
                    self.arguments.append("")
                index += 1
                continue
            step = 1
            if state.escaped:
                escape = decode_escape(run, index)
                if escape is None:
                    raise InvalidEscapeSequence(run_index, index, run[index:])
                char = escape.char
                step = escape.size
            if char in WHITESPACE and not state.quoted:
                self.flush()
            else:
                self.buffer += char
            state.escaped = False
            index += step

    def append(self, text: str) -> None:
        self.buffer += text

    def extend(self, values: List[str]) -> None:
        self.arguments.extend(values)

    def flush(self) -> None:
        if self.buffer:
            self.arguments.append(self.buffer)
            self.buffer = ""

    @property
    def standalone(self) -> bool:
        """True when nothing is pending in the buffer and no quote is open."""
        return not self.buffer and not self.state.quoted


__all__ = ["ScanState", "Scanner"]
