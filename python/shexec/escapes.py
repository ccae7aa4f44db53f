"""Backslash escape decoding for command templates.

The decoder is handed the position of the character that follows a
backslash and reports the decoded character together with how many source
characters (not counting the backslash) the escape spans.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

SIMPLE_ESCAPES: Dict[str, str] = {
    "n": "\n",
    "b": "\b",
    "f": "\f",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "'": "'",
    '"': '"',
    "`": "`",
    "\\": "\\",
}

HEX_RE = re.compile(r"[0-9a-f]{2}", re.IGNORECASE)
UNICODE_RE = re.compile(r"[0-9a-f]{4}", re.IGNORECASE)
EXTENDED_UNICODE_RE = re.compile(r"\{([0-9a-f]{1,5})\}", re.IGNORECASE)

_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)


@dataclass(frozen=True)
class Escape:
    """A decoded escape: the resulting character and the source span consumed."""

    char: str
    size: int


def decode_escape(text: str, position: int) -> Optional[Escape]:
    """Decode the escape whose body starts at ``text[position]``.

    Returns ``None`` when the body is not a recognised escape.
    """
    if position >= len(text):
        return None
    kind = text[position]
    simple = SIMPLE_ESCAPES.get(kind)
    if simple is not None:
        return Escape(simple, 1)
    body = position + 1
    if kind == "x":
        match = HEX_RE.match(text, body)
        if not match:
            return None
        return Escape(chr(int(match.group(0), 16)), 3)
    if kind == "u":
        match = EXTENDED_UNICODE_RE.match(text, body)
        if match:
            digits = match.group(1)
            return Escape(chr(int(digits, 16)), len(digits) + 3)
        match = UNICODE_RE.match(text, body)
        if match:
            code = int(match.group(0), 16)
            if code in _HIGH_SURROGATES:
                low = _low_surrogate_after(text, match.end())
                if low is not None:
                    combined = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                    return Escape(chr(combined), 11)
            return Escape(chr(code), 5)
    return None


def _low_surrogate_after(text: str, index: int) -> Optional[int]:
    # Only "\uXXXX" spelled directly after a high surrogate forms a pair.
    if text[index : index + 2] != "\\u":
        return None
    match = UNICODE_RE.match(text, index + 2)
    if not match:
        return None
    code = int(match.group(0), 16)
    return code if code in _LOW_SURROGATES else None


__all__ = ["Escape", "SIMPLE_ESCAPES", "decode_escape"]
