"""Decoding of captured child-process output."""

from __future__ import annotations

import os
import sys
from typing import Optional

UNIX_ENCODING = "utf-8"
WINDOWS_ENCODING = "cp850"


def default_encoding(platform: Optional[str] = None) -> str:
    """Pick the console encoding for ``platform`` (defaults to the running one).

    ``SHEXEC_ENCODING`` overrides the platform choice.
    """
    override = os.environ.get("SHEXEC_ENCODING")
    if override:
        return override
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WINDOWS_ENCODING
    return UNIX_ENCODING


def decode(data: Optional[bytes], *, platform: Optional[str] = None, encoding: Optional[str] = None) -> str:
    """Decode ``data`` to text, replacing undecodable bytes."""
    if not data:
        return ""
    return bytes(data).decode(encoding or default_encoding(platform), errors="replace")


__all__ = ["UNIX_ENCODING", "WINDOWS_ENCODING", "decode", "default_encoding"]
