"""Tests for shexec output decoding."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(REPO_ROOT / "python"))

from shexec.decode import UNIX_ENCODING, WINDOWS_ENCODING, decode, default_encoding


@pytest.fixture(autouse=True)
def _no_override(monkeypatch):
    monkeypatch.delenv("SHEXEC_ENCODING", raising=False)


def test_platform_encodings():
    assert default_encoding("linux") == UNIX_ENCODING
    assert default_encoding("darwin") == UNIX_ENCODING
    assert default_encoding("win32") == WINDOWS_ENCODING


def test_windows_console_bytes_decode():
    data = "òéà".encode("cp850")
    assert decode(data, platform="win32") == "òéà"


def test_invalid_utf8_is_replaced():
    assert decode(b"ok\xff", platform="linux") == "ok�"


def test_empty_output():
    assert decode(b"") == ""
    assert decode(None) == ""


def test_explicit_encoding_wins():
    assert decode("é".encode("latin-1"), platform="linux", encoding="latin-1") == "é"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("SHEXEC_ENCODING", "latin-1")
    assert default_encoding("linux") == "latin-1"
    assert decode(b"\xe9") == "é"
