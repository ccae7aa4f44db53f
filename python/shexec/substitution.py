"""Merging of interpolated values into the scanner output."""

from __future__ import annotations

import math
import os
from decimal import Decimal
from typing import List, Sequence, Union

from .errors import IllegalArraySubstitution
from .scanner import Scanner

Scalar = Union[str, int, float, "os.PathLike[str]"]
Substitution = Union[Scalar, Sequence[Scalar]]


def stringify(value: object) -> str:
    """Render a scalar substitution as argument text."""
    if isinstance(value, str):
        return value
    # bool is an int subclass but "True" is never a meaningful argument.
    if isinstance(value, bool):
        raise TypeError("bool is not a valid substitution value")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, os.PathLike):
        path = os.fspath(value)
        if isinstance(path, str):
            return path
    raise TypeError(f"unsupported substitution value of type {type(value).__name__}")


def format_float(value: float) -> str:
    """Shortest round-trip text for ``value``, laid out like JavaScript numbers.

    Magnitudes in [1e-6, 1e21) are written in positional notation, others as
    ``<digits>e<sign><exponent>``. NaN and infinities are rejected.
    """
    if not math.isfinite(value):
        raise TypeError(f"non-finite float {value!r} is not a valid substitution value")
    if value == 0:
        return "0"
    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        if "e" in text:
            text = format(Decimal(text), "f")
        if text.endswith(".0"):
            text = text[:-2]
        return text
    mantissa, _, exponent = text.partition("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    power = int(exponent)
    sign = "+" if power >= 0 else "-"
    return f"{mantissa}e{sign}{abs(power)}"


def is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def expand(scanner: Scanner, value: Substitution, run_index: int) -> None:
    """Merge ``value`` into ``scanner``.

    Sequences become standalone arguments and require an empty buffer with
    no open quote; scalars are concatenated onto the current buffer.
    """
    if is_sequence(value):
        if not scanner.standalone:
            raise IllegalArraySubstitution(run_index)
        items: List[str] = []
        for element in value:  # type: ignore[union-attr]
            if is_sequence(element):
                raise TypeError("nested sequences are not valid substitution values")
            items.append(stringify(element))
        scanner.extend(items)
        return
    scanner.append(stringify(value))


__all__ = ["Scalar", "Substitution", "expand", "format_float", "is_sequence", "stringify"]
