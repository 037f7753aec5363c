"""Formatted output into a new string.

:func:`sprintf` walks a format string and replaces each conversion
specification with its converted argument. Integer arguments are wrapped to
the width of the C type their length modifier names. The result is returned
as a string. A ``%n`` conversion stores the number of characters written so
far into a :class:`Count`.
"""

from __future__ import annotations

import math
import numbers
import operator
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List

from .printf_float import format_fixed, format_g, format_scientific
from .printf_spec import (
    FormatSpec,
    Specifier,
    digits,
    format_whole,
    num_length,
    parse_spec,
)
from .text import strcpy

_MISSING = object()
_IS_LINUX = sys.platform.startswith("linux")


@dataclass
class Count:
    """Receives the number of characters written so far by a ``%n`` conversion."""

    value: int = 0


def _next_arg(args: Iterator[object]) -> object:
    value = next(args, _MISSING)
    if value is _MISSING:
        raise TypeError("not enough arguments for format string")
    return value


def _wrap(value: object, bits: int, signed: bool) -> int:
    number = operator.index(value)
    number &= (1 << bits) - 1
    if signed and number >> (bits - 1):
        number -= 1 << bits
    return number


def _field(body: str, body_len: int, spec: FormatSpec) -> str:
    leading, trailing = spec.compute_padding(body_len)
    return leading + spec.prefix() + body + trailing


def _as_char(arg: object, wide: bool) -> str:
    if isinstance(arg, str):
        if len(arg) != 1:
            raise ValueError(f"%c expects a single character, got {arg!r}")
        return arg
    if isinstance(arg, numbers.Integral):
        code = int(arg)
        return chr(code) if wide else chr(code & 0xFF)
    raise TypeError(f"%c expects a character or an integer, got {type(arg).__name__}")


def _format_char(arg: object, spec: FormatSpec) -> str:
    if spec.length_l:
        ch = _as_char(arg, wide=True)
        return _field(ch, len(ch.encode("utf-8")), spec)
    return _field(_as_char(arg, wide=False), 1, spec)


def _format_string(arg: object, spec: FormatSpec) -> str:
    if arg is None:
        if spec.length_l:
            raise TypeError("%ls expects a string, got None")
        shown = "(null)"[: spec.precision] if spec.precision_set else "(null)"
        return _field(shown, spec.precision, spec)
    if not isinstance(arg, str):
        raise TypeError(f"%s expects a string, got {type(arg).__name__}")
    text = strcpy(arg)
    size = len(text.encode("utf-8")) if spec.length_l else len(text)
    return _field(text, size, spec)


def _format_int(arg: object, spec: FormatSpec) -> str:
    if spec.length_h:
        value = _wrap(_wrap(arg, 32, True), 16, True)
    elif spec.length_l:
        value = _wrap(arg, 64, True)
    else:
        value = _wrap(arg, 32, True)
    spec.is_negative = value < 0
    return format_whole(value, spec)


def _format_unsigned(arg: object, spec: FormatSpec) -> str:
    if spec.length_h:
        value = _wrap(_wrap(arg, 32, False), 16, False)
    elif spec.length_l:
        value = _wrap(arg, 64, False)
    else:
        value = _wrap(arg, 32, False)
    spec.is_zero = value == 0
    return format_whole(value, spec)


def _format_float(arg: object, spec: FormatSpec) -> str:
    if not isinstance(arg, numbers.Real):
        raise TypeError(f"%{spec.specifier.value} expects a number, got {type(arg).__name__}")
    value = float(arg)
    if math.isnan(value) or math.isinf(value):
        spec.is_floating = False
        spec.is_zero = False
        if math.isnan(value):
            spec.is_negative = _IS_LINUX and math.copysign(1.0, value) < 0
            word = "nan"
        else:
            spec.is_negative = value < 0
            word = "inf"
        if spec.specifier in (Specifier.GENERAL_UPPER, Specifier.EXP_UPPER):
            word = word.upper()
        return _field(word, len(word), spec)
    if spec.is_scientific:
        return format_scientific(value, spec)
    if spec.is_g:
        return format_g(value, spec)
    return format_fixed(value, spec)


def _format_pointer(arg: object, spec: FormatSpec) -> str:
    if arg is None:
        address = 0
    elif isinstance(arg, numbers.Integral):
        address = _wrap(arg, 64, False)
    else:
        address = id(arg)
    if address == 0 and _IS_LINUX:
        return _field("(nil)", len("(nil)"), spec)
    num_len = num_length(address, spec.base)
    leading, trailing = spec.compute_padding(num_len)
    zeros = "0" * max(spec.precision - num_len, 0) if spec.precision_set else ""
    return leading + spec.prefix() + "0x" + zeros + digits(address, 16) + trailing


_CONVERTERS: Dict[Specifier, Callable[[object, FormatSpec], str]] = {
    Specifier.CHAR: _format_char,
    Specifier.STRING: _format_string,
    Specifier.DECIMAL: _format_int,
    Specifier.INTEGER: _format_int,
    Specifier.UNSIGNED: _format_unsigned,
    Specifier.OCTAL: _format_unsigned,
    Specifier.HEX: _format_unsigned,
    Specifier.HEX_UPPER: _format_unsigned,
    Specifier.FIXED: _format_float,
    Specifier.EXP: _format_float,
    Specifier.EXP_UPPER: _format_float,
    Specifier.GENERAL: _format_float,
    Specifier.GENERAL_UPPER: _format_float,
    Specifier.POINTER: _format_pointer,
}


def sprintf(fmt: str, *args: object) -> str:
    """Return ``fmt`` with its conversion specifications replaced by ``args``.

    Unknown conversion characters produce no output. Raises ``TypeError``
    when arguments run out or have the wrong type; extra arguments are
    ignored.
    """
    template = strcpy(fmt)
    remaining = iter(args)
    pieces: List[str] = []
    written = 0
    pos = 0
    end = len(template)
    while pos < end:
        start = template.find("%", pos)
        if start < 0:
            pieces.append(template[pos:])
            break
        literal = template[pos:start]
        pieces.append(literal)
        written += len(literal)
        spec, pos = parse_spec(template, start + 1, remaining)
        if spec.specifier is Specifier.COUNT:
            target = _next_arg(remaining)
            if not isinstance(target, Count):
                raise TypeError(f"%n expects a Count, got {type(target).__name__}")
            target.value = written
            continue
        if spec.specifier is Specifier.PERCENT:
            piece = "%"
        elif spec.specifier is Specifier.NOT_SET:
            piece = ""
        else:
            piece = _CONVERTERS[spec.specifier](_next_arg(remaining), spec)
        pieces.append(piece)
        written += len(piece)
    return "".join(pieces)