"""Formatted input from a string.

:func:`sscanf` walks a format string and takes one field from the input for
each conversion specification. White space in the format skips any run of
white space in the input; any other ordinary character must match the input
exactly. A mismatch stops the scan.

The converted values come back in a :class:`ScanResult`, in the order of
their conversions. Every conversion that is not suppressed with ``*``
contributes one entry, and so does ``%n``. An entry is None when the field
gave nothing to store.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .scan_spec import (
    Length,
    ScanSpec,
    Source,
    parse_scan_spec,
    read_decimal,
    read_float,
    read_hex,
    read_octal,
    read_pointer,
    read_string,
)
from .text import strcpy

_SPACES = "\t\n\v\f\r "


@dataclass
class ScanResult:
    """Outcome of a scan.

    ``count`` is the number of fields converted and stored, or -1 when the
    input ran out before the first conversion. ``values`` holds the stored
    values in format order.
    """

    count: int = 0
    values: List[object] = field(default_factory=list)

    def __iter__(self) -> Iterator[object]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> object:
        return self.values[index]


def _is_space(ch: str) -> bool:
    return len(ch) == 1 and ch in _SPACES


def _wrap(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def _to_single(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class _Scanner:
    """State of one scan: input cursor, format position and results."""

    def __init__(self, text: str, fmt: str) -> None:
        self.source = Source(text)
        self.fmt = fmt
        self.pos = 0
        self.result = ScanResult()

    # format inspection -------------------------------------------------

    def _fmt_startswith(self, *prefixes: str) -> bool:
        return any(self.fmt.startswith(prefix, self.pos) for prefix in prefixes)

    def _count_follows(self) -> bool:
        return self._fmt_startswith("%n")

    def _char_follows(self) -> bool:
        return self._fmt_startswith("%c", "%lc", "%*c")

    def _fmt_space(self) -> bool:
        return self.pos < len(self.fmt) and _is_space(self.fmt[self.pos])

    # driver ------------------------------------------------------------

    def run(self) -> ScanResult:
        self._leading_space_and_counts()
        while self.pos < len(self.fmt) and not self.source.failed:
            if self._fmt_space():
                self.source.skip_space()
                self.pos += 1
            elif self.fmt[self.pos] == "%":
                self._specification()
            else:
                self._literal()
        return self.result

    def _leading_space_and_counts(self) -> None:
        while self._count_follows() or self._fmt_space():
            if self._fmt_space():
                self.source.skip_space()
                self.pos += 1
            else:
                self.result.values.append(self.source.pos)
                self.pos += 2

    def _literal(self) -> None:
        if self.fmt[self.pos] != self.source.peek():
            self.source.failed = True
        else:
            self.pos += 1
            self.source.advance()

    def _specification(self) -> None:
        source = self.source
        if not self._count_follows() and source.at_end:
            if self.result.count == 0:
                self.result.count = -1
            source.failed = True
        elif _is_space(source.peek()) and not self._char_follows():
            source.skip_space()
        else:
            spec, self.pos = parse_scan_spec(self.fmt, self.pos + 1)
            self.result.count += self._convert(spec)

    # conversions -------------------------------------------------------

    def _store(self, spec: ScanSpec, value: object) -> None:
        if not spec.suppress:
            self.result.values.append(value)

    def _convert(self, spec: ScanSpec) -> int:
        conversion = spec.conversion
        if conversion == "c":
            return self._char(spec)
        if conversion == "n":
            self.result.values.append(self.source.pos)
            return 0
        if conversion == "s":
            return self._string(spec)
        if conversion == "p":
            return self._pointer(spec)
        if conversion in ("d", "i"):
            return self._signed(spec)
        if conversion in ("x", "X", "o", "u"):
            return self._unsigned(spec)
        if conversion in ("g", "G", "e", "E", "f"):
            return self._float(spec)
        if conversion == "%":
            if self.source.peek() == "%":
                self.source.advance()
            else:
                self.source.failed = True
        return 0

    def _char(self, spec: ScanSpec) -> int:
        ch = self.source.peek()
        self.source.advance()
        if spec.suppress:
            return 0
        self.result.values.append(ch)
        return 1

    def _string(self, spec: ScanSpec) -> int:
        value = read_string(self.source, spec)
        if spec.suppress:
            return 0
        self.result.values.append(value if value is not None else "")
        return int(value is not None)

    def _pointer(self, spec: ScanSpec) -> int:
        value = read_pointer(self.source, spec)
        self._store(spec, value)
        return 0 if spec.suppress else int(value is not None)

    def _signed(self, spec: ScanSpec) -> int:
        source = self.source
        if source.peek() == "-":
            spec.is_negative = True
            source.advance()
        if spec.conversion == "i" and (
            source.startswith("0x") or source.startswith("0X")
        ):
            value = read_hex(source, spec)
        elif spec.conversion == "i" and source.startswith("0"):
            value = read_octal(source, spec)
        else:
            value = read_decimal(source, spec)
        sign = -1 if spec.is_negative else 1
        raw = value if value is not None else 0
        if spec.length is Length.SHORT:
            stored = _wrap(sign * _wrap(raw, 16, True), 16, True)
        elif spec.length is Length.LONG:
            stored = _wrap(sign * _wrap(raw, 64, True), 64, True)
        else:
            stored = _wrap(sign * _wrap(raw, 32, True), 32, True)
        self._store(spec, stored)
        return 0 if spec.suppress else int(value is not None)

    def _unsigned(self, spec: ScanSpec) -> int:
        if spec.conversion == "o":
            value = read_octal(self.source, spec)
        elif spec.is_hexadecimal:
            value = read_hex(self.source, spec)
        else:
            value = read_decimal(self.source, spec)
        raw = value if value is not None else 0
        if spec.length is Length.SHORT:
            stored = _wrap(raw, 16, False)
        elif spec.length is Length.LONG:
            stored = _wrap(raw, 64, False)
        else:
            stored = _wrap(raw, 32, False)
        self._store(spec, stored)
        return 0 if spec.suppress else int(value is not None)

    def _float(self, spec: ScanSpec) -> int:
        value = read_float(self.source, spec)
        if value is not None and not math.isfinite(value):
            self._store(spec, value)
            return 0 if spec.suppress else 1
        raw = value if value is not None else 0.0
        if spec.length in (Length.LONG, Length.LONG_DOUBLE):
            stored = raw
        else:
            stored = _to_single(raw)
        self._store(spec, stored)
        return 0 if spec.suppress else int(value is not None)


def sscanf(text: str, fmt: str) -> ScanResult:
    """Scan ``text`` according to ``fmt`` and return the converted fields.

    Both strings end at their first NUL. Raises ``TypeError`` when either is
    None.
    """
    return _Scanner(strcpy(text), strcpy(fmt)).run()


__all__ = ["ScanResult", "sscanf"]