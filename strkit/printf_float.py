"""Floating-point conversions: fixed (``%f``), scientific (``%e``) and general (``%g``).

Values are handled as Python floats. Fraction digits are rounded half away
from zero. Whole-number rounding steps use round-half-to-even
(:func:`bank_round`). The public ``format_*`` functions never modify the
spec they are given; they work on a copy.
"""

from __future__ import annotations

import copy
import math
from typing import Tuple, Union

from .printf_spec import FormatSpec, digits, format_whole, num_length

Number = Union[int, float]

DEFAULT_PRECISION = 6
_MANTISSA_DIGITS = 5
# Values closer to zero than this are printed as zero.
_EPSILON = 100 * 2.0**-63


def _require_finite(x: Number, what: str) -> None:
    if not math.isfinite(x):
        raise ValueError(f"{what}: value must be finite, got {x!r}")


def _require_non_negative(x: Number, what: str) -> None:
    _require_finite(x, what)
    if x < 0:
        raise ValueError(f"{what}: value must not be negative, got {x!r}")


def _require_count(n: int, what: str) -> None:
    if n < 0:
        raise ValueError(f"{what}: digit count must not be negative, got {n}")


def _round_half_away(x: float) -> float:
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(float(whole), x)


def _times_ten(x: float, n: int) -> float:
    for _ in range(n):
        x *= 10.0
    return x


def _divide_ten(x: float, n: int) -> float:
    for _ in range(n):
        x /= 10.0
    return x


def _normalise(x: Number) -> Tuple[float, int]:
    exponent = 0
    x = float(x)
    if x != 0:
        while x >= 10.0 or x < 1.0:
            if x >= 10.0:
                x /= 10.0
                exponent += 1
            else:
                x *= 10.0
                exponent -= 1
    return x, exponent


def bank_round(x: Number) -> float:
    """Round ``x`` to a whole number, sending exact halves to the even neighbour."""
    _require_finite(x, "bank_round")
    fraction, whole = math.modf(x)
    if math.fmod(whole, 2.0) == 0:
        up = fraction > 0.5
    else:
        up = fraction >= 0.5
    return float(math.ceil(x) if up else math.floor(x))


def calculate_exponent(x: Number) -> int:
    """Return the power of ten that brings ``x`` into ``[1, 10)``; zero gives 0."""
    _require_non_negative(x, "calculate_exponent")
    return _normalise(x)[1]


def scale_to_one_digit(x: Number) -> float:
    """Scale ``x`` by powers of ten into ``[1, 10)``; zero stays zero."""
    _require_non_negative(x, "scale_to_one_digit")
    return _normalise(x)[0]


def scale_to_n_digits(x: Number, n: int) -> float:
    """Scale ``x`` by powers of ten until its whole part has ``n`` digits.

    A count of zero is treated as one; zero stays zero.
    """
    _require_non_negative(x, "scale_to_n_digits")
    _require_count(n, "scale_to_n_digits")
    x = float(x)
    if x == 0:
        return x
    n = max(n, 1)
    length = num_length(x, 10)
    while length != n:
        x = x / 10.0 if length > n else x * 10.0
        length = num_length(x, 10)
    return x


def round_to_n_digits(x: Number, n: int) -> float:
    """Round the fraction of ``x`` to ``n`` decimal places, halves away from zero."""
    _require_finite(x, "round_to_n_digits")
    _require_count(n, "round_to_n_digits")
    fraction, whole = math.modf(x)
    fraction = _divide_ten(_round_half_away(_times_ten(fraction, n)), n)
    return whole + fraction


def _strip_zeros(text: str, keep_point: bool) -> str:
    stripped = text.rstrip("0")
    if stripped.endswith(".") and not keep_point:
        stripped = stripped[:-1]
    return stripped


def _exponent_part(exponent: int, spec: FormatSpec) -> str:
    sign = "-" if exponent < 0 else "+"
    magnitude = abs(exponent)
    pad = "0" if magnitude < 10 else ""
    return f"{spec.exponent_char}{sign}{pad}{digits(magnitude, spec.base)}"


def _prepare(value: Number, spec: FormatSpec, what: str) -> FormatSpec:
    _require_finite(value, what)
    work = copy.copy(spec)
    work.is_negative = value < 0
    work.is_zero = abs(value) < _EPSILON
    return work


def _fixed_body(x: float, spec: FormatSpec) -> str:
    x = abs(x)
    if not spec.precision_set:
        spec.precision = DEFAULT_PRECISION
    fraction, whole = math.modf(x)
    parts = [format_whole(whole, spec)]
    if not (spec.precision_set and spec.precision == 0):
        parts.append(".")
        scaled = _round_half_away(_times_ten(fraction, spec.precision))
        leading_zeros = max(spec.precision - num_length(scaled, spec.base), 0)
        fraction_digits = digits(scaled, spec.base)
        trailing_zeros = max(
            spec.precision - (leading_zeros + len(fraction_digits)), 0
        )
        parts.extend(["0" * leading_zeros, fraction_digits, "0" * trailing_zeros])
        if not spec.is_g and not spec.is_scientific and spec.flag_minus:
            parts.append(" " * spec.padding)
    if spec.flag_sharp and spec.precision_set and spec.precision == 0:
        parts.append(".")
    return "".join(parts)


def format_fixed(value: Number, spec: FormatSpec) -> str:
    """Return the full ``%f`` field for ``value``, with sign and padding."""
    work = _prepare(value, spec, "format_fixed")
    return _fixed_body(abs(value), work)


def _scientific_zero(spec: FormatSpec) -> str:
    parts = ["0"]
    zeros = spec.precision if spec.precision_set else DEFAULT_PRECISION
    if not (spec.precision_set and spec.precision == 0):
        parts.append("." + "0" * zeros)
    elif spec.flag_sharp:
        parts.append(".")
    parts.append(f"{spec.exponent_char}+00")
    return "".join(parts)


def _scientific_standard(x: float, spec: FormatSpec) -> str:
    if x > 1:
        exponent = calculate_exponent(bank_round(x))
    else:
        exponent = calculate_exponent(x)
    x = scale_to_one_digit(x)
    if spec.precision_set and spec.precision == 0:
        x = bank_round(x)
    return _fixed_body(x, spec) + _exponent_part(exponent, spec)


def format_scientific(value: Number, spec: FormatSpec) -> str:
    """Return the full ``%e`` / ``%E`` field for ``value``, with sign and padding."""
    work = _prepare(value, spec, "format_scientific")
    x = abs(value)
    body = _scientific_zero(work) if work.is_zero else _scientific_standard(x, work)
    leading, trailing = work.compute_padding(len(body))
    return leading + work.prefix() + body + trailing


def _g_needs_scientific(x: float, spec: FormatSpec) -> bool:
    length = num_length(bank_round(x), spec.base)
    if spec.precision_set:
        limit = spec.precision if spec.precision else 1
    else:
        limit = DEFAULT_PRECISION
    return length > limit


def _g_default_sharp(x: float, spec: FormatSpec) -> str:
    fraction, whole = math.modf(x)
    whole_len = 0 if whole == 0 else num_length(whole, spec.base)
    places = max(DEFAULT_PRECISION - whole_len, 0)
    fraction = bank_round(_times_ten(fraction, places))
    text = digits(whole, spec.base) + "."
    fraction_len = num_length(fraction, 10)
    whole_len = num_length(whole, 10)
    total = whole_len + fraction_len
    if whole_len < DEFAULT_PRECISION:
        text += digits(fraction, spec.base)
    if not spec.precision_set:
        if total < DEFAULT_PRECISION:
            text += "0" * (DEFAULT_PRECISION - total)
    else:
        if text.endswith(".0"):
            text = text[:-1]
        if x != 0:
            text = _strip_zeros(text, spec.flag_sharp)
    return text


def _g_default_plain(x: float, spec: FormatSpec) -> str:
    fraction, whole = math.modf(x)
    whole_len = 0 if whole == 0 else num_length(whole, spec.base)
    places = max(DEFAULT_PRECISION - whole_len, 0)
    fraction = bank_round(_times_ten(fraction, places))
    text = digits(whole, spec.base) + "." + digits(fraction, spec.base)
    if text.endswith(".0"):
        text = text[:-2]
    if x != 0:
        text = _strip_zeros(text, spec.flag_sharp)
    return text


def _g_default(x: float, spec: FormatSpec) -> str:
    if spec.flag_sharp:
        return _g_default_sharp(x, spec)
    return _g_default_plain(x, spec)


def _scale_significand(x: float) -> float:
    if x < 10:
        return x
    exponent = math.floor(math.log10(x))
    return x / 10.0**exponent


def _g_zero_precision(x: float, spec: FormatSpec) -> str:
    x = _scale_significand(x)
    places = 1 if math.floor(x) == 0 else 0
    return _g_default(round_to_n_digits(x, places), spec)


def _g_small(x: float, spec: FormatSpec) -> str:
    x = round_to_n_digits(x, spec.precision)
    text = _fixed_body(x, spec)
    if x != 0 and not spec.flag_sharp:
        text = _strip_zeros(text, spec.flag_sharp)
    return text


def _g_nonzero_precision(x: float, spec: FormatSpec) -> str:
    fraction, whole = math.modf(x)
    whole_len = num_length(whole, 10)
    fraction *= 10.0 ** (spec.precision - whole_len)
    print_fraction = True
    if num_length(bank_round(fraction), 10) > num_length(fraction, 10):
        whole += 1
        print_fraction = False
    if spec.precision <= whole_len:
        x = bank_round(x)
        text = format_whole(x, spec)
    else:
        text = format_whole(whole, spec)
    if (
        spec.precision > 1
        and fraction != 0
        and spec.precision != whole_len
        and print_fraction
    ):
        text += "." + digits(bank_round(fraction), spec.base)
        if x != 0 and not spec.flag_sharp:
            text = _strip_zeros(text, spec.flag_sharp)
    elif spec.flag_sharp:
        whole_len = num_length(whole, 10)
        text += "." + "0" * max(spec.precision - whole_len, 0)
    return text


def _g_scientific_unset(x: float, spec: FormatSpec) -> str:
    rounded = bank_round(x)
    exponent = calculate_exponent(rounded)
    x = round_to_n_digits(scale_to_one_digit(rounded), _MANTISSA_DIGITS)
    text = _fixed_body(x, spec)[:-1]
    text = _strip_zeros(text, spec.flag_sharp)
    return text + _exponent_part(exponent, spec)


def _g_exponent_grows(x: float, spec: FormatSpec) -> bool:
    x = scale_to_n_digits(x, spec.precision)
    return num_length(x, 10) != num_length(bank_round(x), 10)


def _g_significand(x: float, spec: FormatSpec) -> str:
    if _g_exponent_grows(x, spec):
        x = scale_to_one_digit(bank_round(x))
    fraction, whole = math.modf(x)
    whole_len = num_length(whole, spec.base)
    if spec.precision <= whole_len:
        x = bank_round(x)
        text = format_whole(x, spec)
    else:
        text = format_whole(whole, spec)
    if spec.precision > 1 and fraction != 0 and spec.precision != whole_len:
        fraction *= 10.0 ** (spec.precision - whole_len)
        text += "." + digits(bank_round(fraction), spec.base)
        if x != 0:
            text = _strip_zeros(text, spec.flag_sharp)
    elif spec.flag_sharp:
        text += "." + "0" * spec.precision
    return text


def _g_scientific_set(x: float, spec: FormatSpec) -> str:
    exponent = calculate_exponent(x)
    if _g_exponent_grows(x, spec):
        exponent += 1
    x = bank_round(scale_to_n_digits(x, spec.precision))
    x = round_to_n_digits(scale_to_one_digit(x), spec.precision)
    if spec.precision == 0:
        x = bank_round(x)
        text = _g_zero_precision(x, spec)
    else:
        text = _g_significand(x, spec)
    if text.endswith("0"):
        text = text[:-1]
    if not spec.flag_sharp and text.endswith("."):
        text = text[:-1]
    return text + _exponent_part(exponent, spec)


def format_g(value: Number, spec: FormatSpec) -> str:
    """Return the full ``%g`` / ``%G`` field for ``value``, with sign and padding."""
    work = _prepare(value, spec, "format_g")
    x = float(abs(value))
    fraction, whole = math.modf(x)
    if _g_needs_scientific(x, work):
        if work.precision_set:
            body = _g_scientific_set(x, work)
        else:
            body = _g_scientific_unset(x, work)
    elif work.precision_set and work.precision == 0:
        body = _g_zero_precision(x, work)
    elif not work.precision_set:
        body = _g_default(x, work)
    elif whole == 0 and fraction != 0:
        body = _g_small(x, work)
    else:
        body = _g_nonzero_precision(x, work)
    leading, trailing = work.compute_padding(len(body))
    return work.prefix() + leading + body + trailing