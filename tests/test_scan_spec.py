import math

import pytest

from strkit.scan_spec import (
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


def test_source_stops_at_nul():
    source = Source("ab\0cd")
    assert source.text == "ab"
    assert source.peek(2) == "\0"


def test_source_rejects_position_out_of_range():
    with pytest.raises(IndexError):
        Source("abc", pos=5)


def test_source_skip_space():
    source = Source(" \t\n x")
    source.skip_space()
    assert source.peek() == "x"


def test_parse_full_spec():
    fmt = "%*5ld,"
    spec, pos = parse_scan_spec(fmt, 1)
    assert spec.suppress is True
    assert spec.width == 5
    assert spec.width_set is True
    assert spec.length is Length.LONG
    assert spec.conversion == "d"
    assert spec.next_char == ","
    assert pos == fmt.index(",")


def test_parse_plain_spec():
    spec, pos = parse_scan_spec("%hx", 1)
    assert spec.width_set is False
    assert spec.suppress is False
    assert spec.length is Length.SHORT
    assert spec.is_hexadecimal is True
    assert spec.next_char is None
    assert pos == len("%hx")


def test_parse_scientific_and_long_double():
    spec, _ = parse_scan_spec("%LE", 1)
    assert spec.length is Length.LONG_DOUBLE
    assert spec.is_scientific is True


def test_parse_truncated_format():
    spec, pos = parse_scan_spec("%", 1)
    assert spec.conversion == ""
    assert pos == 1


def test_read_decimal_stops_at_space():
    source = Source("123 rest")
    assert read_decimal(source, ScanSpec(conversion="d")) == 123
    assert source.pos == 3
    assert source.failed is False


@pytest.mark.parametrize("n", [0, 7, 42, 99999, 2**63])
def test_read_decimal_round_trip(n):
    assert read_decimal(Source(str(n)), ScanSpec(conversion="u")) == n


def test_read_decimal_wraps_to_64_bits():
    n = 2**64 + 5
    assert read_decimal(Source(str(n)), ScanSpec(conversion="u")) == n % 2**64


def test_read_decimal_width():
    source = Source("12345")
    spec = ScanSpec(conversion="d", width=2, width_set=True)
    assert read_decimal(source, spec) == int("12345"[:2])
    assert source.pos == 2


def test_sign_counts_against_width():
    source = Source("12345")
    spec = ScanSpec(conversion="d", width=3, width_set=True, is_negative=True)
    assert read_decimal(source, spec) == int("12345"[:2])


def test_read_decimal_stops_at_next_format_char():
    source = Source("12,34")
    assert read_decimal(source, ScanSpec(conversion="d", next_char=",")) == 12
    assert source.failed is False
    assert source.pos == 2


def test_read_decimal_fails_on_foreign_char():
    source = Source("12x")
    assert read_decimal(source, ScanSpec(conversion="d")) == 12
    assert source.failed is True


def test_read_decimal_nothing():
    source = Source("abc")
    assert read_decimal(source, ScanSpec(conversion="d")) is None
    assert source.failed is True


@pytest.mark.parametrize("n", [0, 15, 255, 0xDEADBEEF])
def test_read_hex_round_trip(n):
    assert read_hex(Source(format(n, "x")), ScanSpec(conversion="x")) == n
    assert read_hex(Source(format(n, "#X")), ScanSpec(conversion="X")) == n


def test_read_hex_bare_prefix_is_zero():
    source = Source("0x")
    assert read_hex(source, ScanSpec(conversion="x")) == 0
    assert source.pos == 2


def test_read_hex_integer_conversion_stops_quietly():
    source = Source("0x1fg")
    assert read_hex(source, ScanSpec(conversion="i")) == int("1f", 16)
    assert source.failed is False


def test_read_hex_fails_on_foreign_char():
    source = Source("1fg")
    assert read_hex(source, ScanSpec(conversion="x")) == int("1f", 16)
    assert source.failed is True


@pytest.mark.parametrize("n", [0, 7, 8, 511, 4095])
def test_read_octal_round_trip(n):
    assert read_octal(Source(format(n, "o")), ScanSpec(conversion="o")) == n


def test_read_octal_integer_conversion_stops_at_decimal_digit():
    source = Source("079")
    assert read_octal(source, ScanSpec(conversion="i")) == int("07", 8)
    assert source.pos == 2
    assert source.failed is False


def test_read_octal_fails_on_decimal_digit():
    source = Source("79")
    assert read_octal(source, ScanSpec(conversion="o")) == 7
    assert source.failed is True


def test_read_float_simple():
    assert read_float(Source("3.25"), ScanSpec(conversion="f")) == 3.25


def test_read_float_sign_and_exponent():
    spec = ScanSpec(conversion="e")
    assert read_float(Source("-1.5e2"), spec) == float("-1.5e2")
    assert spec.is_negative is True


def test_read_float_plus_sign():
    spec = ScanSpec(conversion="f")
    assert read_float(Source("+2"), spec) == 2.0
    assert spec.plus_sign_present is True


def test_read_float_width():
    source = Source("12345.5")
    spec = ScanSpec(conversion="f", width=3, width_set=True)
    assert read_float(source, spec) == float("123")
    assert source.pos == 3


def test_read_float_infinity_leaves_position():
    source = Source("inf")
    assert read_float(source, ScanSpec(conversion="f")) == math.inf
    assert source.pos == 0


def test_read_float_negative_nan():
    source = Source("-nan")
    value = read_float(source, ScanSpec(conversion="g"))
    assert math.isnan(value)
    assert math.copysign(1.0, value) == -1.0
    assert source.pos == 1


def test_read_float_nothing():
    assert read_float(Source("abc"), ScanSpec(conversion="f")) is None


def test_read_string_word():
    source = Source("hello world")
    assert read_string(source, ScanSpec(conversion="s")) == "hello"
    assert source.pos == len("hello")


def test_read_string_width():
    spec = ScanSpec(conversion="s", width=3, width_set=True)
    assert read_string(Source("hello"), spec) == "hello"[:3]


def test_read_string_empty():
    assert read_string(Source("  x"), ScanSpec(conversion="s")) is None


def test_read_string_wide_stops_at_unicode_space():
    text = "ab\u3000cd"
    wide = ScanSpec(conversion="s", length=Length.LONG)
    assert read_string(Source(text), wide) == "ab"
    assert read_string(Source(text), ScanSpec(conversion="s")) == text


def test_read_pointer():
    assert read_pointer(Source("0x7ffe"), ScanSpec(conversion="p")) == int("7ffe", 16)


def test_read_pointer_nothing():
    assert read_pointer(Source("zz"), ScanSpec(conversion="p")) is None