import pytest

from strkit.memory import memchr, memcmp, memcpy, memmove, memset


# memchr


def test_memchr_hello_world():
    buffer = b"Hello, World\0"
    assert memchr(buffer, ord("o"), len(buffer)) == 4


def test_memchr_find_in_middle():
    buffer = b"Hello, how are you?\0"
    assert memchr(buffer, ord("h"), len(buffer)) == 7


def test_memchr_find_at_end():
    buffer = b"The end is near!\0"
    assert memchr(buffer, ord("!"), len(buffer)) == 15


def test_memchr_character_not_found():
    buffer = b"No such character\0"
    assert memchr(buffer, ord("z"), len(buffer)) is None


def test_memchr_zero_length():
    buffer = b"Empty search\0"
    assert memchr(buffer, ord("E"), 0) is None


def test_memchr_uses_low_byte_of_c():
    buffer = b"ab\x01"
    assert memchr(buffer, 0x101, 3) == 2


def test_memchr_range_past_end_raises():
    with pytest.raises(ValueError):
        memchr(b"abc", ord("a"), 4)


# memcmp


def test_memcmp_equal_blocks():
    assert memcmp(bytes([1, 2, 3]), bytes([1, 2, 3]), 3) == 0


def test_memcmp_diff_start():
    assert memcmp(bytes([4, 2, 3]), bytes([1, 2, 3]), 3) > 0


def test_memcmp_diff_middle():
    assert memcmp(bytes([1, ord("a"), 3]), bytes([1, ord("b"), 3]), 3) < 0


def test_memcmp_diff_end():
    assert memcmp(bytes([1, 2, 4]), bytes([1, 2, 3]), 3) > 0


def test_memcmp_zero_length():
    assert memcmp(bytes([1, 2, 3]), bytes([4, 5, 6]), 0) == 0


def test_memcmp_is_antisymmetric():
    a, b = b"abcx", b"abcz"
    assert memcmp(a, b, 4) == -memcmp(b, a, 4)


def test_memcmp_bytes_are_unsigned():
    assert memcmp(b"\xff", b"\x01", 1) > 0


# memcpy


def test_memcpy_empty():
    src = bytes(1)
    dest = bytearray(1)
    result = memcpy(dest, src, len(src))
    assert bytes(dest) == src
    assert result is dest


def test_memcpy_content():
    src = b"Hello, world!\0"
    dest = bytearray(20)
    result = memcpy(dest, src, len(src))
    assert bytes(dest[: len(src)]) == src
    assert result is dest


def test_memcpy_leaves_rest_untouched():
    dest = bytearray(b"xxxxxx")
    memcpy(dest, b"ab", 2)
    assert dest == bytearray(b"abxxxx")


def test_memcpy_destination_too_small_raises():
    with pytest.raises(ValueError):
        memcpy(bytearray(2), b"abc", 3)


# memmove


def test_memmove_empty():
    src = bytes(1)
    dest = bytearray(1)
    result = memmove(dest, src, len(src))
    assert bytes(dest) == src
    assert result is dest


def test_memmove_content():
    src = b"Hello, world!\0"
    dest = bytearray(20)
    result = memmove(dest, src, len(src))
    assert bytes(dest[: len(src)]) == src
    assert result is dest


def test_memmove_overlap_forward():
    dest = bytearray(b"1.2.3.4.5.6.7.8.9.10.11.12.13.14\0")
    expected = b"1.2.31.2.3.4.5.6.7.8.9.10.11.12."
    result = memmove(dest, dest, 27, dest_offset=5)
    assert bytes(dest[: len(expected)]) == expected
    assert result is dest


def test_memmove_overlap_backward():
    dest = bytearray(b"123456789.10.11.12.13.14\0")
    expected = b"6789.10.11.12.13.14"
    result = memmove(dest, dest, 20, src_offset=5)
    assert bytes(dest).split(b"\0", 1)[0] == expected
    assert result is dest


def test_memmove_source_range_past_end_raises():
    dest = bytearray(b"123456789.10.11.12.13.14\0")
    with pytest.raises(ValueError):
        memmove(dest, dest, 25, src_offset=5)


# memset


def test_memset_zeros():
    dest = bytearray(b"1.2.3.4.5.6.7.8.9.10.11.12.13.14\0")
    expected = b"00000000000000000000000000000000"
    result = memset(dest, 48, 32)
    assert bytes(dest[:32]) == expected
    assert result is dest


def test_memset_zero_length():
    dest = bytearray(b"Initial string\0")
    expected = bytes(dest)
    result = memset(dest, ord("Z"), 0)
    assert bytes(dest) == expected
    assert result is dest


def test_memset_money():
    dest = bytearray(b"1.2.3.4.5.6.7.8.9.10.11.12.13.14\0")
    expected = b"$$$$$$$$$$$$$$$$$$$$$$$$$$$$$$$$"
    result = memset(dest, ord("$"), 32)
    assert bytes(dest[:32]) == expected
    assert dest[32] == 0
    assert result is dest


def test_memset_negative_count_raises():
    with pytest.raises(ValueError):
        memset(bytearray(4), 0, -1)