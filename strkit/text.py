"""Operations on NUL-terminated text.

Strings are ordinary Python strings; an embedded ``"\\0"`` ends the text,
as a terminator would. Functions that search return an index, or None when
nothing is found.
"""

from __future__ import annotations

import string
from itertools import zip_longest
from typing import Optional, Union

NUL = "\0"

_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _cstr(s: Optional[str], name: str = "s") -> str:
    if s is None:
        raise TypeError(f"{name} must be a string, not None")
    end = s.find(NUL)
    return s if end < 0 else s[:end]


def _char(c: Union[str, int]) -> str:
    if isinstance(c, int):
        return chr(c)
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    return c


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"count must not be negative, got {n}")


def strlen(s: str) -> int:
    """Return the number of characters before the terminator."""
    return len(_cstr(s))


def strcat(dest: str, src: str) -> str:
    """Return ``src`` appended to ``dest``."""
    return _cstr(dest, "dest") + _cstr(src, "src")


def strncat(dest: str, src: str, n: int) -> str:
    """Return at most ``n`` characters of ``src`` appended to ``dest``."""
    _check_count(n)
    return _cstr(dest, "dest") + _cstr(src, "src")[:n]


def strchr(s: Optional[str], c: Union[str, int]) -> Optional[int]:
    """Return the index of the first ``c`` in ``s``; the terminator is found at ``len(s)``."""
    if s is None:
        return None
    text = _cstr(s)
    ch = _char(c)
    if ch == NUL:
        return len(text)
    index = text.find(ch)
    return None if index < 0 else index


def strrchr(s: Optional[str], c: Union[str, int]) -> Optional[int]:
    """Return the index of the last ``c`` in ``s``; the terminator is found at ``len(s)``."""
    if s is None:
        return None
    text = _cstr(s)
    ch = _char(c)
    if ch == NUL:
        return len(text)
    index = text.rfind(ch)
    return None if index < 0 else index


def strcmp(a: str, b: str) -> int:
    """Compare two strings; return the code-point difference at the first mismatch, or 0."""
    for left, right in zip_longest(_cstr(a, "a"), _cstr(b, "b"), fillvalue=NUL):
        if left != right:
            return ord(left) - ord(right)
    return 0


def strncmp(a: str, b: str, n: int) -> int:
    """Like :func:`strcmp`, looking at no more than the first ``n`` characters."""
    _check_count(n)
    left_text = _cstr(a, "a")[:n]
    right_text = _cstr(b, "b")[:n]
    for left, right in zip_longest(left_text, right_text, fillvalue=NUL):
        if left != right:
            return ord(left) - ord(right)
    return 0


def strcpy(src: str) -> str:
    """Return a copy of ``src`` up to its terminator."""
    return _cstr(src, "src")


def strncpy(src: str, n: int) -> str:
    """Return exactly ``n`` characters: ``src`` cut to ``n`` or padded with NULs.

    As with a fixed-size copy, a source of ``n`` or more characters leaves no
    terminator in the result.
    """
    _check_count(n)
    return _cstr(src, "src")[:n].ljust(n, NUL)


def strcspn(s: str, reject: str) -> int:
    """Return the length of the leading run of ``s`` with no character from ``reject``."""
    text = _cstr(s)
    rejected = set(_cstr(reject, "reject"))
    return next((i for i, ch in enumerate(text) if ch in rejected), len(text))


def strspn(s: str, accept: str) -> int:
    """Return the length of the leading run of ``s`` made only of characters in ``accept``."""
    text = _cstr(s)
    accepted = set(_cstr(accept, "accept"))
    return next((i for i, ch in enumerate(text) if ch not in accepted), len(text))


def strpbrk(s: str, accept: str) -> Optional[int]:
    """Return the index of the first character of ``s`` found in ``accept``, or None."""
    accepted = set(_cstr(accept, "accept"))
    return next((i for i, ch in enumerate(_cstr(s)) if ch in accepted), None)


def strstr(haystack: str, needle: str) -> Optional[int]:
    """Return the index of the first occurrence of ``needle``; an empty needle is found at 0."""
    index = _cstr(haystack, "haystack").find(_cstr(needle, "needle"))
    return None if index < 0 else index


def insert(src: str, s: str, start_index: int) -> str:
    """Return ``src`` with ``s`` inserted at ``start_index``.

    Raises IndexError when ``start_index`` lies outside ``0..len(src)``.
    """
    text = _cstr(src, "src")
    addition = _cstr(s, "s")
    if not 0 <= start_index <= len(text):
        raise IndexError(
            f"start index {start_index} outside 0..{len(text)} for insertion"
        )
    return text[:start_index] + addition + text[start_index:]


def to_lower(s: str) -> str:
    """Return a copy of ``s`` with ASCII capital letters made lower case."""
    return _cstr(s).translate(_TO_LOWER)