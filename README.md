# strkit

Python versions of the classic C string and memory routines, together with
printf-style formatting and scanf-style parsing. Formatting follows the C
conventions for field width, precision, flags and length modifiers.

## Installation

```
pip install strkit
```

The package has no runtime dependencies. It needs Python 3.10 or later.

## Modules

- `strkit.memory` holds the byte-buffer routines `memchr`, `memcmp`, `memcpy`,
  `memmove` and `memset`. They work on `bytes`, `bytearray` or `memoryview`,
  and the functions that write return the `bytearray` they changed. A range
  that runs past the end of a buffer raises `ValueError`. `memmove` takes
  optional `dest_offset` and `src_offset` arguments, so the source and the
  destination may be the same buffer.
- `strkit.text` holds the string routines `strlen`, `strcat`, `strncat`,
  `strchr`, `strrchr`, `strcmp`, `strncmp`, `strcpy`, `strncpy`, `strcspn`,
  `strspn`, `strpbrk`, `strstr`, `insert` and `to_lower`. An embedded `"\0"`
  ends a string. The search functions return an index, or `None` when nothing
  is found. The other functions return new strings. `insert` raises
  `IndexError` when the start index is out of range.
- `strkit.sprintf` provides `sprintf(fmt, *args)`, which supports
  `%c %s %d %i %u %o %x %X %p %f %e %E %g %G %n %%` with the `h`, `l` and `L`
  length modifiers. It returns the formatted string. A `%n` conversion stores
  the number of characters written so far into a `Count` object.
- `strkit.sscanf` provides `sscanf(text, fmt)`, which returns a `ScanResult`.
- `strkit.printf_spec`, `strkit.printf_float` and `strkit.scan_spec` hold the
  pieces the two formatters are built from. These are conversion
  specifications (`FormatSpec`, `ScanSpec`), number layout (`format_whole`,
  `format_fixed`, `format_scientific`, `format_g`) and input field readers
  (`read_decimal`, `read_hex`, `read_octal`, `read_float`, `read_string`,
  `read_pointer`).

## Examples

```python
from strkit.memory import memset
from strkit.sprintf import Count, sprintf
from strkit.sscanf import sscanf
from strkit.text import insert, strspn

insert("Hello, world!", "beautiful ", 7)   # 'Hello, beautiful world!'
strspn("123abc", "0123456789")             # 3

buf = bytearray(b"abcdef")
memset(buf, ord("$"), 3)                   # bytearray(b'$$$def')

sprintf("%-6d|%+.2f|%#x", 42, 3.14159, 255)
# '42    |+3.14|0xff'

counter = Count()
sprintf("abc%n", counter)                  # counter.value == 3

result = sscanf("12 3.5 word", "%d %f %s")
result.count                               # 3
list(result)                               # [12, 3.5, 'word']
```

`sprintf` raises `TypeError` when the arguments run out or have the wrong
type. It ignores extra arguments.

`sscanf` returns its values in the order of the format's conversions. Each
conversion that is not suppressed with `*` adds one entry, and so does `%n`.
`ScanResult.count` is the number of fields that were converted. As in C, it is
-1 when the input runs out before the first conversion.

## Not included

There is no function that turns an error number into its message text.

## Running the tests

```
pip install -e ".[test]"
pytest
```