"""C-style string and memory routines with printf- and scanf-style formatting."""

__version__ = "0.1.0"

__all__ = [
    "memory",
    "printf_float",
    "printf_spec",
    "scan_spec",
    "sprintf",
    "sscanf",
    "text",
]