"""Number formatting for SVG attribute strings."""

from __future__ import annotations


def format_number(value: float) -> str:
    """Format a coordinate compactly: at most 3 decimals, no trailing zeros.

    Example:
        >>> format_number(12.0)
        '12'
        >>> format_number(-0.00001)
        '0'
        >>> format_number(3.14159)
        '3.142'
    """
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_translate(x: float, y: float) -> str:
    """SVG ``transform`` value for a translation."""
    return f"translate({format_number(x)},{format_number(y)})"
