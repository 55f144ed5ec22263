"""
Module: common.dates

Purpose:
    Human-readable rendering of ISO document dates for signature blocks.

Key Functions:
    - format_display_date(): "2024-03-05" -> "March 5, 2024"

Used By:
    - builder.output.renderer: Signature blocks
"""

from __future__ import annotations

from datetime import date

# Shown where a date line is drawn but the document has no date yet
BLANK_DATE = "__________"

_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


def format_display_date(value: str | None) -> str:
    """
    Format an ISO ``YYYY-MM-DD`` string as ``Month D, YYYY``.

    Empty values give a blank line; values that are not valid ISO dates
    are returned unchanged.

    Example:
        >>> format_display_date("2024-03-05")
        'March 5, 2024'
    """
    if not value or not value.strip():
        return BLANK_DATE
    try:
        parsed = date.fromisoformat(value.strip())
    except ValueError:
        return value
    return f"{_MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}"
