"""Shared helpers used across the core and builder packages."""

from .dates import format_display_date

__all__ = ["format_display_date"]
