"""Utility helpers used across gotestreport.

Small, self-contained helpers for time formatting, output paths and YAML
quirks. Keep modules minimal and focused.
"""

from gotestreport.utils.timefmt import format_duration, format_run_date

__all__ = [
    "format_duration",
    "format_run_date",
]
