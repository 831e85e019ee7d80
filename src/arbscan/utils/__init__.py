"""Utility functions for the scanner."""

from arbscan.utils.time import elapsed_us, format_duration_us, get_timestamp_us


__all__ = [
    "elapsed_us",
    "format_duration_us",
    "get_timestamp_us",
]
