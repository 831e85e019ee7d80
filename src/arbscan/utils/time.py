"""
Microsecond clock helpers.

Book updates are stamped with get_timestamp_us() when decoded; the
dispatcher measures update-to-evaluation latency against that stamp.
"""

import time


def get_timestamp_us() -> int:
    """Wall clock in microseconds since the epoch."""
    return time.time_ns() // 1000


def elapsed_us(since_us: int) -> int:
    """Microseconds elapsed since `since_us`."""
    return get_timestamp_us() - since_us


def format_duration_us(duration_us: float) -> str:
    """
    Render a latency for the session summary.

    Examples:
        >>> format_duration_us(500)
        '500μs'
        >>> format_duration_us(1500)
        '1.50ms'
        >>> format_duration_us(2_500_000)
        '2.50s'
    """
    if duration_us < 1000:
        return f"{duration_us:.0f}μs"
    if duration_us < 1_000_000:
        return f"{duration_us / 1000:.2f}ms"
    return f"{duration_us / 1_000_000:.2f}s"
