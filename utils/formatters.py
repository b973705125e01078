"""Text formatting helpers."""

from typing import List


def format_seconds(seconds: int) -> str:
    """Format a whole number of seconds."""
    return f"{seconds} second" if seconds == 1 else f"{seconds} seconds"


def format_points(points: int) -> str:
    """Format points with commas and the right plural."""
    return f"{points:,} point" if points == 1 else f"{points:,} points"


def format_list(items: List[str], separator: str = ", ", last_separator: str = " and ") -> str:
    """Format a list of items with proper separators."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]}{last_separator}{items[1]}"

    return separator.join(items[:-1]) + f"{last_separator}{items[-1]}"
