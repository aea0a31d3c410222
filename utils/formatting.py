# fgprint/utils/formatting.py

from datetime import datetime


def format_ticket_timestamp(ts_ms: int) -> str:
    """
    Format a ms-since-epoch timestamp as local time for the label footer.
    Example: 1700000000000 -> "14/11/2023 22:13:20" (in UTC)
    """
    return datetime.fromtimestamp(ts_ms / 1000).strftime("%d/%m/%Y %H:%M:%S")


def clamp_copies(copies) -> int:
    """Number of labels to make; anything below 1 (or not a number) becomes 1."""
    try:
        n = int(copies)
    except (TypeError, ValueError):
        return 1
    return max(1, n)
