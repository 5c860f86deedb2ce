import time


def now_ms() -> int:
    """Current time as integer epoch milliseconds (the stored timestamp format)."""
    return int(time.time() * 1000)
