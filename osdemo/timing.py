"""Wall-clock helpers: reading the time and busy-waiting."""

import time


def get_time() -> float:
    """Return the current wall-clock time in seconds, with sub-second precision."""
    return time.time()


def spin(howlong: float) -> None:
    """Busy-wait for ``howlong`` seconds without yielding the CPU."""
    start = get_time()
    while get_time() - start < howlong:
        pass