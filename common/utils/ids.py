import threading
import time
from typing import Callable, Iterable, Optional


class IdGenerator:
    """Process-wide integer ids: millisecond clock, strictly increasing.

    Two records created in the same millisecond still get distinct ids, and
    ``floor`` keeps new ids above whatever a collection already holds.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.time
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, floor: int = 0) -> int:
        with self._lock:
            candidate = max(int(self._clock() * 1000), self._last + 1, floor + 1)
            self._last = candidate
            return candidate


def max_id(records: Iterable[dict]) -> int:
    highest = 0
    for record in records:
        value = record.get("id")
        if isinstance(value, int) and not isinstance(value, bool) and value > highest:
            highest = value
    return highest
