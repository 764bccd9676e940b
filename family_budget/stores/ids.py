"""Record id generation."""

import threading
import time
from collections.abc import Callable, Iterable
from typing import Optional


class IdGenerator:
    """
    Time-derived, strictly increasing string ids.

    Ids are decimal millisecond timestamps, bumped
    by one whenever the clock has not advanced past the last issued id.
    Seeding with existing ids guarantees a deleted id is never handed out
    again, even after a reload.
    """

    def __init__(
        self,
        existing_ids: Iterable[str] = (),
        clock: Optional[Callable[[], float]] = None,
    ):
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._last = 0
        self.observe(existing_ids)

    def observe(self, ids: Iterable[str]) -> None:
        """Make sure future ids sort after every numeric id given."""
        with self._lock:
            for raw in ids:
                try:
                    value = int(raw)
                except (TypeError, ValueError):
                    continue
                if value > self._last:
                    self._last = value

    def next_id(self) -> str:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)
