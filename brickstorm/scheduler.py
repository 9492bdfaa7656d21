"""Logical-clock queue for deferred actions (effect expiry, level banners)."""

import heapq
import itertools


class CancelToken:
    """Cancellation flag. A token is also cancelled when any ancestor is."""

    def __init__(self, parent=None):
        self.parent = parent
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self):
        token = self
        while token is not None:
            if token._cancelled:
                return True
            token = token.parent
        return False


class DeferredQueue:
    """Callbacks keyed on tick number, drained in (due tick, insertion) order."""

    def __init__(self):
        self.now = 0
        self._heap = []
        self._counter = itertools.count()

    def schedule(self, delay_ticks, callback, token=None):
        if delay_ticks < 0:
            raise ValueError(f"delay_ticks must be >= 0, got {delay_ticks}")
        due = self.now + delay_ticks
        heapq.heappush(self._heap, (due, next(self._counter), callback, token))
        return due

    def advance(self):
        """Move the clock forward one tick and run everything now due."""
        self.now += 1
        ran = 0
        while self._heap and self._heap[0][0] <= self.now:
            _, _, callback, token = heapq.heappop(self._heap)
            if token is not None and token.cancelled:
                continue
            callback()
            ran += 1
        return ran

    def pending(self):
        return sum(1 for entry in self._heap if entry[3] is None or not entry[3].cancelled)

    def clear(self):
        self._heap.clear()

    def __len__(self):
        return len(self._heap)
