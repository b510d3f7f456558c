"""
Per-key rolling window of failure timestamps.

Each key keeps a deque of timestamps, oldest first. On every record() the new
timestamp is appended and stale entries are dropped from the front, so the
deque only holds failures within `minutes` of the newest one.

Timestamps for a key must be recorded in non-decreasing order; the newest
append is always taken as the anchor of the window.
"""
from collections import deque, defaultdict


def minutes_between(older, newer):
    """Elapsed whole minutes from older to newer, truncated toward zero."""
    return int((newer - older).total_seconds() / 60)


class RollingWindow:
    def __init__(self, minutes):
        self.minutes = minutes
        self.times = defaultdict(deque)

    def record(self, key, ts):
        """Add a failure at `ts` for `key` and return the in-window count."""
        dq = self.times[key]
        dq.append(ts)
        # drop old
        while dq and minutes_between(dq[0], ts) > self.minutes:
            dq.popleft()
        return len(dq)

    def oldest(self, key):
        dq = self.times.get(key)
        return dq[0] if dq else None

    def count(self, key):
        return len(self.times.get(key, ()))
