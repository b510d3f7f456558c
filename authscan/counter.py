"""
Lifetime failure counter per account. Never decays, never windowed.
"""
from collections import Counter


class FailureCounter:
    def __init__(self):
        self.counts = Counter()

    def increment(self, key):
        self.counts[key] += 1
        return self.counts[key]

    def total(self, key):
        return self.counts[key]
