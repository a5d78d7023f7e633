"""
Optional debounce stage layered over the stateless pipeline output.
"""
from collections import Counter, deque

from .gestures import SENTINEL


class SymbolDebouncer:
    """
    Majority vote over the last `window` symbols.

    The shown symbol only changes once a candidate has at least `min_count`
    votes in the window, which suppresses single-frame flicker at the edge
    of detection confidence.
    """

    def __init__(self, window: int = 5, min_count: int = 3, sentinel: str = SENTINEL):
        if window < 1:
            raise ValueError("window must be >= 1")
        if not 1 <= min_count <= window:
            raise ValueError("min_count must be between 1 and window")
        self.buf = deque(maxlen=window)
        self.min_count = min_count
        self.sentinel = sentinel
        self.state = sentinel

    def update(self, symbol: str) -> str:
        self.buf.append(symbol)
        candidate, votes = Counter(self.buf).most_common(1)[0]
        if votes >= self.min_count:
            self.state = candidate
        return self.state

    def reset(self) -> None:
        self.buf.clear()
        self.state = self.sentinel
