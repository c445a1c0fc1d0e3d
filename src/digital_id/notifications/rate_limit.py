from __future__ import annotations

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

from ..core.constants import RATE_LIMIT_WINDOW_SECONDS
from ..core.exceptions import RateLimitError

# one budget shared by every outgoing message
GLOBAL_KEY = "outgoing-messages"


class RateLimiter:
    """Allow at most ``limit`` sends in any moving ``window`` seconds.

    ``hit`` reserves a slot atomically, so concurrent senders cannot all slip
    past the limit while a slow delivery is still in flight.
    """

    def __init__(self, limit: int = 10, window: int = RATE_LIMIT_WINDOW_SECONDS):
        self._item = RateLimitItemPerSecond(int(limit), int(window))
        self._storage = MemoryStorage()
        self._limiter = MovingWindowRateLimiter(self._storage)

    def is_limited(self) -> bool:
        return not self._limiter.test(self._item, GLOBAL_KEY)

    def hit(self) -> None:
        if not self._limiter.hit(self._item, GLOBAL_KEY):
            raise RateLimitError("Rate limit exceeded. Please try again later.")

    def reset(self) -> None:
        self._storage.reset()
