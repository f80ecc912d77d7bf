import asyncio


class RateLimiter:
    """Token bucket rate limiter for async HTTP clients.

    One instance per client; concurrent callers queue on the lock, so request
    *starts* are spaced ``1 / max_rps`` apart across a whole batch window. The
    lock is released before the request goes out, so requests only overlap on
    the wire when one takes longer than that spacing. At 0.5 rps a 5-wide
    window launches over roughly 8 seconds.
    """

    def __init__(self, max_rps: float) -> None:
        if max_rps <= 0:
            raise ValueError(f"max_rps must be positive, got {max_rps}")
        self._min_interval = 1.0 / max_rps
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            loop = asyncio.get_running_loop()
            now = loop.time()
            wait = self._min_interval - (now - self._last_request)
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request = loop.time()
