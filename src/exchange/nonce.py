"""
Default nonce source.

Unix milliseconds rendered as a string, bumped by one when two requests
land in the same millisecond so values stay strictly increasing.
"""

import asyncio
import time


class MillisecondNonce:
    """Strictly increasing millisecond nonces for one API key."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = asyncio.Lock()

    async def next_nonce(self) -> str:
        """Return the next nonce."""
        async with self._lock:
            now = time.time_ns() // 1_000_000
            self._last = max(now, self._last + 1)
            return str(self._last)
