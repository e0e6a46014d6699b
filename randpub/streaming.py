from __future__ import annotations
import asyncio
from typing import AsyncIterator, Optional, Tuple

class StreamHub:
    """
    Subscriber that re-broadcasts values to any number of async iterators.

    • Each client owns a bounded queue; a client that falls behind loses its
      oldest values, the producer never waits on it.
    • Clients are only added/removed on the event loop, so the tuple swap
      needs no lock.
    """

    def __init__(self, maxsize: int = 100) -> None:
        self._clients: Tuple[asyncio.Queue, ...] = ()
        self._maxsize = maxsize

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def receive(self, value: str) -> None:
        for q in self._clients:
            if q.full():
                q.get_nowait()
            q.put_nowait(value)

    async def subscribe(self, maxsize: Optional[int] = None) -> AsyncIterator[str]:
        """Yield every value received from now on until the caller stops iterating."""
        q: asyncio.Queue = asyncio.Queue(maxsize=self._maxsize if maxsize is None else maxsize)
        self._clients = self._clients + (q,)
        try:
            while True:
                yield await q.get()
        finally:
            self._clients = tuple(c for c in self._clients if c is not q)
