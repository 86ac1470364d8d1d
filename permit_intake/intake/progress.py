import asyncio
from collections.abc import AsyncIterator


class ProgressStream:
    """Carries one operation's progress events from a worker thread to the loop.

    ``publish`` may be called from any thread; events are delivered in order
    to the single consumer iterating the stream, which ends after ``close``.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._queue: asyncio.Queue[float | None] = asyncio.Queue()

    def publish(self, fraction: float) -> None:
        self._loop.call_soon_threadsafe(self._queue.put_nowait, fraction)

    def close(self) -> None:
        self._loop.call_soon_threadsafe(self._queue.put_nowait, None)

    async def __aiter__(self) -> AsyncIterator[float]:
        while True:
            fraction = await self._queue.get()
            if fraction is None:
                return
            yield fraction
