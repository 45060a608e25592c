"""In-flight request accounting for graceful shutdown."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts in-flight API requests.

    Once draining starts, the request tracking middleware turns new requests
    away with 503 and ``wait_for_drain`` waits for the remaining ones.
    Everything runs on one event loop, so the counter needs no lock.
    """

    def __init__(self) -> None:
        self.reset()

    @property
    def is_shutting_down(self) -> bool:
        return self._draining

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        self._in_flight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.set()

    def start_shutdown(self) -> None:
        self._draining = True
        logger.info("Draining requests", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until nothing is in flight. Returns False if ``timeout`` elapses first."""
        try:
            async with asyncio.timeout(timeout):
                await self._idle.wait()
        except TimeoutError:
            logger.warning(
                "Requests still in flight after drain timeout",
                timeout=timeout,
                in_flight=self._in_flight,
            )
            return False
        logger.info("All requests drained")
        return True

    def reset(self) -> None:
        self._in_flight = 0
        self._draining = False
        self._idle = asyncio.Event()
        self._idle.set()


request_tracker = RequestTracker()
