"""Non-blocking telemetry emitter for lookup events."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .events import LookupEvent


logger = logging.getLogger(__name__)

EventConsumer = Callable[[LookupEvent], Any]


@dataclass
class TelemetryEmitter:
    """
    Observability hook for the resolver.

    ``emit`` only enqueues, so a resolve call never waits on a consumer.
    Consumers (sync or async callables) run from ``process_loop``, and
    whatever is still queued is delivered by ``stop``. Events emitted while
    stopped, or while the queue is full, are dropped and counted.
    """
    max_queue_size: int = 10000

    _queue: asyncio.Queue | None = field(default=None, init=False)
    _consumers: list[EventConsumer] = field(default_factory=list, init=False)
    _emitted: int = field(default=0, init=False)
    _dropped: int = field(default=0, init=False)
    _consumer_errors: int = field(default=0, init=False)

    def add_consumer(self, consumer: EventConsumer) -> None:
        self._consumers.append(consumer)

    async def start(self) -> None:
        self._queue = asyncio.Queue(maxsize=self.max_queue_size)
        logger.info(f"Telemetry emitter started (max_queue={self.max_queue_size})")

    async def stop(self) -> None:
        queue, self._queue = self._queue, None
        while queue is not None and not queue.empty():
            await self._deliver(queue.get_nowait())
        logger.info(f"Telemetry emitter stopped. Stats: {self.stats}")

    async def join(self) -> None:
        """Wait until ``process_loop`` has delivered every queued event."""
        if self._queue is not None:
            await self._queue.join()

    def emit(self, event: LookupEvent) -> bool:
        """Queue an event. Returns False if it was dropped."""
        if self._queue is None:
            self._dropped += 1
            return False

        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self._dropped += 1
            return False

        self._emitted += 1
        return True

    async def process_loop(self) -> None:
        """Deliver events as they arrive. Run as a background task."""
        if self._queue is None:
            raise RuntimeError("Emitter not started")

        queue = self._queue
        try:
            while True:
                event = await queue.get()
                await self._deliver(event)
                queue.task_done()
        except asyncio.CancelledError:
            logger.debug("Telemetry processing loop cancelled")

    async def _deliver(self, event: LookupEvent) -> None:
        for consumer in self._consumers:
            try:
                result = consumer(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Telemetry consumer {consumer!r} failed: {e}")
                self._consumer_errors += 1

    @property
    def queue_depth(self) -> int:
        return self._queue.qsize() if self._queue else 0

    @property
    def stats(self) -> dict:
        return {
            "emitted": self._emitted,
            "dropped": self._dropped,
            "errors": self._consumer_errors,
            "queue_depth": self.queue_depth,
            "consumers": len(self._consumers),
        }
