"""Batching worker between the emitter and a sink."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from .events import LookupEvent


logger = logging.getLogger(__name__)

SinkFn = Callable[[list[LookupEvent]], Awaitable[None]]


@dataclass
class TelemetryBatcher:
    """
    Groups lookup events before they reach a sink.

    A batch goes out when it reaches ``batch_size``, on every tick of
    ``timer_loop``, and once more on ``stop``. A batch the sink rejects is
    dropped and counted.
    """
    batch_size: int = 100
    flush_interval_seconds: float = 1.0
    sink: SinkFn | None = None

    _pending: list[LookupEvent] = field(default_factory=list, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)
    _sent: int = field(default=0, init=False)
    _batches: int = field(default=0, init=False)
    _failures: int = field(default=0, init=False)

    async def add(self, event: LookupEvent) -> None:
        async with self._lock:
            self._pending.append(event)
            if len(self._pending) >= self.batch_size:
                await self._send_pending()

    async def flush(self) -> None:
        async with self._lock:
            await self._send_pending()

    async def timer_loop(self) -> None:
        """Periodic flush for quiet periods. Run as a background task."""
        try:
            while True:
                await asyncio.sleep(self.flush_interval_seconds)
                # A flush already under way completes even if the timer is cancelled
                await asyncio.shield(self.flush())
        except asyncio.CancelledError:
            logger.debug("Telemetry batcher timer cancelled")

    async def stop(self) -> None:
        await self.flush()
        logger.info(f"Telemetry batcher stopped. Stats: {self.stats}")

    async def _send_pending(self) -> None:
        # Lock is held by the caller
        if not self._pending:
            return

        batch, self._pending = self._pending, []
        if self.sink is None:
            logger.warning(f"No telemetry sink configured, discarding {len(batch)} events")
            return

        try:
            await self.sink(batch)
        except Exception as e:
            logger.error(f"Telemetry sink rejected batch of {len(batch)}: {e}")
            self._failures += 1
            return

        self._batches += 1
        self._sent += len(batch)

    @property
    def buffer_size(self) -> int:
        return len(self._pending)

    @property
    def stats(self) -> dict:
        return {
            "batches_sent": self._batches,
            "events_sent": self._sent,
            "flush_errors": self._failures,
            "buffer_size": self.buffer_size,
        }


def create_batched_consumer(batcher: TelemetryBatcher) -> Callable[[LookupEvent], Awaitable[None]]:
    """Emitter consumer that feeds events into ``batcher``."""
    async def consumer(event: LookupEvent) -> None:
        await batcher.add(event)

    return consumer
