"""Wiring of emitter, batcher and sink from configuration."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from ..config import Config
from .batcher import TelemetryBatcher, create_batched_consumer
from .emitter import TelemetryEmitter
from .sinks.base import TelemetrySink
from .sinks.console import ConsoleSink
from .sinks.file import FileSink


logger = logging.getLogger(__name__)


def create_sink(config: Config) -> TelemetrySink:
    sink_type = config.telemetry.sink_type
    sink_config = config.telemetry.sink_config

    if sink_type == "console":
        return ConsoleSink(**sink_config)
    if sink_type == "file":
        return FileSink(**sink_config)

    logger.warning(f"Unknown telemetry sink {sink_type!r}, using console")
    return ConsoleSink()


def create_telemetry(config: Config) -> tuple[TelemetryEmitter, TelemetryBatcher, TelemetrySink]:
    """Create an emitter wired through a batcher to the configured sink."""
    emitter = TelemetryEmitter(max_queue_size=config.telemetry.max_queue_size)
    sink = create_sink(config)
    batcher = TelemetryBatcher(
        batch_size=config.telemetry.batch_size,
        flush_interval_seconds=config.telemetry.flush_interval_seconds,
        sink=sink.send,
    )
    emitter.add_consumer(create_batched_consumer(batcher))
    return emitter, batcher, sink


@asynccontextmanager
async def telemetry_session(config: Config) -> AsyncIterator[TelemetryEmitter | None]:
    """
    Run the telemetry pipeline for the duration of the block.

    Yields None when telemetry is disabled so callers can pass the result
    straight to ``UserResolver.from_config``.
    """
    if not config.telemetry.enabled:
        yield None
        return

    emitter, batcher, sink = create_telemetry(config)
    await sink.start()
    await emitter.start()

    tasks = [
        asyncio.create_task(emitter.process_loop()),
        asyncio.create_task(batcher.timer_loop()),
    ]

    try:
        yield emitter
    finally:
        # Let the loop finish what it already dequeued before cancelling it
        await emitter.join()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        await emitter.stop()
        await batcher.stop()
        await sink.stop()
