"""Telemetry - lookup events for the resolver's observability hook."""

from .batcher import TelemetryBatcher, create_batched_consumer
from .emitter import TelemetryEmitter
from .events import LookupEvent, LookupOutcome, Tier
from .pipeline import create_telemetry, telemetry_session

__all__ = [
    "LookupEvent",
    "LookupOutcome",
    "TelemetryBatcher",
    "TelemetryEmitter",
    "Tier",
    "create_batched_consumer",
    "create_telemetry",
    "telemetry_session",
]
