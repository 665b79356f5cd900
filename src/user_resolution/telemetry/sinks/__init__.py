"""Telemetry sinks - destinations for lookup events."""

from .base import TelemetrySink
from .console import ConsoleSink
from .file import FileSink

__all__ = [
    "TelemetrySink",
    "ConsoleSink",
    "FileSink",
]
