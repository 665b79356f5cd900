"""Base sink interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..events import LookupEvent


class TelemetrySink(ABC):
    """Destination for batches of lookup events."""

    @abstractmethod
    async def send(self, events: list[LookupEvent]) -> None:
        ...

    async def start(self) -> None:
        """Initialize the sink (called on startup)."""
        pass

    async def stop(self) -> None:
        """Clean up the sink (called on shutdown)."""
        pass
