"""Console sink for development/debugging."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass

from ..events import LookupEvent
from .base import TelemetrySink


@dataclass
class ConsoleSink(TelemetrySink):
    """Writes events to stdout or stderr."""
    stream: str = "stderr"  # stdout | stderr
    format: str = "compact"  # json | compact
    prefix: str = "[UserResolution] "

    async def send(self, events: list[LookupEvent]) -> None:
        out = sys.stdout if self.stream == "stdout" else sys.stderr

        for event in events:
            print(f"{self.prefix}{self._format_event(event)}", file=out)

    def _format_event(self, event: LookupEvent) -> str:
        if self.format == "json":
            return json.dumps(event.to_dict(), default=str)

        line = (
            f"{event.timestamp.isoformat()} "
            f"{event.tier.value} "
            f"{event.handle or '*'} "
            f"{event.outcome.value} "
            f"{event.latency_ms:.1f}ms"
        )
        if event.error_message:
            line += f" error={event.error_message!r}"
        return line
