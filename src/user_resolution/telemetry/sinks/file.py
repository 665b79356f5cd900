"""JSONL file sink for telemetry."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from ..events import LookupEvent
from .base import TelemetrySink


@dataclass
class FileSink(TelemetrySink):
    """Appends each event to a file as one JSON line."""
    path: str
    encoding: str = "utf-8"

    # Internal state
    _file: TextIO | None = field(default=None, init=False)

    async def start(self) -> None:
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "a", encoding=self.encoding)

    async def stop(self) -> None:
        if self._file:
            self._file.close()
            self._file = None

    async def send(self, events: list[LookupEvent]) -> None:
        if not self._file:
            await self.start()

        for event in events:
            self._file.write(json.dumps(event.to_dict(), default=str) + "\n")

        self._file.flush()
