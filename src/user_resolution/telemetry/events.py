"""Telemetry event types."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Tier(str, Enum):
    """Lookup site that produced an event."""
    STORE = "store"
    PROFILE = "profile"
    FALLBACK = "fallback"
    LISTING = "listing"


class LookupOutcome(str, Enum):
    """Outcome of a single lookup."""
    HIT = "hit"
    MISS = "miss"
    ERROR = "error"
    CACHED = "cached"


@dataclass(frozen=True, slots=True)
class LookupEvent:
    """
    A single lookup against one tier.

    Emitted for every external call (and every profile cache hit) so the
    host can see which tier answered and which sources are failing.
    """
    # Request identification
    request_id: str

    # Timing
    timestamp: datetime

    # What
    tier: Tier
    handle: str | None
    source: str  # Name of the injected lookup, e.g. "find_user_by_handle"

    # Outcome
    outcome: LookupOutcome
    error_message: str | None = None

    # Performance
    latency_ms: float = 0.0

    # Number of records returned (listing calls)
    result_count: int | None = None

    @classmethod
    def create(
        cls,
        tier: Tier,
        handle: str | None,
        source: str,
        outcome: LookupOutcome,
        latency_ms: float = 0.0,
        **kwargs,
    ) -> LookupEvent:
        """Factory method with sensible defaults."""
        return cls(
            request_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            tier=tier,
            handle=handle,
            source=source,
            outcome=outcome,
            latency_ms=latency_ms,
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat(),
            "tier": self.tier.value,
            "handle": self.handle,
            "source": self.source,
            "outcome": self.outcome.value,
            "error_message": self.error_message,
            "latency_ms": self.latency_ms,
            "result_count": self.result_count,
        }
