"""Configuration for user resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .cache.profile import PROFILE_CACHE_TTL_SECONDS


@dataclass
class CacheConfig:
    """Profile cache configuration."""
    ttl_seconds: float = PROFILE_CACHE_TTL_SECONDS


@dataclass
class TelemetryConfig:
    """Telemetry configuration."""
    enabled: bool = False
    sink_type: str = "console"  # console | file
    sink_config: dict[str, Any] = field(default_factory=dict)

    # Batching
    batch_size: int = 100
    flush_interval_seconds: float = 1.0

    # Queue
    max_queue_size: int = 10000


@dataclass
class Config:
    """Main configuration container."""
    cache: CacheConfig = field(default_factory=CacheConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create config from dictionary."""
        return cls(
            cache=CacheConfig(**data.get("cache", {})),
            telemetry=TelemetryConfig(**data.get("telemetry", {})),
        )

    @classmethod
    def from_yaml(cls, path: str) -> Config:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str) -> Config:
        """Load config from JSON file."""
        import json
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

