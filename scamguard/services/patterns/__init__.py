"""Scam pattern registries."""

from scamguard.services.patterns.registry import (
    DEFAULT_PATTERNS,
    InMemoryPatternRegistry,
    JsonFilePatternRegistry,
)

__all__ = ["DEFAULT_PATTERNS", "InMemoryPatternRegistry", "JsonFilePatternRegistry"]
