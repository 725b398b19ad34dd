"""
Scam pattern registries.

A registry hands out a read-only snapshot of known scam signatures.
The snapshot is passed into RiskService.assess() explicitly; the engine
never reads a registry on its own.

Registries:
- InMemoryPatternRegistry: fixed list (defaults to DEFAULT_PATTERNS)
- JsonFilePatternRegistry: JSON array on disk
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from scamguard.core.exceptions import PatternRegistryError
from scamguard.core.models import ScamPattern, Severity

logger = logging.getLogger(__name__)

_PATTERN_LIST = TypeAdapter(list[ScamPattern])


# Seed patterns. Indicators outside IndicatorKey are kept as published
# and simply never match.
DEFAULT_PATTERNS: tuple[ScamPattern, ...] = (
    ScamPattern(
        name="Honeypot",
        pattern_type="CONTRACT",
        description="Honeypot - Can buy but cannot sell",
        indicators=["no_sell_function", "transfer_restrictions", "blacklist_on_sell"],
        severity=Severity.CRITICAL,
    ),
    ScamPattern(
        name="Hidden mint in proxy",
        pattern_type="CONTRACT",
        description="Hidden mint function in proxy contract",
        indicators=["is_proxy", "has_mint", "ownership_not_renounced"],
        severity=Severity.CRITICAL,
    ),
    ScamPattern(
        name="Top-holder concentration",
        pattern_type="TOKENOMICS",
        description="Extreme concentration in top holders",
        indicators=["top_10_holders > 50%", "team_allocation > 30%"],
        severity=Severity.HIGH,
    ),
    ScamPattern(
        name="Unlocked liquidity with high cap",
        pattern_type="TOKENOMICS",
        description="Unlocked liquidity with high market cap",
        indicators=["lp_not_locked", "market_cap > 1000000"],
        severity=Severity.HIGH,
    ),
    ScamPattern(
        name="Anonymous team",
        pattern_type="TEAM",
        description="Anonymous team with no history",
        indicators=["team_anonymous", "no_previous_projects", "no_linkedin"],
        severity=Severity.MEDIUM,
    ),
    ScamPattern(
        name="Fake team",
        pattern_type="TEAM",
        description="Fake team members using stock photos",
        indicators=["fake_profile_images", "copied_bios"],
        severity=Severity.CRITICAL,
    ),
    ScamPattern(
        name="Bought followers",
        pattern_type="SOCIAL",
        description="Sudden follower spike indicating bought followers",
        indicators=["follower_spike > 1000%", "low_engagement_rate"],
        severity=Severity.MEDIUM,
    ),
    ScamPattern(
        name="Sybil wallets",
        pattern_type="BEHAVIOR",
        description="Multiple wallets controlled by same entity (Sybil)",
        indicators=["similar_funding_source", "coordinated_trading", "same_gas_patterns"],
        severity=Severity.HIGH,
    ),
)


class InMemoryPatternRegistry:
    """
    Registry backed by a fixed list of patterns.

    Usage:
        registry = InMemoryPatternRegistry()
        patterns = await registry.get_patterns()
    """

    def __init__(self, patterns: Iterable[ScamPattern] | None = None):
        self._patterns = tuple(DEFAULT_PATTERNS if patterns is None else patterns)

    async def get_patterns(self) -> list[ScamPattern]:
        return list(self._patterns)


class JsonFilePatternRegistry:
    """
    Registry backed by a JSON file.

    File format: array of objects with pattern_type, description,
    indicators, severity and optionally name and examples. The file is
    read on every call so edits are picked up without a restart.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    async def get_patterns(self) -> list[ScamPattern]:
        """
        Load patterns from disk.

        Raises:
            PatternRegistryError: If the file is missing or malformed
        """
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            patterns = _PATTERN_LIST.validate_python(raw)
        except OSError as e:
            raise PatternRegistryError(
                technical_message=f"Cannot read pattern file {self._path}: {e}",
            ) from e
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise PatternRegistryError(
                technical_message=f"Malformed pattern file {self._path}: {e}",
            ) from e

        logger.debug(f"Loaded {len(patterns)} scam patterns from {self._path}")
        return patterns
