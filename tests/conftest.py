"""
Pytest configuration and fixtures.

Provides reusable test fixtures for:
- Fixed clock
- Sample contract analyses and optional dimension inputs
- Services wired with the fixed clock
- Test orchestrator
"""

import pytest

from scamguard.core.exceptions import PatternRegistryError
from scamguard.core.models import (
    CommunityAnalysis,
    ContractAnalysis,
    ContractCreation,
    ContractSource,
    HolderInfo,
    ProjectData,
    ScamPattern,
    TeamAnalysis,
    TeamMember,
    TokenomicsAnalysis,
)
from scamguard.services.contract.scanner import ContractScanner
from scamguard.services.contract_data.aggregator import ContractDataAggregator
from scamguard.services.orchestrator import AnalyzerOrchestrator
from scamguard.services.patterns.registry import InMemoryPatternRegistry
from scamguard.services.risk.service import RiskService

# 2023-11-14T22:13:20Z
NOW = 1_700_000_000
NOW_MS = NOW * 1000
DAY = 24 * 60 * 60


def fixed_clock() -> float:
    return float(NOW)


class StaticContractDataProvider:
    """Provider returning the same source/creation for every address."""

    def __init__(
        self,
        source: ContractSource | None,
        creation: ContractCreation | None = None,
    ):
        self.source = source
        self.creation = creation
        self.calls: list[tuple[str, str]] = []

    async def get_contract_source(self, address: str, chain: str = "ethereum"):
        self.calls.append((address, chain))
        return self.source

    async def get_contract_creation(self, address: str, chain: str = "ethereum"):
        return self.creation


class FailingPatternRegistry:
    """Registry whose backing store is unreachable."""

    def __init__(self, error: Exception):
        self.error = error

    async def get_patterns(self) -> list[ScamPattern]:
        raise self.error


# =============================================================================
# Contract Fixtures
# =============================================================================


@pytest.fixture
def honest_contract() -> ContractAnalysis:
    """Verified, renounced, LP locked, no dangerous capabilities."""
    return ContractAnalysis(
        verified=True,
        ownership_renounced=True,
        lp_locked=True,
        creator_address="0x1111111111111111111111111111111111111111",
        creation_timestamp=NOW - 365 * DAY,
    )


@pytest.fixture
def rug_contract() -> ContractAnalysis:
    """Classic rug setup: mintable, owned, unlocked LP, one day old."""
    return ContractAnalysis(
        verified=True,
        has_mint_function=True,
        ownership_renounced=False,
        lp_locked=False,
        creator_address="0x2222222222222222222222222222222222222222",
        creation_timestamp=NOW - DAY,
    )


@pytest.fixture
def unverified_contract() -> ContractAnalysis:
    return ContractAnalysis(verified=False)


# =============================================================================
# Optional Dimension Fixtures
# =============================================================================


@pytest.fixture
def clean_tokenomics() -> TokenomicsAnalysis:
    """Well distributed supply with deep liquidity."""
    return TokenomicsAnalysis(
        total_supply="1000000000",
        circulating_supply="900000000",
        top_holders=[
            HolderInfo(address=f"0x{i:040x}", balance="40000000", percentage=4.0)
            for i in range(1, 11)
        ],
        holder_count=5_000,
        market_cap=1_000_000,
        fully_diluted_value=1_100_000,
        lp_tokens=200_000,
    )


@pytest.fixture
def clean_team() -> TeamAnalysis:
    return TeamAnalysis(
        is_doxxed=True,
        members=[TeamMember(name="Alice", role="CEO", verified=True)],
        previous_projects=["EarlierProtocol"],
    )


@pytest.fixture
def clean_community() -> CommunityAnalysis:
    return CommunityAnalysis(
        twitter_followers=5_000,
        twitter_engagement=3.0,
        holder_growth_rate=0.1,
        sentiment_score=0.7,
        bot_activity=5,
    )


@pytest.fixture
def project() -> ProjectData:
    return ProjectData(
        id="ethereum:0xdac17f958d2ee523a2206206994597c13d831ec7",
        contract_address="0xdac17f958d2ee523a2206206994597c13d831ec7",
        name="TestToken",
        symbol="TEST",
        chain="ethereum",
    )


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def clean_source() -> ContractSource:
    return ContractSource(
        source_code="""
        pragma solidity ^0.8.20;
        contract Clean is ERC20, Ownable {
            constructor() ERC20("Clean", "CLN") { }
            function launch() external onlyOwner { renounceOwnership(); }
        }
        """,
        contract_name="Clean",
        is_verified=True,
    )


@pytest.fixture
def old_creation() -> ContractCreation:
    return ContractCreation(
        creator="0x3333333333333333333333333333333333333333",
        tx_hash="0xabc",
        timestamp=NOW - 90 * DAY,
    )


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def scanner() -> ContractScanner:
    """ContractScanner with a fixed clock."""
    return ContractScanner(clock=fixed_clock)


@pytest.fixture
def risk_service(scanner: ContractScanner) -> RiskService:
    """RiskService with a fixed clock and default thresholds."""
    return RiskService(scanner=scanner, clock=fixed_clock)


@pytest.fixture
def orchestrator_factory(scanner: ContractScanner, risk_service: RiskService):
    """Build an orchestrator around static contract data and a registry."""

    def build(
        source: ContractSource | None = None,
        creation: ContractCreation | None = None,
        registry=None,
        provider=None,
    ) -> AnalyzerOrchestrator:
        provider = provider or StaticContractDataProvider(source, creation)
        return AnalyzerOrchestrator(
            aggregator=ContractDataAggregator(provider, timeout=1.0),
            scanner=scanner,
            risk_service=risk_service,
            registry=registry or InMemoryPatternRegistry(),
        )

    return build


@pytest.fixture
def valid_address() -> str:
    """USDT contract address (lowercase)."""
    return "0xdac17f958d2ee523a2206206994597c13d831ec7"


@pytest.fixture
def checksummed_address() -> str:
    """USDT contract address (EIP-55)."""
    return "0xdAC17F958D2ee523a2206206994597C13D831ec7"


@pytest.fixture
def now() -> int:
    """Fixed reference time in unix seconds."""
    return NOW


@pytest.fixture
def failing_registry() -> FailingPatternRegistry:
    return FailingPatternRegistry(PatternRegistryError(technical_message="db down"))


@pytest.fixture
def clock():
    """Fixed clock returning NOW."""
    return fixed_clock


@pytest.fixture
def static_provider(
    clean_source: ContractSource, old_creation: ContractCreation
) -> StaticContractDataProvider:
    """Provider serving the clean source and recording lookups."""
    return StaticContractDataProvider(clean_source, old_creation)
