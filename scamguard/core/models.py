"""
Pydantic models for ScamGuard application.

All data structures used throughout the application are defined here.
Models provide:
- Type safety
- Automatic validation
- JSON serialization/deserialization

Analysis results (ContractAnalysis, RedFlag, RiskScore) are frozen:
they are produced once per call and never mutated afterwards.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Red flag severity, from most to least serious."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# Display order for warnings (lower = shown first)
SEVERITY_ORDER: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


class Category(str, Enum):
    """Analysis dimension a red flag belongs to."""

    CONTRACT = "CONTRACT"
    TOKENOMICS = "TOKENOMICS"
    TEAM = "TEAM"
    COMMUNITY = "COMMUNITY"
    LIQUIDITY = "LIQUIDITY"


class Recommendation(str, Enum):
    """
    Final recommendation tier.

    Derived only from the overall score and the presence of
    CRITICAL flags.
    """

    AVOID = "AVOID"
    HIGH_RISK = "HIGH_RISK"
    MODERATE_RISK = "MODERATE_RISK"
    LOW_RISK = "LOW_RISK"
    SAFE = "SAFE"


class IndicatorKey(str, Enum):
    """
    Indicator names a scam pattern may reference.

    Closed set: any other name found in a registry is treated as
    non-matching (see RiskService._match_indicators).
    """

    IS_PROXY = "is_proxy"
    HAS_MINT = "has_mint"
    OWNERSHIP_NOT_RENOUNCED = "ownership_not_renounced"
    LP_NOT_LOCKED = "lp_not_locked"


class ContractSource(BaseModel):
    """Verified source payload as returned by a block explorer."""

    source_code: str = ""
    abi: str = ""
    contract_name: str = ""
    compiler_version: str = ""
    optimization_used: str = ""
    is_verified: bool = False


class ContractCreation(BaseModel):
    """Contract deployment metadata."""

    creator: str = "Unknown"
    tx_hash: str = ""
    timestamp: int = Field(default=0, ge=0)
    """Block timestamp in unix seconds (0 = unknown)"""


class ContractAnalysis(BaseModel):
    """
    Static facts extracted from a contract's verified source.

    Built once per scan. When the source is not verified every
    capability flag stays False and only creation metadata is filled.
    """

    verified: bool = False
    is_proxy: bool = False
    has_honeypot: bool = False
    has_mint_function: bool = False
    has_pause_function: bool = False
    has_blacklist: bool = False
    has_whitelist: bool = False

    buy_tax: int = Field(default=0, ge=0, le=100)
    """Buy tax in integer percent"""

    sell_tax: int = Field(default=0, ge=0, le=100)
    """Sell tax in integer percent"""

    ownership_renounced: bool = False

    lp_locked: bool = False
    """Always False until an LP-lock oracle is wired in"""

    max_wallet_limit: float | None = None
    max_tx_limit: float | None = None
    lp_lock_duration: int | None = None
    """Lock duration in seconds (None = unknown)"""

    creator_address: str = "Unknown"

    creation_timestamp: int = Field(default=0, ge=0)
    """Deployment time in unix seconds (0 = unknown)"""

    model_config = {"frozen": True}


class HolderInfo(BaseModel):
    """Single entry of the top-holders list."""

    address: str
    balance: str = "0"
    """Raw token balance as a decimal string"""

    percentage: float = Field(default=0.0, ge=0, le=100)


class TokenomicsAnalysis(BaseModel):
    """Supply and holder distribution."""

    total_supply: str = "0"
    circulating_supply: str = "0"

    top_holders: list[HolderInfo] = Field(default_factory=list)
    """Largest holders ordered by balance, descending"""

    holder_count: int = Field(default=0, ge=0)
    market_cap: float = Field(default=0.0, ge=0)
    fully_diluted_value: float = Field(default=0.0, ge=0)
    lp_pair_address: str | None = None

    lp_tokens: float | None = None
    """Liquidity pool value in the same unit as market_cap (None = unknown)"""


class TeamMember(BaseModel):
    """Publicly listed team member."""

    name: str
    role: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    verified: bool = False


class TeamAnalysis(BaseModel):
    """Team identity and history."""

    is_doxxed: bool = False
    members: list[TeamMember] = Field(default_factory=list)
    previous_projects: list[str] = Field(default_factory=list)
    scam_history: bool = False


class CommunityAnalysis(BaseModel):
    """Social signal."""

    twitter_followers: int = Field(default=0, ge=0)
    twitter_engagement: float = Field(default=0.0, ge=0)
    """Engagement rate in percent"""

    holder_growth_rate: float = 0.0
    sentiment_score: float = Field(default=0.0, ge=-1, le=1)
    bot_activity: float = Field(default=0.0, ge=0, le=100)
    """Estimated share of bot accounts in percent"""


class ProjectData(BaseModel):
    """Identity of the project being assessed."""

    id: str
    contract_address: str
    name: str
    symbol: str | None = None
    chain: str = "ethereum"
    discovered_at: int = 0
    description: str | None = None
    category: str | None = None
    website: str | None = None
    twitter: str | None = None
    telegram: str | None = None
    discord: str | None = None
    whitepaper: str | None = None
    github: str | None = None


class RedFlag(BaseModel):
    """A single detected risk indicator."""

    severity: Severity
    category: Category
    description: str
    evidence: str | None = None

    model_config = {"frozen": True}

    def render(self) -> str:
        """Render as a warning line: ``[SEVERITY] description``."""
        return f"[{self.severity.value}] {self.description}"


# Registry pattern types that don't name a red flag category directly
PATTERN_TYPE_CATEGORY: dict[str, Category] = {
    "SOCIAL": Category.COMMUNITY,
    "BEHAVIOR": Category.TOKENOMICS,
}


class ScamPattern(BaseModel):
    """
    A named, reusable scam signature from the pattern registry.

    JSON example:
    {
        "pattern_type": "CONTRACT",
        "description": "Hidden mint function in proxy contract",
        "indicators": ["is_proxy", "has_mint", "ownership_not_renounced"],
        "severity": "CRITICAL"
    }
    """

    pattern_type: str
    description: str
    name: str | None = None
    """Short label, e.g. "Honeypot"."""

    indicators: list[str] = Field(default_factory=list)
    severity: Severity
    examples: list[str] = Field(default_factory=list)
    """Known scam contract addresses"""

    model_config = {"frozen": True}

    @property
    def category(self) -> Category:
        """Red flag category this pattern reports under."""
        pattern_type = self.pattern_type.upper()
        if pattern_type in Category.__members__:
            return Category(pattern_type)
        return PATTERN_TYPE_CATEGORY.get(pattern_type, Category.CONTRACT)

    def unknown_indicators(self) -> list[str]:
        """Indicator names the engine does not recognize."""
        known = {key.value for key in IndicatorKey}
        return [name for name in self.indicators if name not in known]


class RiskScore(BaseModel):
    """
    Assessment result.

    0 = highest risk, 100 = lowest risk. Produced fresh per call.
    """

    overall: int = Field(ge=0, le=100)
    contract_safety: int = Field(ge=0, le=100)
    tokenomics: int = Field(ge=0, le=100)
    team_credibility: int = Field(ge=0, le=100)
    community_health: int = Field(ge=0, le=100)
    liquidity_risk: int = Field(ge=0, le=100)

    red_flags: list[RedFlag]
    """Flags sorted by severity (stable within one severity)"""

    warnings: list[str]
    """``[SEVERITY] description`` lines in the same order as red_flags"""

    recommendation: Recommendation

    analysis_timestamp: int
    """Unix milliseconds"""

    model_config = {"frozen": True}

    @property
    def has_critical(self) -> bool:
        return any(f.severity == Severity.CRITICAL for f in self.red_flags)


class SafetyCheckResult(BaseModel):
    """Cheap boolean gate distinct from the full numeric score."""

    is_safe: bool
    critical_issues: int = Field(ge=0)
    high_issues: int = Field(ge=0)
    warnings: list[str]
    """Descriptions of every contract red flag"""
