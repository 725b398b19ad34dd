"""
Risk assessment service.

Aggregates red flags from every analysis dimension and turns them into
a 0-100 RiskScore with a recommendation. This is the decision logic of
the whole application.

Key principles:
1. Pure function of its inputs, the pattern snapshot and the clock
2. Missing optional inputs fall back to neutral sub-scores (50)
3. Any CRITICAL flag forces AVOID regardless of the numeric score
4. Unknown registry indicators never match and never abort evaluation

Scoring:
- contract_safety   (30%): 100 - CONTRACT flags, +10 verified/renounced/LP locked
- tokenomics        (25%): 100 - TOKENOMICS flags
- team_credibility  (20%): 50 + identity bonuses - TEAM flags
- community_health  (15%): 50 + social bonuses - COMMUNITY flags
- liquidity_risk    (10%): 50 + 30 if LP locked - LIQUIDITY flags

Recommendation (first match wins):
- AVOID:         any CRITICAL flag OR overall < 30
- HIGH_RISK:     overall < 50
- MODERATE_RISK: overall < 70
- LOW_RISK:      overall < 85
- SAFE:          otherwise
"""

import logging
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from scamguard.core.models import (
    SEVERITY_ORDER,
    Category,
    CommunityAnalysis,
    ContractAnalysis,
    IndicatorKey,
    ProjectData,
    Recommendation,
    RedFlag,
    RiskScore,
    ScamPattern,
    Severity,
    TeamAnalysis,
    TokenomicsAnalysis,
)
from scamguard.services.contract.scanner import ContractScanner

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50

# Composite weights in percent (sum = 100)
WEIGHT_CONTRACT = 30
WEIGHT_TOKENOMICS = 25
WEIGHT_TEAM = 20
WEIGHT_COMMUNITY = 15
WEIGHT_LIQUIDITY = 10

# Per-dimension deductions by severity
DEFAULT_DEDUCTIONS: dict[Severity, int] = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
    Severity.LOW: 5,
}
TEAM_DEDUCTIONS: dict[Severity, int] = {
    Severity.CRITICAL: 40,
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
}
COMMUNITY_DEDUCTIONS: dict[Severity, int] = {
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
}
LIQUIDITY_DEDUCTIONS: dict[Severity, int] = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
}

# Indicator name -> predicate over ContractAnalysis
INDICATOR_CHECKS: dict[IndicatorKey, Callable[[ContractAnalysis], bool]] = {
    IndicatorKey.IS_PROXY: lambda c: c.is_proxy,
    IndicatorKey.HAS_MINT: lambda c: c.has_mint_function,
    IndicatorKey.OWNERSHIP_NOT_RENOUNCED: lambda c: not c.ownership_renounced,
    IndicatorKey.LP_NOT_LOCKED: lambda c: not c.lp_locked,
}


def clamp(score: int, low: int = 0, high: int = 100) -> int:
    """Clamp a score into [low, high]."""
    return max(low, min(high, score))


def deduct(
    score: int,
    flags: Iterable[RedFlag],
    category: Category,
    deductions: dict[Severity, int],
) -> int:
    """Subtract the deduction of every flag in ``category``."""
    for flag in flags:
        if flag.category == category:
            score -= deductions.get(flag.severity, 0)
    return score


@dataclass(frozen=True)
class RiskThresholds:
    """
    Threshold values for tokenomics, team and community red flags.

    Frozen dataclass ensures immutability.
    """

    # Holder concentration (percent of supply)
    top10_concentration: float = 50.0
    single_holder: float = 20.0
    min_holders: int = 100

    # LP value / market cap
    min_liquidity_ratio: float = 0.05

    # Community
    bot_activity: float = 50.0
    fake_follower_min_followers: int = 1000
    fake_follower_max_engagement: float = 0.5
    negative_sentiment: float = -0.5

    # Community bonuses
    positive_sentiment: float = 0.5
    strong_engagement: float = 2.0


class RiskService:
    """
    Service for calculating a project's risk score.

    Returns RiskScore containing:
    - overall: 0-100 (0 = highest risk)
    - five sub-scores
    - red_flags and warnings sorted by severity
    - recommendation

    The service holds no mutable state. Pattern snapshots are passed
    per call, so concurrent assessments never interfere.

    Usage:
        service = RiskService()
        score = service.assess(project, contract_analysis, patterns=patterns)
    """

    def __init__(
        self,
        scanner: ContractScanner | None = None,
        thresholds: RiskThresholds | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize with optional collaborators.

        Args:
            scanner: Renders contract flags (built from clock if None)
            thresholds: Custom risk thresholds (uses defaults if None)
            clock: Returns current unix time in seconds
        """
        self._clock = clock
        self._scanner = scanner or ContractScanner(clock=clock)
        self._thresholds = thresholds or RiskThresholds()

    def assess(
        self,
        project: ProjectData,
        contract: ContractAnalysis,
        tokenomics: TokenomicsAnalysis | None = None,
        team: TeamAnalysis | None = None,
        community: CommunityAnalysis | None = None,
        patterns: Sequence[ScamPattern] = (),
        now_ms: int | None = None,
    ) -> RiskScore:
        """
        Produce a RiskScore for one project.

        Args:
            project: Project identity (used for logging)
            contract: Scanner output (required)
            tokenomics: Holder distribution (optional)
            team: Team information (optional)
            community: Social metrics (optional)
            patterns: Scam pattern snapshot (empty = no registry)
            now_ms: Reference time in unix ms (defaults to the clock)

        Returns:
            RiskScore with sub-scores, sorted flags and recommendation
        """
        now = int(self._clock() * 1000) if now_ms is None else now_ms

        red_flags = self.collect_red_flags(
            contract, tokenomics, team, community, patterns, now
        )

        # Omitted dimensions stay neutral
        tokenomics_score = team_score = community_score = NEUTRAL_SCORE

        contract_safety = self._contract_safety_score(contract, red_flags)
        if tokenomics is not None:
            tokenomics_score = self._tokenomics_score(red_flags)
        if team is not None:
            team_score = self._team_score(team, red_flags)
        if community is not None:
            community_score = self._community_score(community, red_flags)
        liquidity_score = self._liquidity_score(contract, red_flags)

        overall = self.composite(
            contract_safety,
            tokenomics_score,
            team_score,
            community_score,
            liquidity_score,
        )
        recommendation = self.recommend(overall, red_flags)

        ordered = sorted(red_flags, key=lambda f: SEVERITY_ORDER[f.severity])

        logger.info(
            f"Assessed {project.symbol or project.name} "
            f"({project.contract_address[:10]}...): overall={overall}, "
            f"flags={len(ordered)}, {recommendation.value}"
        )

        return RiskScore(
            overall=overall,
            contract_safety=contract_safety,
            tokenomics=tokenomics_score,
            team_credibility=team_score,
            community_health=community_score,
            liquidity_risk=liquidity_score,
            red_flags=ordered,
            warnings=[f.render() for f in ordered],
            recommendation=recommendation,
            analysis_timestamp=now,
        )

    # =========================================================================
    # Red flags
    # =========================================================================

    def collect_red_flags(
        self,
        contract: ContractAnalysis,
        tokenomics: TokenomicsAnalysis | None = None,
        team: TeamAnalysis | None = None,
        community: CommunityAnalysis | None = None,
        patterns: Sequence[ScamPattern] = (),
        now_ms: int | None = None,
    ) -> list[RedFlag]:
        """Collect flags from every dimension in collection order."""
        flags = list(self._scanner.to_red_flags(contract, now_ms))

        if tokenomics is not None:
            flags.extend(self.tokenomics_red_flags(tokenomics))
        if team is not None:
            flags.extend(self.team_red_flags(team))
        if community is not None:
            flags.extend(self.community_red_flags(community))

        flags.extend(self.match_patterns(patterns, contract))
        return flags

    def tokenomics_red_flags(self, tokenomics: TokenomicsAnalysis) -> list[RedFlag]:
        t = self._thresholds
        flags: list[RedFlag] = []

        top10 = sum(h.percentage for h in tokenomics.top_holders[:10])
        if top10 > t.top10_concentration:
            flags.append(
                RedFlag(
                    severity=Severity.HIGH,
                    category=Category.TOKENOMICS,
                    description="High concentration in top 10 holders",
                    evidence=f"Top 10 holders own {top10:.2f}% of supply",
                )
            )

        if tokenomics.top_holders:
            largest = tokenomics.top_holders[0]
            if largest.percentage > t.single_holder:
                flags.append(
                    RedFlag(
                        severity=Severity.HIGH,
                        category=Category.TOKENOMICS,
                        description="Single address holds too much supply",
                        evidence=f"Largest holder owns {largest.percentage:.2f}% of supply",
                    )
                )

        if tokenomics.holder_count < t.min_holders:
            flags.append(
                RedFlag(
                    severity=Severity.MEDIUM,
                    category=Category.TOKENOMICS,
                    description="Very few token holders",
                    evidence=f"Only {tokenomics.holder_count} holders",
                )
            )

        if tokenomics.lp_tokens is not None and tokenomics.market_cap > 0:
            ratio = tokenomics.lp_tokens / tokenomics.market_cap
            if ratio < t.min_liquidity_ratio:
                flags.append(
                    RedFlag(
                        severity=Severity.HIGH,
                        category=Category.LIQUIDITY,
                        description="Very low liquidity relative to market cap",
                        evidence=f"Liquidity is only {ratio * 100:.2f}% of market cap",
                    )
                )

        return flags

    def team_red_flags(self, team: TeamAnalysis) -> list[RedFlag]:
        flags: list[RedFlag] = []

        if not team.is_doxxed:
            flags.append(
                RedFlag(
                    severity=Severity.MEDIUM,
                    category=Category.TEAM,
                    description="Anonymous team",
                    evidence="No verified team member identities",
                )
            )

        if team.scam_history:
            flags.append(
                RedFlag(
                    severity=Severity.CRITICAL,
                    category=Category.TEAM,
                    description="Team has history of scam projects",
                    evidence="Team members involved in previous rug pulls or scams",
                )
            )

        if not team.members:
            flags.append(
                RedFlag(
                    severity=Severity.HIGH,
                    category=Category.TEAM,
                    description="No team information available",
                    evidence="Cannot verify team members",
                )
            )

        return flags

    def community_red_flags(self, community: CommunityAnalysis) -> list[RedFlag]:
        t = self._thresholds
        flags: list[RedFlag] = []

        if community.bot_activity > t.bot_activity:
            flags.append(
                RedFlag(
                    severity=Severity.HIGH,
                    category=Category.COMMUNITY,
                    description="High bot activity detected",
                    evidence=f"{community.bot_activity:g}% estimated bot activity",
                )
            )

        # Many followers, little engagement = bought followers
        if (
            community.twitter_followers > t.fake_follower_min_followers
            and community.twitter_engagement < t.fake_follower_max_engagement
        ):
            flags.append(
                RedFlag(
                    severity=Severity.MEDIUM,
                    category=Category.COMMUNITY,
                    description="Low engagement relative to follower count",
                    evidence="Possible fake/bought followers",
                )
            )

        if community.sentiment_score < t.negative_sentiment:
            flags.append(
                RedFlag(
                    severity=Severity.MEDIUM,
                    category=Category.COMMUNITY,
                    description="Negative community sentiment",
                    evidence=f"Sentiment score: {community.sentiment_score:.2f}",
                )
            )

        return flags

    def match_patterns(
        self,
        patterns: Sequence[ScamPattern],
        contract: ContractAnalysis,
    ) -> list[RedFlag]:
        """
        Match registry patterns against the contract.

        A pattern fires when ANY of its indicators matches and yields
        at most one flag, with the matched indicator names as evidence.
        """
        flags: list[RedFlag] = []

        for pattern in patterns:
            matches = self._match_indicators(pattern, contract)
            if not matches:
                continue

            logger.debug(f"Pattern matched: {pattern.description} ({matches})")
            flags.append(
                RedFlag(
                    severity=pattern.severity,
                    category=pattern.category,
                    description=pattern.description,
                    evidence=", ".join(matches),
                )
            )

        return flags

    def _match_indicators(
        self,
        pattern: ScamPattern,
        contract: ContractAnalysis,
    ) -> list[str]:
        matches: list[str] = []

        for name in pattern.indicators:
            try:
                key = IndicatorKey(name)
            except ValueError:
                logger.warning(
                    f"Unknown indicator '{name}' in pattern "
                    f"'{pattern.description}', treated as non-matching"
                )
                continue

            if INDICATOR_CHECKS[key](contract) and key.value not in matches:
                matches.append(key.value)

        return matches

    # =========================================================================
    # Scores
    # =========================================================================

    def _contract_safety_score(
        self, contract: ContractAnalysis, flags: list[RedFlag]
    ) -> int:
        score = deduct(100, flags, Category.CONTRACT, DEFAULT_DEDUCTIONS)

        # Bonus points for good practices
        if contract.verified:
            score += 10
        if contract.ownership_renounced:
            score += 10
        if contract.lp_locked:
            score += 10

        return clamp(score)

    def _tokenomics_score(self, flags: list[RedFlag]) -> int:
        return clamp(deduct(100, flags, Category.TOKENOMICS, DEFAULT_DEDUCTIONS))

    def _team_score(self, team: TeamAnalysis, flags: list[RedFlag]) -> int:
        score = NEUTRAL_SCORE

        if team.is_doxxed:
            score += 30
        if team.members:
            score += 10
        if team.previous_projects:
            score += 10

        return clamp(deduct(score, flags, Category.TEAM, TEAM_DEDUCTIONS))

    def _community_score(
        self, community: CommunityAnalysis, flags: list[RedFlag]
    ) -> int:
        t = self._thresholds
        score = NEUTRAL_SCORE

        if community.holder_growth_rate > 0:
            score += 10
        if community.sentiment_score > t.positive_sentiment:
            score += 10
        if community.twitter_engagement > t.strong_engagement:
            score += 10

        return clamp(deduct(score, flags, Category.COMMUNITY, COMMUNITY_DEDUCTIONS))

    def _liquidity_score(
        self, contract: ContractAnalysis, flags: list[RedFlag]
    ) -> int:
        score = NEUTRAL_SCORE
        if contract.lp_locked:
            score += 30
        return clamp(deduct(score, flags, Category.LIQUIDITY, LIQUIDITY_DEDUCTIONS))

    @staticmethod
    def composite(
        contract_safety: int,
        tokenomics: int,
        team_credibility: int,
        community_health: int,
        liquidity_risk: int,
    ) -> int:
        """
        Weighted overall score, rounded half up.

        Integer arithmetic keeps x.5 results exact.
        """
        total = (
            contract_safety * WEIGHT_CONTRACT
            + tokenomics * WEIGHT_TOKENOMICS
            + team_credibility * WEIGHT_TEAM
            + community_health * WEIGHT_COMMUNITY
            + liquidity_risk * WEIGHT_LIQUIDITY
        )
        return clamp((total + 50) // 100)

    @staticmethod
    def recommend(overall: int, flags: Iterable[RedFlag]) -> Recommendation:
        """Map overall score and flags to a recommendation tier."""
        has_critical = any(f.severity == Severity.CRITICAL for f in flags)

        if has_critical or overall < 30:
            return Recommendation.AVOID
        if overall < 50:
            return Recommendation.HIGH_RISK
        if overall < 70:
            return Recommendation.MODERATE_RISK
        if overall < 85:
            return Recommendation.LOW_RISK
        return Recommendation.SAFE
