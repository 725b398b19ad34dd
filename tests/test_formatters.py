"""
Tests for terminal report formatters.
"""

from scamguard.core.models import (
    ContractAnalysis,
    ProjectData,
    Recommendation,
    SafetyCheckResult,
)
from scamguard.services.patterns.registry import DEFAULT_PATTERNS
from scamguard.services.risk.service import RiskService
from scamguard.utils.formatters import (
    format_recommendation_badge,
    format_risk_score,
    format_safety_check,
    format_score_bar,
)


class TestScoreBar:
    def test_half(self) -> None:
        assert format_score_bar(50) == "[##########----------]  50"

    def test_bounds(self) -> None:
        assert format_score_bar(0, width=4) == "[----]   0"
        assert format_score_bar(100, width=4) == "[####] 100"


class TestRiskScoreReport:
    """Tests for format_risk_score."""

    def test_clean_report(
        self,
        risk_service: RiskService,
        project: ProjectData,
        honest_contract: ContractAnalysis,
        checksummed_address: str,
    ) -> None:
        score = risk_service.assess(project, honest_contract)
        report = format_risk_score(score, project)

        assert report.startswith("TestToken (TEST) on ethereum")
        assert checksummed_address in report
        assert "overall 68/100" in report
        assert "No red flags detected." in report

    def test_warnings_listed_most_severe_first(
        self,
        risk_service: RiskService,
        project: ProjectData,
        rug_contract: ContractAnalysis,
    ) -> None:
        score = risk_service.assess(project, rug_contract, patterns=DEFAULT_PATTERNS)
        report = format_risk_score(score)

        assert report.startswith("🚫 Avoid")
        warnings = report.split("Warnings:\n", 1)[1].splitlines()
        assert warnings[0] == "  • [CRITICAL] Hidden mint function in proxy contract"
        assert len(warnings) == len(score.warnings)

    def test_every_sub_score_is_shown(
        self,
        risk_service: RiskService,
        project: ProjectData,
        honest_contract: ContractAnalysis,
    ) -> None:
        report = format_risk_score(risk_service.assess(project, honest_contract))

        for label in ("Contract safety", "Tokenomics", "Team credibility", "Community health", "Liquidity"):
            assert label in report


class TestSafetyCheckReport:
    def test_safe(self, valid_address: str) -> None:
        result = SafetyCheckResult(is_safe=True, critical_issues=0, high_issues=0, warnings=[])
        report = format_safety_check(result, valid_address)

        assert report.splitlines() == [
            valid_address,
            "✅ No critical or high issues (critical: 0, high: 0)",
        ]

    def test_unsafe_lists_warnings(self, valid_address: str) -> None:
        result = SafetyCheckResult(
            is_safe=False,
            critical_issues=1,
            high_issues=0,
            warnings=["Contract source code is not verified"],
        )
        report = format_safety_check(result, valid_address)

        assert "Issues found (critical: 1, high: 0)" in report
        assert report.endswith("  • Contract source code is not verified")


def test_recommendation_badges() -> None:
    assert format_recommendation_badge(Recommendation.SAFE) == "✅ Safe"
    assert format_recommendation_badge(Recommendation.HIGH_RISK) == "🔴 High risk"
