"""
Output formatters for terminal reports.

Converts RiskScore and SafetyCheckResult into readable text blocks.
"""

from scamguard.core.models import (
    ProjectData,
    Recommendation,
    RiskScore,
    SafetyCheckResult,
)
from scamguard.utils.validators import is_valid_evm_address, normalize_address

# Emoji mappings for recommendations
RECOMMENDATION_EMOJI = {
    Recommendation.AVOID: "🚫",
    Recommendation.HIGH_RISK: "🔴",
    Recommendation.MODERATE_RISK: "🟡",
    Recommendation.LOW_RISK: "🟢",
    Recommendation.SAFE: "✅",
}

RECOMMENDATION_LABEL = {
    Recommendation.AVOID: "Avoid",
    Recommendation.HIGH_RISK: "High risk",
    Recommendation.MODERATE_RISK: "Moderate risk",
    Recommendation.LOW_RISK: "Low risk",
    Recommendation.SAFE: "Safe",
}

SUB_SCORES = (
    ("Contract safety", "contract_safety"),
    ("Tokenomics", "tokenomics"),
    ("Team credibility", "team_credibility"),
    ("Community health", "community_health"),
    ("Liquidity", "liquidity_risk"),
)


def format_score_bar(score: int, width: int = 20) -> str:
    """
    Render a 0-100 score as a fixed-width bar.

    Example: ``[##########----------]  50``
    """
    filled = round(score / 100 * width)
    return f"[{'#' * filled}{'-' * (width - filled)}] {score:>3}"


def format_risk_score(score: RiskScore, project: ProjectData | None = None) -> str:
    """
    Format a full assessment as a text report.

    Includes:
    - Project header (if given)
    - Recommendation badge and overall score
    - Sub-score bars
    - Warnings, most severe first

    Args:
        score: Assessment result
        project: Project identity for the header

    Returns:
        Multi-line report
    """
    lines: list[str] = []

    if project is not None:
        address = project.contract_address
        if is_valid_evm_address(address):
            address = normalize_address(address)
        title = f"{project.name} ({project.symbol})" if project.symbol else project.name
        lines.append(f"{title} on {project.chain}")
        lines.append(address)
        lines.append("")

    lines.append(f"{format_recommendation_badge(score.recommendation)}  overall {score.overall}/100")
    lines.append("")

    for label, field in SUB_SCORES:
        lines.append(f"{label:<17} {format_score_bar(getattr(score, field))}")

    lines.append("")
    if score.warnings:
        lines.append("Warnings:")
        lines.extend(f"  • {warning}" for warning in score.warnings)
    else:
        lines.append("No red flags detected.")

    return "\n".join(lines)


def format_safety_check(result: SafetyCheckResult, address: str) -> str:
    """Format a quick safety check as a short report."""
    verdict = "✅ No critical or high issues" if result.is_safe else "⚠️ Issues found"
    lines = [
        address,
        f"{verdict} (critical: {result.critical_issues}, high: {result.high_issues})",
    ]
    lines.extend(f"  • {warning}" for warning in result.warnings)
    return "\n".join(lines)


def format_recommendation_badge(recommendation: Recommendation) -> str:
    """
    Format a compact recommendation badge.

    Returns:
        Formatted badge like "🚫 Avoid"
    """
    emoji = RECOMMENDATION_EMOJI[recommendation]
    label = RECOMMENDATION_LABEL[recommendation]
    return f"{emoji} {label}"
