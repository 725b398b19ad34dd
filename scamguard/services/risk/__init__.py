"""Risk scoring."""

from scamguard.services.risk.service import RiskService, RiskThresholds

__all__ = ["RiskService", "RiskThresholds"]
