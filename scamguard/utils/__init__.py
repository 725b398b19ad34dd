"""Utility functions."""

from scamguard.utils.formatters import format_risk_score, format_safety_check
from scamguard.utils.validators import validate_evm_address

__all__ = ["validate_evm_address", "format_risk_score", "format_safety_check"]
