"""
Core module - models, protocols, and exceptions.

This module contains the fundamental building blocks of the application:
- Data models (Pydantic)
- Protocol definitions (interfaces)
- Custom exceptions
"""

from scamguard.core.exceptions import (
    DataFetchError,
    PatternRegistryError,
    ScamGuardError,
    ValidationError,
)
from scamguard.core.models import (
    Category,
    CommunityAnalysis,
    ContractAnalysis,
    ContractCreation,
    ContractSource,
    HolderInfo,
    IndicatorKey,
    ProjectData,
    Recommendation,
    RedFlag,
    RiskScore,
    SafetyCheckResult,
    ScamPattern,
    Severity,
    TeamAnalysis,
    TeamMember,
    TokenomicsAnalysis,
)
from scamguard.core.protocols import ContractDataProvider, PatternRegistry

__all__ = [
    # Exceptions
    "ScamGuardError",
    "ValidationError",
    "DataFetchError",
    "PatternRegistryError",
    # Enums
    "Severity",
    "Category",
    "Recommendation",
    "IndicatorKey",
    # Models
    "ContractSource",
    "ContractCreation",
    "ContractAnalysis",
    "HolderInfo",
    "TokenomicsAnalysis",
    "TeamMember",
    "TeamAnalysis",
    "CommunityAnalysis",
    "ProjectData",
    "RedFlag",
    "ScamPattern",
    "RiskScore",
    "SafetyCheckResult",
    # Protocols
    "ContractDataProvider",
    "PatternRegistry",
]
