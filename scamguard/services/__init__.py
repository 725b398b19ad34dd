"""
Services module - business logic layer.

Contains all services and the ServiceFactory for dependency injection.
"""

from scamguard.services.factory import ServiceFactory
from scamguard.services.orchestrator import AnalyzerOrchestrator

__all__ = ["ServiceFactory", "AnalyzerOrchestrator"]
