"""
Wiring of ScamGuard services from Settings.

USE_MOCK_SERVICES picks the contract data source (deterministic mock or
Etherscan). PATTERNS_FILE picks the scam pattern registry. Scanner and
risk service are identical in both modes.
"""

import logging

from scamguard.config.settings import Settings
from scamguard.core.protocols import ContractDataProvider, PatternRegistry
from scamguard.services.contract.scanner import ContractScanner
from scamguard.services.contract_data.aggregator import ContractDataAggregator
from scamguard.services.contract_data.etherscan_provider import (
    EtherscanContractDataProvider,
)
from scamguard.services.contract_data.mock_provider import MockContractDataProvider
from scamguard.services.orchestrator import AnalyzerOrchestrator
from scamguard.services.patterns.registry import (
    InMemoryPatternRegistry,
    JsonFilePatternRegistry,
)
from scamguard.services.risk.service import RiskService

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Builds providers, registries and the orchestrator.

    Usage:
        orchestrator = ServiceFactory(get_settings()).create_orchestrator()
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        source = "mock contracts" if settings.use_mock_services else "Etherscan"
        logger.info(f"ServiceFactory using {source}")

    def create_contract_data_provider(self) -> ContractDataProvider:
        if self._settings.use_mock_services:
            logger.debug("Creating MockContractDataProvider")
            return MockContractDataProvider()

        logger.debug("Creating EtherscanContractDataProvider")
        return EtherscanContractDataProvider(
            api_key=self._settings.etherscan_api_key,
            timeout=self._settings.api_timeout_seconds,
        )

    def create_contract_data_aggregator(self) -> ContractDataAggregator:
        return ContractDataAggregator(
            self.create_contract_data_provider(),
            timeout=self._settings.api_timeout_seconds,
        )

    def create_pattern_registry(self) -> PatternRegistry:
        """JSON-file registry if PATTERNS_FILE is set, built-in patterns otherwise."""
        if self._settings.patterns_file:
            logger.debug(f"Creating JsonFilePatternRegistry({self._settings.patterns_file})")
            return JsonFilePatternRegistry(self._settings.patterns_file)

        logger.debug("Creating InMemoryPatternRegistry with default patterns")
        return InMemoryPatternRegistry()

    def create_scanner(self) -> ContractScanner:
        return ContractScanner()

    def create_risk_service(self, scanner: ContractScanner | None = None) -> RiskService:
        logger.debug("Creating RiskService")
        return RiskService(scanner=scanner)

    def create_orchestrator(self) -> AnalyzerOrchestrator:
        """Build the orchestrator with one scanner shared by scan and scoring."""
        scanner = self.create_scanner()
        return AnalyzerOrchestrator(
            aggregator=self.create_contract_data_aggregator(),
            scanner=scanner,
            risk_service=self.create_risk_service(scanner),
            registry=self.create_pattern_registry(),
        )
