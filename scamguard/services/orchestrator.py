"""
Analyzer orchestrator.

Coordinates the assessment workflow without containing business logic.
This is the entry point for contract analysis - it calls the services
in the correct order and returns the final result.

Workflow:
1. ContractDataAggregator -> fetch source + creation metadata
2. ContractScanner -> build ContractAnalysis
3. PatternRegistry -> read-only pattern snapshot
4. RiskService -> RiskScore
"""

import logging

from scamguard.core.exceptions import PatternRegistryError, ValidationError
from scamguard.core.models import (
    CommunityAnalysis,
    ContractAnalysis,
    ProjectData,
    RiskScore,
    SafetyCheckResult,
    ScamPattern,
    TeamAnalysis,
    TokenomicsAnalysis,
)
from scamguard.core.protocols import PatternRegistry
from scamguard.services.contract.scanner import ContractScanner
from scamguard.services.contract_data.aggregator import ContractDataAggregator
from scamguard.services.risk.service import RiskService
from scamguard.utils.validators import validate_evm_address

logger = logging.getLogger(__name__)


class AnalyzerOrchestrator:
    """
    Orchestrates the contract assessment workflow.

    This class coordinates between services but contains NO business logic.
    Each step is delegated to a specialized service:
    - Data fetching -> ContractDataAggregator
    - Source analysis -> ContractScanner
    - Pattern snapshot -> PatternRegistry
    - Scoring -> RiskService

    Usage:
        orchestrator = AnalyzerOrchestrator(aggregator, scanner, risk_service, registry)
        score = await orchestrator.assess_project(project)
    """

    def __init__(
        self,
        aggregator: ContractDataAggregator,
        scanner: ContractScanner,
        risk_service: RiskService,
        registry: PatternRegistry,
    ):
        """
        Initialize orchestrator with all required services.

        Args:
            aggregator: Service for fetching contract data
            scanner: Static source analyzer
            risk_service: Service for calculating risk score
            registry: Scam pattern store
        """
        self._aggregator = aggregator
        self._scanner = scanner
        self._risk_service = risk_service
        self._registry = registry

    async def analyze_contract(
        self, address: str, chain: str = "ethereum"
    ) -> ContractAnalysis:
        """
        Fetch and scan one contract.

        Raises:
            ValidationError: If the address is malformed
            DataFetchError: If contract data cannot be fetched
        """
        is_valid, error = validate_evm_address(address)
        if not is_valid:
            raise ValidationError(
                message=f"Invalid contract address: {error}",
                technical_message=f"Rejected address {address!r}: {error}",
            )

        source, creation = await self._aggregator.get_contract_data(address, chain)
        return self._scanner.scan(source, creation)

    async def quick_safety_check(
        self, address: str, chain: str = "ethereum"
    ) -> SafetyCheckResult:
        """
        Cheap pass/fail gate based on contract flags only.

        Raises:
            ValidationError: If the address is malformed
            DataFetchError: If contract data cannot be fetched
        """
        analysis = await self.analyze_contract(address, chain)
        result = self._scanner.quick_check(analysis)

        logger.info(
            f"Quick check {address[:10]}...: safe={result.is_safe}, "
            f"critical={result.critical_issues}, high={result.high_issues}"
        )
        return result

    async def get_pattern_snapshot(self) -> list[ScamPattern]:
        """
        Read the pattern registry.

        A failing registry degrades to an empty snapshot; the rest of
        the score still computes.
        """
        try:
            return await self._registry.get_patterns()
        except PatternRegistryError as e:
            logger.warning(f"Pattern registry unavailable: {e.technical_message}")
        except Exception as e:
            logger.exception(f"Unexpected pattern registry error: {e}")
        return []

    async def assess_project(
        self,
        project: ProjectData,
        tokenomics: TokenomicsAnalysis | None = None,
        team: TeamAnalysis | None = None,
        community: CommunityAnalysis | None = None,
    ) -> RiskScore:
        """
        Perform a full risk assessment.

        Args:
            project: Project identity (contract address and chain)
            tokenomics: Holder distribution, if already fetched
            team: Team information, if already fetched
            community: Social metrics, if already fetched

        Returns:
            RiskScore

        Raises:
            ValidationError: If the contract address is malformed
            DataFetchError: If contract data cannot be fetched
        """
        logger.info(f"Starting assessment for {project.name} ({project.chain})")

        contract = await self.analyze_contract(project.contract_address, project.chain)
        patterns = await self.get_pattern_snapshot()

        return self._risk_service.assess(
            project,
            contract,
            tokenomics=tokenomics,
            team=team,
            community=community,
            patterns=patterns,
        )
