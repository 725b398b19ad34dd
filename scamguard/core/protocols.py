"""
Interfaces for the collaborators around the risk engine.

The risk engine never calls these directly. The orchestrator fetches
data and a pattern snapshot through them, then hands plain models
to the engine.
"""

from typing import Protocol, runtime_checkable

from scamguard.core.models import ContractCreation, ContractSource, ScamPattern


@runtime_checkable
class ContractDataProvider(Protocol):
    """
    Protocol for contract data providers.

    Implementations fetch verified source and deployment metadata from:
    - Etherscan-compatible explorers (production)
    - MockContractDataProvider (development)
    """

    async def get_contract_source(
        self, address: str, chain: str = "ethereum"
    ) -> ContractSource | None:
        """
        Fetch verified source code.

        Args:
            address: Contract address (validated)
            chain: Chain name (ethereum, bsc, polygon, ...)

        Returns:
            ContractSource, or None if the explorer has no record

        Raises:
            DataFetchError: If fetching fails
        """
        ...

    async def get_contract_creation(
        self, address: str, chain: str = "ethereum"
    ) -> ContractCreation | None:
        """
        Fetch deployment metadata (creator and block timestamp).

        Returns:
            ContractCreation, or None if unknown

        Raises:
            DataFetchError: If fetching fails
        """
        ...


@runtime_checkable
class PatternRegistry(Protocol):
    """
    Protocol for scam pattern stores.

    Returns a read-only snapshot. The snapshot is passed explicitly
    into RiskService.assess(), so the engine holds no registry state.
    """

    async def get_patterns(self) -> list[ScamPattern]:
        """
        Return every known scam pattern.

        Raises:
            PatternRegistryError: If the store cannot be read
        """
        ...
