"""Contract data services."""

from scamguard.services.contract_data.aggregator import ContractDataAggregator
from scamguard.services.contract_data.mock_provider import MockContractDataProvider

__all__ = ["ContractDataAggregator", "MockContractDataProvider"]
