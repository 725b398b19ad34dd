"""
Contract data aggregator service.

Responsible for fetching contract source and creation metadata from a
provider under a single timeout.

Source and creation are fetched concurrently. Anything a provider raises
that is not a ScamGuardError is wrapped in DataFetchError.
"""

import asyncio
import logging

from scamguard.core.exceptions import DataFetchError, ScamGuardError
from scamguard.core.models import ContractCreation, ContractSource
from scamguard.core.protocols import ContractDataProvider

logger = logging.getLogger(__name__)

# Seconds for source + creation together
DEFAULT_TIMEOUT = 10.0


class ContractDataAggregator:
    """
    Fetches everything the scanner needs for one contract.

    Does not analyze source or calculate risk.
    """

    def __init__(self, provider: ContractDataProvider, timeout: float = DEFAULT_TIMEOUT):
        self._provider = provider
        self._timeout = timeout

    async def get_contract_data(
        self, address: str, chain: str = "ethereum"
    ) -> tuple[ContractSource | None, ContractCreation | None]:
        """
        Fetch source and creation metadata.

        Args:
            address: Validated contract address
            chain: Chain name

        Returns:
            (source, creation); either may be None if the explorer
            has no record

        Raises:
            DataFetchError: If fetching fails or times out
        """
        logger.info(f"Fetching contract data for: {address[:10]}... on {chain}")

        try:
            source, creation = await asyncio.wait_for(
                asyncio.gather(
                    self._provider.get_contract_source(address, chain),
                    self._provider.get_contract_creation(address, chain),
                ),
                timeout=self._timeout,
            )

        except TimeoutError:
            logger.error(f"Provider timeout after {self._timeout}s for {address[:10]}")
            raise DataFetchError(
                message="The request took too long. Please try again later.",
                technical_message=f"Provider timeout after {self._timeout}s",
            ) from None

        except ScamGuardError:
            raise

        except Exception as e:
            logger.exception(f"Unexpected error fetching contract data: {e}")
            raise DataFetchError(
                technical_message=f"Provider error: {type(e).__name__}: {e}",
            ) from e

        logger.debug(
            f"Contract data received: verified={bool(source and source.is_verified)}, "
            f"created={creation.timestamp if creation else 'unknown'}"
        )
        return source, creation
