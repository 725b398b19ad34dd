"""
Etherscan contract data provider.

Fetches verified source and deployment metadata from the Etherscan V2
multichain API. This is the real implementation used in production.

Responsibilities:
1. Fetch verified source via module=contract&action=getsourcecode
2. Resolve creator and deployment block timestamp
   (getcontractcreation -> eth_getTransactionByHash -> eth_getBlockByNumber)
3. Normalize responses into ContractSource / ContractCreation

NO business logic, NO risk calculation.
"""

import logging
from typing import Any

import aiohttp

from scamguard.core.exceptions import DataFetchError, ValidationError
from scamguard.core.models import ContractCreation, ContractSource

logger = logging.getLogger(__name__)

# Etherscan V2 endpoint (one URL for every supported chain)
ETHERSCAN_API_URL = "https://api.etherscan.io/v2/api"

DEFAULT_TIMEOUT = 10.0

CHAIN_IDS = {
    "ethereum": 1,
    "optimism": 10,
    "bsc": 56,
    "polygon": 137,
    "base": 8453,
    "arbitrum": 42161,
}


class EtherscanContractDataProvider:
    """
    Real implementation of ContractDataProvider using Etherscan.

    An explorer answering "not found" yields None. Transport failures
    (HTTP errors, timeouts) raise DataFetchError so they are never
    mistaken for an unverified contract.
    """

    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize Etherscan provider.

        Args:
            api_key: Etherscan API key
            timeout: Request timeout in seconds
        """
        self._api_key = api_key
        self._timeout = timeout

    async def get_contract_source(
        self, address: str, chain: str = "ethereum"
    ) -> ContractSource | None:
        """
        Fetch verified source code.

        Returns:
            ContractSource (is_verified=False when the explorer has no
            source), or None if the explorer returned no record

        Raises:
            DataFetchError: On HTTP or network failure
            ValidationError: On unsupported chain
        """
        logger.info(f"Fetching contract source from Etherscan: {address[:10]}...")

        async with aiohttp.ClientSession() as session:
            data = await self._call(
                session,
                chain,
                {"module": "contract", "action": "getsourcecode", "address": address},
            )

        result = self._first_result(data)
        if result is None:
            logger.warning(f"getsourcecode returned no result for {address[:10]}")
            return None

        source_code = result.get("SourceCode") or ""
        return ContractSource(
            source_code=source_code,
            abi=result.get("ABI") or "",
            contract_name=result.get("ContractName") or "",
            compiler_version=result.get("CompilerVersion") or "",
            optimization_used=result.get("OptimizationUsed") or "",
            is_verified=source_code != "",
        )

    async def get_contract_creation(
        self, address: str, chain: str = "ethereum"
    ) -> ContractCreation | None:
        """
        Fetch creator address and deployment timestamp.

        The timestamp lookup needs two extra calls; if either fails the
        creation is still returned with timestamp 0 (unknown).

        Raises:
            DataFetchError: On HTTP or network failure of the first call
            ValidationError: On unsupported chain
        """
        async with aiohttp.ClientSession() as session:
            data = await self._call(
                session,
                chain,
                {
                    "module": "contract",
                    "action": "getcontractcreation",
                    "contractaddresses": address,
                },
            )

            result = self._first_result(data)
            if result is None:
                logger.warning(f"getcontractcreation returned no result for {address[:10]}")
                return None

            creator = result.get("contractCreator") or "Unknown"
            tx_hash = result.get("txHash") or ""

            try:
                timestamp = await self._fetch_block_timestamp(session, chain, tx_hash)
            except DataFetchError as e:
                logger.warning(f"Creation timestamp lookup failed: {e}")
                timestamp = 0

        return ContractCreation(creator=creator, tx_hash=tx_hash, timestamp=timestamp)

    async def _fetch_block_timestamp(
        self,
        session: aiohttp.ClientSession,
        chain: str,
        tx_hash: str,
    ) -> int:
        """Resolve tx hash -> block number -> block timestamp (unix seconds)."""
        if not tx_hash:
            return 0

        tx_data = await self._call(
            session,
            chain,
            {"module": "proxy", "action": "eth_getTransactionByHash", "txhash": tx_hash},
        )
        block_number = (tx_data.get("result") or {}).get("blockNumber")
        if not block_number:
            return 0

        block_data = await self._call(
            session,
            chain,
            {
                "module": "proxy",
                "action": "eth_getBlockByNumber",
                "tag": block_number,
                "boolean": "false",
            },
        )
        raw_timestamp = (block_data.get("result") or {}).get("timestamp") or "0x0"

        try:
            return int(raw_timestamp, 16)
        except ValueError:
            logger.warning(f"Unparseable block timestamp: {raw_timestamp}")
            return 0

    async def _call(
        self,
        session: aiohttp.ClientSession,
        chain: str,
        params: dict[str, str],
    ) -> dict[str, Any]:
        """
        Perform one GET against the Etherscan API.

        Raises:
            DataFetchError: On non-200 status, timeout or network error
        """
        chain_id = CHAIN_IDS.get(chain.lower())
        if chain_id is None:
            raise ValidationError(
                message=f"Unsupported chain: {chain}",
                technical_message=f"No Etherscan chain id for '{chain}'",
            )

        query = {"chainid": str(chain_id), **params, "apikey": self._api_key}
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        action = params.get("action", "?")

        try:
            async with session.get(
                ETHERSCAN_API_URL, params=query, timeout=timeout
            ) as resp:
                if resp.status != 200:
                    raise DataFetchError(
                        technical_message=f"Etherscan {action} returned {resp.status}",
                    )
                return await resp.json(content_type=None)

        except DataFetchError:
            raise
        except TimeoutError:
            raise DataFetchError(
                message="The request took too long. Please try again later.",
                technical_message=f"Etherscan {action} timeout after {self._timeout}s",
            ) from None
        except (aiohttp.ClientError, ValueError) as e:
            raise DataFetchError(
                technical_message=f"Etherscan {action} error: {type(e).__name__}: {e}",
            ) from e

    @staticmethod
    def _first_result(data: dict[str, Any]) -> dict[str, Any] | None:
        """First element of ``result`` for status "1" responses."""
        if data.get("status") != "1":
            return None

        result = data.get("result")
        if isinstance(result, list) and result and isinstance(result[0], dict):
            return result[0]
        return None
