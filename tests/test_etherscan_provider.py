"""
Tests for EtherscanContractDataProvider.

Tests cover:
- Verified and unverified source responses
- Creation metadata with block timestamp resolution
- "Not found" responses vs transport failures
- Unsupported chains
"""

import asyncio
import re

import aiohttp
import pytest
from aioresponses import aioresponses

from scamguard.core.exceptions import DataFetchError, ValidationError
from scamguard.services.contract_data.etherscan_provider import (
    EtherscanContractDataProvider,
)

ADDRESS = "0xdac17f958d2ee523a2206206994597c13d831ec7"
TX_HASH = "0x2f1c5c2b44f771e942a8506148e256f94f1a464babc938ae0690c6e34cd79190"


def action_url(action: str) -> re.Pattern[str]:
    """Match an Etherscan V2 GET for one action regardless of other params."""
    return re.compile(rf"^https://api\.etherscan\.io/v2/api\?.*action={action}(&.*)?$")


@pytest.fixture
def etherscan_provider() -> EtherscanContractDataProvider:
    """EtherscanContractDataProvider with test API key."""
    return EtherscanContractDataProvider(api_key="test-api-key", timeout=1.0)


@pytest.fixture
def mock_source_response() -> dict:
    """Mock getsourcecode response for a verified contract."""
    return {
        "status": "1",
        "message": "OK",
        "result": [
            {
                "SourceCode": "contract TetherToken is Pausable, StandardToken { }",
                "ABI": "[]",
                "ContractName": "TetherToken",
                "CompilerVersion": "v0.4.18+commit.9cf6e910",
                "OptimizationUsed": "0",
            }
        ],
    }


@pytest.fixture
def mock_unverified_response() -> dict:
    """Mock getsourcecode response for an unverified contract."""
    return {
        "status": "1",
        "message": "OK",
        "result": [
            {
                "SourceCode": "",
                "ABI": "Contract source code not verified",
                "ContractName": "",
                "CompilerVersion": "",
                "OptimizationUsed": "",
            }
        ],
    }


@pytest.fixture
def mock_creation_response() -> dict:
    return {
        "status": "1",
        "message": "OK",
        "result": [
            {
                "contractAddress": ADDRESS,
                "contractCreator": "0x36928500bc1dcd7af6a2b4008875cc336b927d57",
                "txHash": TX_HASH,
            }
        ],
    }


@pytest.fixture
def mock_tx_response() -> dict:
    return {"jsonrpc": "2.0", "id": 1, "result": {"blockNumber": "0x4634fb", "hash": TX_HASH}}


@pytest.fixture
def mock_block_response() -> dict:
    # 0x5a1d8f2c == 1511886636
    return {"jsonrpc": "2.0", "id": 1, "result": {"number": "0x4634fb", "timestamp": "0x5a1d8f2c"}}


class TestEtherscanSource:
    """Tests for get_contract_source."""

    @pytest.mark.asyncio
    async def test_verified_source(
        self,
        etherscan_provider: EtherscanContractDataProvider,
        mock_source_response: dict,
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getsourcecode"), payload=mock_source_response)

            source = await etherscan_provider.get_contract_source(ADDRESS)

        assert source is not None
        assert source.is_verified is True
        assert source.contract_name == "TetherToken"
        assert "Pausable" in source.source_code

    @pytest.mark.asyncio
    async def test_request_carries_chain_id_and_key(
        self,
        etherscan_provider: EtherscanContractDataProvider,
        mock_source_response: dict,
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getsourcecode"), payload=mock_source_response)

            await etherscan_provider.get_contract_source(ADDRESS, "base")

            (method, url), calls = next(iter(m.requests.items()))

        assert method == "GET"
        assert url.query["chainid"] == "8453"
        assert url.query["apikey"] == "test-api-key"
        assert url.query["address"] == ADDRESS

    @pytest.mark.asyncio
    async def test_empty_source_is_unverified(
        self,
        etherscan_provider: EtherscanContractDataProvider,
        mock_unverified_response: dict,
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getsourcecode"), payload=mock_unverified_response)

            source = await etherscan_provider.get_contract_source(ADDRESS)

        assert source is not None
        assert source.is_verified is False

    @pytest.mark.asyncio
    async def test_error_status_returns_none(
        self, etherscan_provider: EtherscanContractDataProvider
    ) -> None:
        """An explorer-level "not found" is not a transport failure."""
        with aioresponses() as m:
            m.get(
                action_url("getsourcecode"),
                payload={"status": "0", "message": "NOTOK", "result": "Invalid address format"},
            )

            source = await etherscan_provider.get_contract_source(ADDRESS)

        assert source is None

    @pytest.mark.asyncio
    async def test_http_error_raises(
        self, etherscan_provider: EtherscanContractDataProvider
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getsourcecode"), status=502)

            with pytest.raises(DataFetchError) as exc_info:
                await etherscan_provider.get_contract_source(ADDRESS)

        assert "502" in exc_info.value.technical_message

    @pytest.mark.asyncio
    async def test_timeout_raises(
        self, etherscan_provider: EtherscanContractDataProvider
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getsourcecode"), exception=asyncio.TimeoutError())

            with pytest.raises(DataFetchError) as exc_info:
                await etherscan_provider.get_contract_source(ADDRESS)

        assert "timeout" in exc_info.value.technical_message

    @pytest.mark.asyncio
    async def test_connection_error_raises(
        self, etherscan_provider: EtherscanContractDataProvider
    ) -> None:
        with aioresponses() as m:
            m.get(
                action_url("getsourcecode"),
                exception=aiohttp.ClientConnectionError("connection reset"),
            )

            with pytest.raises(DataFetchError):
                await etherscan_provider.get_contract_source(ADDRESS)

    @pytest.mark.asyncio
    async def test_unsupported_chain(
        self, etherscan_provider: EtherscanContractDataProvider
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await etherscan_provider.get_contract_source(ADDRESS, "solana")

        assert "solana" in exc_info.value.message


class TestEtherscanCreation:
    """Tests for get_contract_creation."""

    @pytest.mark.asyncio
    async def test_creation_with_timestamp(
        self,
        etherscan_provider: EtherscanContractDataProvider,
        mock_creation_response: dict,
        mock_tx_response: dict,
        mock_block_response: dict,
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getcontractcreation"), payload=mock_creation_response)
            m.get(action_url("eth_getTransactionByHash"), payload=mock_tx_response)
            m.get(action_url("eth_getBlockByNumber"), payload=mock_block_response)

            creation = await etherscan_provider.get_contract_creation(ADDRESS)

        assert creation is not None
        assert creation.creator == "0x36928500bc1dcd7af6a2b4008875cc336b927d57"
        assert creation.tx_hash == TX_HASH
        assert creation.timestamp == 0x5A1D8F2C

    @pytest.mark.asyncio
    async def test_block_lookup_failure_keeps_creator(
        self,
        etherscan_provider: EtherscanContractDataProvider,
        mock_creation_response: dict,
    ) -> None:
        """Timestamp degrades to unknown instead of failing the fetch."""
        with aioresponses() as m:
            m.get(action_url("getcontractcreation"), payload=mock_creation_response)
            m.get(action_url("eth_getTransactionByHash"), status=500)

            creation = await etherscan_provider.get_contract_creation(ADDRESS)

        assert creation is not None
        assert creation.creator == "0x36928500bc1dcd7af6a2b4008875cc336b927d57"
        assert creation.timestamp == 0

    @pytest.mark.asyncio
    async def test_missing_block_number(
        self,
        etherscan_provider: EtherscanContractDataProvider,
        mock_creation_response: dict,
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getcontractcreation"), payload=mock_creation_response)
            m.get(
                action_url("eth_getTransactionByHash"),
                payload={"jsonrpc": "2.0", "id": 1, "result": None},
            )

            creation = await etherscan_provider.get_contract_creation(ADDRESS)

        assert creation is not None
        assert creation.timestamp == 0

    @pytest.mark.asyncio
    async def test_no_creation_record(
        self, etherscan_provider: EtherscanContractDataProvider
    ) -> None:
        with aioresponses() as m:
            m.get(
                action_url("getcontractcreation"),
                payload={"status": "0", "message": "No data found", "result": []},
            )

            creation = await etherscan_provider.get_contract_creation(ADDRESS)

        assert creation is None

    @pytest.mark.asyncio
    async def test_creation_http_error_raises(
        self, etherscan_provider: EtherscanContractDataProvider
    ) -> None:
        with aioresponses() as m:
            m.get(action_url("getcontractcreation"), status=429)

            with pytest.raises(DataFetchError):
                await etherscan_provider.get_contract_creation(ADDRESS)
