"""
Mock contract data provider for development.

Returns realistic-looking Solidity snippets without making API calls.
Uses deterministic random generation based on address for consistent results.
"""

import hashlib
import random
import time
from collections.abc import Callable

from scamguard.core.models import ContractCreation, ContractSource

SECONDS_PER_DAY = 24 * 60 * 60

CLEAN_TOKEN = """
pragma solidity ^0.8.20;
contract CleanToken is ERC20, Ownable {
    constructor() ERC20("Clean", "CLN") { }
    function launch() external onlyOwner {
        renounceOwnership();
    }
}
"""

MINTABLE_PROXY = """
pragma solidity ^0.8.20;
contract MintableToken is ERC20Upgradeable, OwnableUpgradeable {
    function mint(address to, uint256 amount) external onlyOwner {
        _mint(to, amount);
    }
}
"""

HONEYPOT_TOKEN = """
pragma solidity ^0.8.20;
contract TrapToken is ERC20, Ownable {
    address public pair;
    function transfer(address to, uint256 amount) public onlyOwner returns (bool) {
        return super.transfer(to, amount);
    }
}
"""

TAXED_TOKEN = """
pragma solidity ^0.8.20;
contract TaxToken is ERC20, Pausable, Ownable {
    uint256 public buyTax = 5;
    uint256 public sellTax = 25;
    mapping(address => bool) public isBlacklisted;
    function pause() external onlyOwner { _pause(); }
}
"""


class MockContractDataProvider:
    """
    Mock implementation of ContractDataProvider protocol.

    The same address always returns the same source and contract age.
    Roughly one in five addresses is reported as unverified.

    Usage:
        provider = MockContractDataProvider()
        source = await provider.get_contract_source("0xdead...")
    """

    MOCK_CONTRACTS = [
        ("CleanToken", CLEAN_TOKEN),
        ("MintableToken", MINTABLE_PROXY),
        ("TrapToken", HONEYPOT_TOKEN),
        ("TaxToken", TAXED_TOKEN),
    ]

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def _rng(self, address: str, chain: str) -> random.Random:
        """Deterministic RNG seeded from address and chain."""
        key = f"{chain}:{address.lower()}".encode()
        seed = int(hashlib.md5(key).hexdigest(), 16) % (2**32)
        return random.Random(seed)

    async def get_contract_source(
        self, address: str, chain: str = "ethereum"
    ) -> ContractSource | None:
        rng = self._rng(address, chain)
        name, source = rng.choice(self.MOCK_CONTRACTS)

        if rng.random() < 0.2:
            return ContractSource(contract_name=name, is_verified=False)

        return ContractSource(
            source_code=source,
            abi="[]",
            contract_name=name,
            compiler_version="v0.8.20+commit.a1b79de6",
            optimization_used="1",
            is_verified=True,
        )

    async def get_contract_creation(
        self, address: str, chain: str = "ethereum"
    ) -> ContractCreation | None:
        rng = self._rng(address, chain)
        age_days = rng.randint(1, 365)
        creator = "0x" + "".join(rng.choice("0123456789abcdef") for _ in range(40))
        tx_hash = "0x" + "".join(rng.choice("0123456789abcdef") for _ in range(64))

        return ContractCreation(
            creator=creator,
            tx_hash=tx_hash,
            timestamp=int(self._clock()) - age_days * SECONDS_PER_DAY,
        )
