"""
EVM address validation.

Validates that a string is a usable EVM contract address.
Uses eth-utils instead of a bare regex so mixed-case input is
checked against its EIP-55 checksum.

EVM addresses:
- "0x" prefix followed by 40 hex characters (20 bytes)
- All-lowercase or all-uppercase input carries no checksum
- Mixed-case input must match the EIP-55 checksum
"""

import re

from eth_utils import (
    is_checksum_address,
    is_checksum_formatted_address,
    to_checksum_address,
)

HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_evm_address(address: str) -> tuple[bool, str | None]:
    """
    Validate an EVM contract address.

    Args:
        address: String to validate as EVM address

    Returns:
        Tuple of (is_valid, error_message)
        - (True, None) if address is valid
        - (False, "error description") if invalid

    Examples:
        >>> validate_evm_address("0xdac17f958d2ee523a2206206994597c13d831ec7")
        (True, None)

        >>> validate_evm_address("")
        (False, 'Address cannot be empty')
    """
    if not address:
        return False, "Address cannot be empty"

    if address != address.strip():
        return False, "Address contains whitespace"

    if not address.startswith("0x"):
        return False, "Address must start with 0x"

    if len(address) != 42:
        return False, f"Wrong address length: {len(address)} characters (expected 42)"

    if not HEX_ADDRESS_RE.match(address):
        return False, "Address contains non-hex characters"

    # All-lowercase or all-uppercase input carries no checksum
    if is_checksum_formatted_address(address) and not is_checksum_address(address):
        return False, "Invalid EIP-55 checksum"

    return True, None


def is_valid_evm_address(address: str) -> bool:
    """
    Simple boolean check for EVM address validity.

    Convenience wrapper around validate_evm_address for
    cases where you only need a boolean result.
    """
    valid, _ = validate_evm_address(address)
    return valid


def normalize_address(address: str) -> str:
    """Return the EIP-55 checksummed form of a valid address."""
    if is_checksum_address(address):
        return address
    return to_checksum_address(address)
