"""Contract source analysis."""

from scamguard.services.contract.scanner import ContractScanner, ScannerThresholds

__all__ = ["ContractScanner", "ScannerThresholds"]
