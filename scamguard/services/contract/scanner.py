"""
Contract scanner.

Turns verified Solidity source into a ContractAnalysis capability profile
and renders that profile into contract/liquidity red flags.

Detection is static and textual: source is lowercased and matched against
heuristic patterns. Nothing is compiled or executed. Each detector is a
module-level predicate so it can be measured on its own.

Unverified source is a terminal "cannot analyze" state: every capability
flag stays False and only the "not verified" red flag fires.
"""

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass

from scamguard.core.models import (
    Category,
    ContractAnalysis,
    ContractCreation,
    ContractSource,
    RedFlag,
    SafetyCheckResult,
    Severity,
)

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000

PROXY_INDICATORS = (
    "delegatecall",
    "upgradeable",
    "proxy",
    "implementation",
    "eip1967",
)

BLACKLIST_INDICATORS = (
    "blacklist",
    "isblacklisted",
    "_blacklist",
    "banned",
    "isbanned",
)

WHITELIST_INDICATORS = (
    "whitelist",
    "iswhitelisted",
    "_whitelist",
    "allowed",
    "isallowed",
)

MINT_PATTERNS = (
    re.compile(r"function\s+mint\s*\(", re.IGNORECASE),
    re.compile(r"function\s+mintto\s*\(", re.IGNORECASE),
    re.compile(r"function\s+_mint\s*\(", re.IGNORECASE),
)

PAUSE_PATTERNS = (
    re.compile(r"function\s+pause\s*\(", re.IGNORECASE),
    re.compile(r"whennotpaused", re.IGNORECASE),
    re.compile(r"pausable", re.IGNORECASE),
)

HONEYPOT_PATTERNS = (
    # Selling to the pair is blocked
    re.compile(r"if\s*\(.*from.*==.*pair.*\)\s*require", re.IGNORECASE),
    re.compile(r"if\s*\(.*to.*==.*pair.*\)\s*revert", re.IGNORECASE),
    # Transfer gated by an owner-only modifier
    re.compile(r"function\s+transfer.*onlyowner", re.IGNORECASE),
    # Transfer body requires the caller to be the owner
    re.compile(
        r"function\s+transfer.*\{[^}]*require.*msg\.sender.*owner",
        re.IGNORECASE,
    ),
)

BUY_TAX_PATTERNS = (
    re.compile(r"buytax\s*=\s*(\d+)", re.IGNORECASE),
    re.compile(r"buyfee\s*=\s*(\d+)", re.IGNORECASE),
)

SELL_TAX_PATTERNS = (
    re.compile(r"selltax\s*=\s*(\d+)", re.IGNORECASE),
    re.compile(r"sellfee\s*=\s*(\d+)", re.IGNORECASE),
)

RENOUNCE_PATTERNS = (
    re.compile(r"renounceownership", re.IGNORECASE),
    re.compile(r"owner\s*=\s*address\(0\)", re.IGNORECASE),
    re.compile(r"_transferownership\(address\(0\)\)", re.IGNORECASE),
)


# =============================================================================
# Detectors
# =============================================================================


def detect_proxy(source: str) -> bool:
    """Upgradeable proxy or delegatecall-based contract."""
    return any(indicator in source for indicator in PROXY_INDICATORS)


def detect_mint_function(source: str) -> bool:
    """Declares mint, mintTo or _mint."""
    return any(pattern.search(source) for pattern in MINT_PATTERNS)


def detect_pause_function(source: str) -> bool:
    return any(pattern.search(source) for pattern in PAUSE_PATTERNS)


def detect_blacklist(source: str) -> bool:
    return any(indicator in source for indicator in BLACKLIST_INDICATORS)


def detect_whitelist(source: str) -> bool:
    return any(indicator in source for indicator in WHITELIST_INDICATORS)


def detect_honeypot(source: str) -> bool:
    """
    Approximate "can buy but cannot sell" check.

    Matches transfer restrictions keyed on the pair address or on the
    owner. False positives and negatives are expected.
    """
    return any(pattern.search(source) for pattern in HONEYPOT_PATTERNS)


def _first_int(source: str, patterns: tuple[re.Pattern[str], ...]) -> int:
    for pattern in patterns:
        match = pattern.search(source)
        if match:
            return int(match.group(1))
    return 0


def detect_taxes(source: str) -> tuple[int, int]:
    """
    Extract (buy_tax, sell_tax) in percent.

    Takes the first integer assigned to buyTax/buyFee and sellTax/sellFee.
    Missing taxes default to 0, values are capped at 100.
    """
    buy_tax = min(_first_int(source, BUY_TAX_PATTERNS), 100)
    sell_tax = min(_first_int(source, SELL_TAX_PATTERNS), 100)
    return buy_tax, sell_tax


def detect_ownership_renounced(source: str) -> bool:
    return any(pattern.search(source) for pattern in RENOUNCE_PATTERNS)


# =============================================================================
# Scanner
# =============================================================================


@dataclass(frozen=True)
class ScannerThresholds:
    """
    Threshold values for contract red flags.

    Frozen dataclass ensures immutability.
    """

    # Buy or sell tax above this (percent) is excessive
    max_tax_percent: int = 10

    # Unlocked LP on a contract younger than this is a rug risk
    new_contract_days: int = 7


class ContractScanner:
    """
    Static analyzer for verified contract source.

    Stateless apart from its thresholds and clock, so one instance
    can be shared between concurrent assessments.

    Usage:
        scanner = ContractScanner()
        analysis = scanner.scan(source, creation)
        flags = scanner.to_red_flags(analysis)
    """

    def __init__(
        self,
        thresholds: ScannerThresholds | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize scanner.

        Args:
            thresholds: Custom thresholds (uses defaults if None)
            clock: Returns current unix time in seconds
        """
        self._thresholds = thresholds or ScannerThresholds()
        self._clock = clock

    def now_ms(self) -> int:
        """Current time in unix milliseconds according to the injected clock."""
        return int(self._clock() * 1000)

    def scan(
        self,
        source: ContractSource | None,
        creation: ContractCreation | None = None,
    ) -> ContractAnalysis:
        """
        Build a ContractAnalysis from source text and creation metadata.

        Args:
            source: Verified source payload (None = explorer has no record)
            creation: Deployment metadata (None = unknown)

        Returns:
            ContractAnalysis. All capability flags are False when the
            source is missing or unverified.
        """
        creator_address = creation.creator if creation else "Unknown"
        creation_timestamp = creation.timestamp if creation else 0

        if source is None or not source.is_verified:
            logger.debug("Source not verified, skipping detectors")
            return ContractAnalysis(
                verified=False,
                creator_address=creator_address,
                creation_timestamp=creation_timestamp,
            )

        code = source.source_code.lower()
        buy_tax, sell_tax = detect_taxes(code)

        analysis = ContractAnalysis(
            verified=True,
            is_proxy=detect_proxy(code),
            has_honeypot=detect_honeypot(code),
            has_mint_function=detect_mint_function(code),
            has_pause_function=detect_pause_function(code),
            has_blacklist=detect_blacklist(code),
            has_whitelist=detect_whitelist(code),
            buy_tax=buy_tax,
            sell_tax=sell_tax,
            ownership_renounced=detect_ownership_renounced(code),
            # No on-chain LP lock check yet
            lp_locked=False,
            creator_address=creator_address,
            creation_timestamp=creation_timestamp,
        )

        logger.debug(
            f"Scanned {source.contract_name or 'contract'}: "
            f"proxy={analysis.is_proxy}, mint={analysis.has_mint_function}, "
            f"honeypot={analysis.has_honeypot}, "
            f"tax={analysis.buy_tax}/{analysis.sell_tax}, "
            f"renounced={analysis.ownership_renounced}"
        )
        return analysis

    def to_red_flags(
        self,
        analysis: ContractAnalysis,
        now_ms: int | None = None,
    ) -> list[RedFlag]:
        """
        Render contract red flags.

        Rules are independent: several may fire for the same contract.
        The upgradeable-mint flag is reported in addition to the plain
        mint flag, not instead of it.

        Args:
            analysis: Scanner output
            now_ms: Reference time in unix ms (defaults to the clock)

        Returns:
            Red flags in rule order
        """
        t = self._thresholds
        flags: list[RedFlag] = []
        owner_active = not analysis.ownership_renounced

        if not analysis.verified:
            flags.append(
                RedFlag(
                    severity=Severity.CRITICAL,
                    category=Category.CONTRACT,
                    description="Contract source code is not verified",
                    evidence="Cannot analyze unverified contract code",
                )
            )

        if analysis.has_honeypot:
            flags.append(
                RedFlag(
                    severity=Severity.CRITICAL,
                    category=Category.CONTRACT,
                    description="Honeypot detected - may not be able to sell",
                    evidence="Contract contains transfer restrictions that could prevent selling",
                )
            )

        if analysis.is_proxy and analysis.has_mint_function and owner_active:
            flags.append(
                RedFlag(
                    severity=Severity.CRITICAL,
                    category=Category.CONTRACT,
                    description="Upgradeable contract with mint function and active owner",
                    evidence="Owner can upgrade contract to mint unlimited tokens",
                )
            )

        if analysis.has_mint_function and owner_active:
            flags.append(
                RedFlag(
                    severity=Severity.HIGH,
                    category=Category.CONTRACT,
                    description="Contract has mint function and ownership not renounced",
                    evidence="Owner can mint new tokens at any time",
                )
            )

        if analysis.buy_tax > t.max_tax_percent or analysis.sell_tax > t.max_tax_percent:
            flags.append(
                RedFlag(
                    severity=Severity.HIGH,
                    category=Category.CONTRACT,
                    description="Excessive trading taxes detected",
                    evidence=f"Buy tax: {analysis.buy_tax}%, Sell tax: {analysis.sell_tax}%",
                )
            )

        if analysis.has_blacklist and owner_active:
            flags.append(
                RedFlag(
                    severity=Severity.MEDIUM,
                    category=Category.CONTRACT,
                    description="Contract can blacklist addresses",
                    evidence="Owner can prevent specific addresses from trading",
                )
            )

        if analysis.has_pause_function and owner_active:
            flags.append(
                RedFlag(
                    severity=Severity.MEDIUM,
                    category=Category.CONTRACT,
                    description="Contract can be paused by owner",
                    evidence="Owner can halt all trading at any time",
                )
            )

        if self._is_new_unlocked(analysis, now_ms):
            flags.append(
                RedFlag(
                    severity=Severity.HIGH,
                    category=Category.LIQUIDITY,
                    description="Liquidity not locked for new token",
                    evidence="LP tokens are not locked, rug pull risk",
                )
            )

        for flag in flags:
            logger.debug(f"Contract flag: {flag.render()}")

        return flags

    def quick_check(
        self,
        analysis: ContractAnalysis,
        now_ms: int | None = None,
    ) -> SafetyCheckResult:
        """
        Summarize contract flags into a boolean gate.

        Safe means no CRITICAL and no HIGH flags.
        """
        flags = self.to_red_flags(analysis, now_ms)
        critical = sum(1 for f in flags if f.severity == Severity.CRITICAL)
        high = sum(1 for f in flags if f.severity == Severity.HIGH)

        return SafetyCheckResult(
            is_safe=critical == 0 and high == 0,
            critical_issues=critical,
            high_issues=high,
            warnings=[f.description for f in flags],
        )

    def _is_new_unlocked(self, analysis: ContractAnalysis, now_ms: int | None) -> bool:
        """LP not locked and contract younger than the threshold."""
        if analysis.lp_locked or analysis.creation_timestamp <= 0:
            return False

        now = self.now_ms() if now_ms is None else now_ms
        age_ms = now - analysis.creation_timestamp * 1000
        return age_ms < self._thresholds.new_contract_days * MS_PER_DAY
