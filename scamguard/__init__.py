"""ScamGuard - static scam-risk assessment for EVM token contracts."""

__version__ = "0.1.0"
