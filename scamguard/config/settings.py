"""
Runtime configuration for ScamGuard.

Values come from the process environment or a local .env file
(pydantic-settings). Without any configuration the CLI runs against
the mock contract provider and the built-in scam patterns.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    ScamGuard settings.

    See .env.example for the matching variable names.

    Attributes:
        environment: development or production
        use_mock_services: Serve deterministic fake contracts instead of Etherscan
        log_level: Root log level for the CLI
        api_timeout_seconds: Upper bound on fetching one contract's data
        etherscan_api_key: Etherscan V2 key, required outside mock mode
        default_chain: Chain assumed when the CLI gets no --chain
        patterns_file: JSON scam pattern file, empty for the built-in set
    """

    environment: Literal["development", "production"] = "development"
    use_mock_services: bool = True

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Applies to source + creation lookups together
    api_timeout_seconds: float = 10.0

    etherscan_api_key: str = ""
    default_chain: str = "ethereum"

    patterns_file: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # Empty variables fall back to the defaults above
        env_ignore_empty=True,
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Settings singleton; the .env file is read once per process."""
    return Settings()
