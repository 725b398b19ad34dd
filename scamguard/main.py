"""
ScamGuard command-line entry point.

Assesses one contract address and prints a report or JSON.

Run with: python -m scamguard.main 0xdAC17F958D2ee523a2206206994597C13D831ec7
"""

import argparse
import asyncio
import logging
import sys

from scamguard.config import get_settings
from scamguard.config.settings import Settings
from scamguard.core.exceptions import (
    DataFetchError,
    ScamGuardError,
    ValidationError,
)
from scamguard.core.models import ProjectData
from scamguard.services.factory import ServiceFactory
from scamguard.utils.formatters import format_risk_score, format_safety_check

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    # Reduce noise from external libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def validate_production_config(settings: Settings) -> None:
    """
    Refuse to start with a configuration that cannot serve real contracts.

    Raises:
        RuntimeError: If mock data is enabled in production, or the
            Etherscan key is missing outside mock mode.
    """
    if settings.use_mock_services:
        if settings.is_production:
            raise RuntimeError(
                "USE_MOCK_SERVICES=true is not allowed with ENVIRONMENT=production."
            )
        return

    if not settings.etherscan_api_key:
        raise RuntimeError(
            "Missing required env var for production mode: ETHERSCAN_API_KEY. "
            "Set USE_MOCK_SERVICES=true for development without API keys."
        )


def build_parser(default_chain: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scamguard",
        description="Static scam-risk assessment for EVM token contracts.",
    )
    parser.add_argument("address", help="Token contract address (0x...)")
    parser.add_argument("--chain", default=default_chain, help="Chain name")
    parser.add_argument("--name", default=None, help="Project name for the report")
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Only run the contract safety gate",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw result as JSON",
    )
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """
    Run one assessment and print the result.

    Returns:
        Process exit code
    """
    orchestrator = ServiceFactory(settings).create_orchestrator()

    try:
        if args.quick:
            result = await orchestrator.quick_safety_check(args.address, args.chain)
            print(result.model_dump_json(indent=2) if args.json else format_safety_check(result, args.address))
            return 0

        project = ProjectData(
            id=f"{args.chain}:{args.address.lower()}",
            contract_address=args.address,
            name=args.name or args.address,
            chain=args.chain,
        )
        score = await orchestrator.assess_project(project)
        print(score.model_dump_json(indent=2) if args.json else format_risk_score(score, project))
        return 0

    except ValidationError as e:
        logger.warning(f"ValidationError: {e.technical_message}")
        print(e.message, file=sys.stderr)
        return 2

    except DataFetchError as e:
        logger.error(f"DataFetchError: {e.technical_message}")
        print(e.message, file=sys.stderr)
        return 1

    except ScamGuardError as e:
        logger.error(f"{type(e).__name__}: {e.technical_message}")
        print(e.message, file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    """Load settings, configure logging, run one assessment and return the exit code."""
    settings = get_settings()

    setup_logging(settings.log_level)
    validate_production_config(settings)

    args = build_parser(settings.default_chain).parse_args(argv)

    logger.debug(f"Environment: {settings.environment}, mock mode: {settings.use_mock_services}")
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
