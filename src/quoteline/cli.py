"""Command-line entry point for fetching a quote.

Runs one fetch (ticker info, latest end-of-day quote and, when configured,
a spot metal price) and reports each step as it completes.

Environment Variables:
    MARKETSTACK__ACCESS_KEY: Required unless --mock is given
    GOLDAPI__ACCESS_TOKEN: Enables the spot price lookup
    QUOTE__SYMBOL: Default ticker symbol (default: SGOL)
    QUOTE__SECONDARY_IDENTIFIER: Default spot identifier (default: XAU/USD)
    LOGGING__LEVEL: Logging level (default: INFO)
    LOGGING__FORMAT: text or json (default: text)

Exit status:
    0 when every attempted step succeeded, 1 when any step failed,
    2 on configuration errors.
"""

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from quoteline.config import Config, LoggingConfig, MarketstackConfig, QuoteConfig
from quoteline.core.fetcher import FetchReport, build_fetcher
from quoteline.reporting.sinks import ConsoleSink, LogSink, MemorySink, ReportSink
from quoteline.utils.logging import get_logger, setup_logging

EXIT_OK = 0
EXIT_FETCH_FAILED = 1
EXIT_CONFIG_ERROR = 2

logger = get_logger(__name__, component="CLI")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quoteline",
        description="Fetch ticker info, the latest end-of-day quote and a spot metal price",
    )
    parser.add_argument("--symbol", help="Ticker symbol (overrides QUOTE__SYMBOL)")
    spot = parser.add_mutually_exclusive_group()
    spot.add_argument(
        "--spot",
        metavar="ID",
        help="Spot price identifier, e.g. XAU or XAU/USD (overrides QUOTE__SECONDARY_IDENTIFIER)",
    )
    spot.add_argument("--no-spot", action="store_true", help="Skip the spot price lookup")
    parser.add_argument("--exchange", metavar="MIC", help="Restrict ticker lookups to an exchange")
    parser.add_argument(
        "--format",
        choices=["console", "log", "json"],
        default="console",
        help="console: key: value lines, log: structured log events, json: final summary",
    )
    parser.add_argument("--log-level", help="Logging level (overrides LOGGING__LEVEL)")
    parser.add_argument("--mock", action="store_true", help="Use mock providers (no API keys)")
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return a copy of ``config`` with command-line flags applied.

    Raises:
        ValidationError: If a flag value fails the config section's validation
    """
    quote = config.quote.model_dump()
    marketstack = config.marketstack.model_dump()
    logging_config = config.logging.model_dump()

    if args.symbol is not None:
        quote["symbol"] = args.symbol
    if args.no_spot:
        quote["secondary_identifier"] = None
    elif args.spot:
        quote["secondary_identifier"] = args.spot
    if args.exchange:
        marketstack["exchange"] = args.exchange
    if args.log_level:
        logging_config["level"] = args.log_level

    return config.model_copy(
        update={
            "quote": QuoteConfig.model_validate(quote),
            "marketstack": MarketstackConfig.model_validate(marketstack),
            "logging": LoggingConfig.model_validate(logging_config),
        }
    )


def make_sink(output_format: str) -> ReportSink:
    if output_format == "log":
        return LogSink()
    if output_format == "json":
        return MemorySink()
    return ConsoleSink()


async def run(config: Config, sink: ReportSink, mock: bool = False) -> FetchReport:
    """Fetch one quote with the configured providers.

    Args:
        config: Application configuration
        sink: Receiver for per-step results
        mock: Use mock providers

    Returns:
        FetchReport of the run

    Raises:
        ValueError: If a required access key is missing
    """
    fetcher = build_fetcher(config, sink, mock=mock)

    identifier = config.quote.secondary_identifier
    if identifier and fetcher.spot_provider is None:
        logger.warning(
            "spot_step_disabled",
            identifier=identifier,
            reason="GOLDAPI__ACCESS_TOKEN not set",
        )
        identifier = None

    return await fetcher.fetch_quote(config.quote.symbol, secondary_identifier=identifier)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = apply_overrides(Config(), args)
    except ValidationError as e:
        setup_logging(level=args.log_level or "INFO")
        logger.error("config_load_failed", error=str(e), error_type=type(e).__name__)
        return EXIT_CONFIG_ERROR

    setup_logging(level=config.logging.level, format_type=config.logging.format)

    sink = make_sink(args.format)

    try:
        report = asyncio.run(run(config, sink, mock=args.mock))
    except ValueError as e:
        logger.error("config_invalid", error=str(e))
        return EXIT_CONFIG_ERROR

    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2))

    return EXIT_OK if report.ok else EXIT_FETCH_FAILED


if __name__ == "__main__":
    sys.exit(main())
