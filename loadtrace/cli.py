"""Command-line entry point for loadtrace."""
import argparse
import logging
from typing import List, Optional

from loadtrace.const import DEFAULT_CONCURRENCY, DEFAULT_REQUESTS
from loadtrace.shared.config import Config
from loadtrace.shared.logging import LoggingManager
from loadtrace.loadtest import ConfigurationError, LoadTestConfig, LoadTestError, LoadTestRunner, SuffixLoader


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loadtrace",
        description="Concurrent HTTP load generator with per-phase latency tracing",
    )
    parser.add_argument("-u", "--url", required=True, help="target URL, e.g. https://example.com")
    parser.add_argument("-c", "--concurrency", type=int, default=DEFAULT_CONCURRENCY, help="number of concurrent users")
    parser.add_argument("-n", "--requests", type=int, default=DEFAULT_REQUESTS, help="number of requests to issue")
    parser.add_argument("-f", "--file", help="file with one URL suffix per line; overrides --requests")
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Config()
    LoggingManager.setup_logging(args.log_level or settings.log_level, settings.library_log_levels)

    try:
        suffixes = SuffixLoader.load_suffixes(args.file) if args.file else None
        config = LoadTestConfig(
            base_url=args.url,
            concurrency=args.concurrency,
            requests=args.requests,
            url_suffixes=suffixes,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        LoadTestRunner(config, settings).run()
    except LoadTestError as e:
        logger.error(f"Load test failed: {e}")
        return 1
    return 0
