#!/usr/bin/env python3
"""Netpulse: scheduled topic report pipeline.

Collects current facts on the internet situation in Iran via Perplexity,
summarizes them with OpenAI, stores the report in Appwrite and posts it to
a Telegram channel.

Commands:
    run         Execute the pipeline (once or continuously)
    status      Show the effective configuration (secrets masked)

Examples:
    python main.py run                    # Single run, prints JSON result
    python main.py run -c                 # Continuous mode
    python main.py run --lang en          # English report
    python main.py status                 # Show config

Environment:
    See config.py for all configuration options
"""

import argparse
import asyncio
import json
import logging
import sys

from config import Config
from observability.logging import setup_logging


def cmd_run(args: argparse.Namespace, config: Config) -> int:
    """Execute the report pipeline.

    Args:
        args: Parsed command line arguments
        config: Application configuration

    Returns:
        Exit code (0 for success, 1 for a failed run)
    """
    from pipeline import run_once, run_continuous

    logger = logging.getLogger(__name__)

    if args.continuous:
        try:
            asyncio.run(run_continuous(config, interval=args.interval))
        except KeyboardInterrupt:
            logger.info("Stopped by user (Ctrl+C)")
        return 0

    try:
        result = asyncio.run(run_once(config))
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
        return 130  # Standard exit code for SIGINT

    print(json.dumps(result.to_response(), ensure_ascii=False, indent=2))
    return 0 if result.success else 1


def cmd_status(args: argparse.Namespace, config: Config) -> int:
    """Display the effective configuration.

    Args:
        args: Parsed command line arguments
        config: Application configuration

    Returns:
        Exit code (0 for success)
    """
    error = config.validate()
    status = {
        "config": config.redacted(),
        "valid": error is None,
        "error": error,
    }
    print(json.dumps(status, indent=2, ensure_ascii=False))
    return 0


def main() -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        description="Netpulse: scheduled topic report pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run the report pipeline")
    run_parser.add_argument(
        "-c", "--continuous",
        action="store_true",
        help="Run repeatedly instead of once",
    )
    run_parser.add_argument(
        "--lang",
        choices=["fa", "en"],
        help="Report language (default: fa)",
    )
    run_parser.add_argument(
        "--interval",
        type=int,
        help="Seconds between runs (continuous mode)",
    )

    subparsers.add_parser("status", help="Show configuration")

    args = parser.parse_args()

    config = Config.load()
    if getattr(args, "lang", None):
        config.language = args.lang
    if getattr(args, "interval", None):
        config.poll_interval_seconds = args.interval

    setup_logging(config, verbose=args.verbose)

    if args.command == "run":
        error = config.validate()
        if error:
            print(f"Configuration error: {error}", file=sys.stderr)
            return 1

    commands = {
        "run": cmd_run,
        "status": cmd_status,
    }

    if args.command in commands:
        try:
            return commands[args.command](args, config)
        except Exception as e:
            logging.getLogger(__name__).error("Command failed | cmd=%s error=%s", args.command, e, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
