# hookradar/main.py
"""
hook-radar command line entry point.

Reads the hook payload from stdin, writes the hook response to stdout.
"""
import argparse
import asyncio
import logging
import platform
import sys
from typing import Any, Dict, List, Optional, TextIO

from hookradar import __version__
from hookradar.core.config import load_settings
from hookradar.core.constants import APP_NAME, LOG_LEVELS, LogFormat
from hookradar.core.exceptions import HookRadarError
from hookradar.core.logging import setup_logging
from hookradar.services.hook_processor import HookProcessor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Scan agent hook payloads for secrets with HashiCorp Vault Radar. "
            "Reads hook JSON from stdin and writes the decision JSON to stdout."
        ),
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} version {__version__}")
    parser.add_argument("--framework", help="hook framework to use (e.g. 'claude')")
    parser.add_argument("--config", help="path to a YAML config file")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="logging level")
    parser.add_argument("--log-format", choices=[f.value for f in LogFormat], help="logging format")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("version", help="display version information")
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.framework:
        overrides["framework"] = args.framework
    logging_overrides = {}
    if args.log_level:
        logging_overrides["level"] = args.log_level
    if args.log_format:
        logging_overrides["format"] = args.log_format
    if logging_overrides:
        overrides["logging"] = logging_overrides
    return overrides


def print_version(stdout: TextIO) -> None:
    stdout.write(f"{APP_NAME} version {__version__}\n")
    stdout.write(f"  Python Version: {platform.python_version()}\n")


def run(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    args = build_parser().parse_args(argv)

    if args.command == "version":
        print_version(stdout)
        return 0

    try:
        settings = load_settings(args.config, **_overrides(args))
        setup_logging(settings.logging)

        processor = HookProcessor(settings)
        output, exit_code = asyncio.run(processor.process(stdin.read(), settings.framework))
    except HookRadarError as e:
        logger.error(f"Hook processing failed: {e}")
        stdout.write(f"Error: {e}\n")
        return 1

    stdout.write(output + "\n")
    stdout.flush()
    return exit_code


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
