"""
Command line entry point.

    permitrunner -r resident.json -v visitor.json [--headless]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import PermitRunnerConfig, set_config
from .logging_config import setup_logging
from .runner import run_permit_request

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='permitrunner',
        description='Submit a Park It Right visitor parking permit request',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Headed run (browser window visible)
  permitrunner -r resident.json -v visitor.json

  # Headless, screenshot written to ./permits
  permitrunner -r resident.json -v visitor.json --headless --output-dir permits
'''
    )
    parser.add_argument('-r', dest='resident_file', metavar='PATH', help='Resident JSON file')
    parser.add_argument('-v', dest='visitor_file', metavar='PATH', help='Visitor JSON file')
    parser.add_argument('--headless', action='store_true', default=None,
                        help='Run the browser without a window')
    parser.add_argument('--output-dir', type=Path, default=None,
                        help='Directory for the registration screenshot (default: current directory)')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one permit request. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.headless is not None:
        overrides['headless'] = args.headless
    if args.output_dir is not None:
        overrides['output_dir'] = args.output_dir
    if args.log_level is not None:
        overrides['log_level'] = args.log_level

    config = PermitRunnerConfig(**overrides)
    set_config(config)
    config._create_directories()

    setup_logging(level=config.log_level, log_file=config.get_log_path())

    if not args.resident_file:
        logger.error("Resident file -r is required")
        parser.print_help()
        return 1
    if not args.visitor_file:
        logger.error("Visitor file -v is required")
        parser.print_help()
        return 1

    config._log_config()

    result = asyncio.run(run_permit_request(args.resident_file, args.visitor_file, config))

    if not result['success']:
        return 1

    logger.info(f"Registration screenshot: {result['screenshot_path']}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
