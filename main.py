#!/usr/bin/env python3
"""
AtCoder Sample Fetcher
Main entry point for the application

This module provides:
- Command-line argument parsing
- Logging configuration
- Contest auto-detection when no contest is given
- Running the bounded per-problem fetch and reporting the outcome
"""

__version__ = "1.0.0"
__license__ = "MIT"
__description__ = "Download AtCoder sample test cases into per-problem folders"

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from scraper.atcoder_scraper import AtCoderScraper
from scraper.dispatcher import SampleDispatcher, DispatchSummary
from utils.config import FetchConfig, load_config
from utils.error_handler import SampleFetcherError, ConfigurationError, error_reporter
from utils.file_manager import FileManager


class ApplicationManager:
    """
    Owns the configuration, logging and scraper for one run.
    """

    def __init__(self, config: FetchConfig, log_level: str = "INFO"):
        self.config = config
        self.log_level = log_level
        self.scraper = None

    def initialize(self):
        self._setup_logging()
        self.scraper = AtCoderScraper(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            pool_size=self.config.concurrency,
            contest_prefix=self.config.contest_prefix
        )

    def _setup_logging(self):
        """
        Configure logging with console and optional file handlers.
        """
        log_level = getattr(logging, self.log_level.upper())

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if self.config.log_file else log_level)
        root_logger.handlers.clear()

        if self.config.log_file:
            try:
                file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(detailed_formatter)
                root_logger.addHandler(file_handler)
            except OSError as e:
                print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        # urllib3 logs every connection at DEBUG
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    def resolve_contest(self) -> FetchConfig:
        """
        Return the configuration with a contest id, detecting the latest contest if needed.

        Raises:
            SampleFetcherError: If detection fails
        """
        if self.config.contest_id:
            return self.config

        logging.info(f"Detecting the most recent contest with prefix '{self.config.contest_prefix}'...")
        contest_id = self.scraper.get_latest_contest_id()
        logging.info(f"Using the most recent contest: {contest_id}")
        self.config = self.config.with_contest(contest_id)
        return self.config

    def run(self) -> DispatchSummary:
        config = self.resolve_contest()
        dispatcher = SampleDispatcher(config, self.scraper, FileManager(config.output_dir))
        summary = dispatcher.run()

        if summary.failed:
            logging.warning(f"{summary.failed} of {summary.succeeded + summary.failed} problems failed: "
                            f"{error_reporter.get_error_summary()['categories']}")
        logging.info("All test cases fetched.")
        return summary

    def shutdown(self):
        if self.scraper:
            self.scraper.close()


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command line arguments.

    Returns:
        Tuple[argparse.ArgumentParser, argparse.Namespace]: Parser and parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Download AtCoder sample test cases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Latest ABC, problems a-g
  %(prog)s -contest abc349                   # A specific contest
  %(prog)s -contest abc349 -range a-d        # Problems a to d
  %(prog)s -concurrency 1                    # One problem at a time
        """
    )

    parser.add_argument(
        '-contest', '--contest',
        dest='contest',
        type=str,
        help='AtCoder contest ID (e.g., abc349); detects the most recent one if empty'
    )

    parser.add_argument(
        '-range', '--range',
        dest='problem_range',
        type=str,
        help='Problem range (e.g., a-d); first and last characters are the bounds (default: a-g)'
    )

    parser.add_argument(
        '-concurrency', '--concurrency',
        dest='concurrency',
        type=int,
        help='Max number of concurrent fetches (default: 4)'
    )

    parser.add_argument(
        '--output', '-o',
        dest='output_dir',
        type=str,
        help='Output directory for sample folders (default: testcases)'
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration file'
    )

    parser.add_argument(
        '--log-level', '-l',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='INFO',
        help='Set logging level (default: INFO)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write a detailed log to this file'
    )

    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser, parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """
    Main function of the AtCoder Sample Fetcher.

    Exits 0 once every problem has been attempted, whatever the per-problem
    outcome; 1 when the contest cannot be detected; 2 on invalid arguments.
    """
    parser, args = parse_arguments(argv)

    try:
        config = load_config(
            args.config,
            contest_id=args.contest,
            problem_range=args.problem_range,
            concurrency=args.concurrency,
            output_dir=args.output_dir,
            log_file=args.log_file
        )
    except ConfigurationError as e:
        parser.error(str(e))

    app_manager = ApplicationManager(config, args.log_level)

    try:
        app_manager.initialize()
        try:
            app_manager.resolve_contest()
        except SampleFetcherError as e:
            logging.error(f"Failed to detect the most recent contest: {e}")
            sys.exit(1)
        app_manager.run()
    except KeyboardInterrupt:
        logging.info("Application interrupted by user")
        sys.exit(130)
    except Exception as e:
        logging.error(f"Fatal application error: {e}")
        sys.exit(1)
    finally:
        app_manager.shutdown()

    sys.exit(0)


if __name__ == "__main__":
    main()
