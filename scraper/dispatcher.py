"""
Bounded fan-out of per-problem fetch-and-save tasks

One task is queued per problem letter on a pool of ``concurrency`` worker
threads, so at most that many fetch/save tasks run at once; the rest wait
in the queue. A failing task is logged and does not affect its siblings.
"""

import logging
import traceback
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional

from utils.config import FetchConfig
from utils.error_handler import (
    SampleFetcherError, ErrorInfo, ErrorCategory, ErrorSeverity,
    error_reporter
)
from utils.file_manager import FileManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchSummary:
    succeeded: int
    failed: int


class SampleDispatcher:
    """
    Runs fetch-and-save for every problem in a FetchConfig's range.

    Attributes:
        config (FetchConfig): Settings with a resolved contest id
        scraper: Object providing ``fetch_samples(contest_id, problem_id)``
        file_manager (FileManager): Writer for the sample files
    """

    def __init__(self, config: FetchConfig, scraper, file_manager: Optional[FileManager] = None):
        if not config.contest_id:
            raise ValueError("SampleDispatcher needs a resolved contest id")
        self.config = config
        self.scraper = scraper
        self.file_manager = file_manager or FileManager(config.output_dir)

    def run(self) -> DispatchSummary:
        """
        Fetch and save every problem, returning once all tasks have finished

        Returns:
            DispatchSummary: Number of problems saved and failed
        """
        problem_ids = list(self.config.problem_ids())
        if not problem_ids:
            logger.warning(f"Problem range '{self.config.problem_range}' is empty")
            return DispatchSummary(0, 0)

        with ThreadPoolExecutor(max_workers=min(self.config.concurrency, len(problem_ids)),
                                thread_name_prefix="fetch") as executor:
            futures = [executor.submit(self._fetch_and_save, problem_id)
                       for problem_id in problem_ids]
            wait(futures)

        succeeded = sum(1 for future in futures if future.result())
        return DispatchSummary(succeeded, len(futures) - succeeded)

    def _fetch_and_save(self, problem_id: str) -> bool:
        contest_id = self.config.contest_id
        logger.info(f"Fetching problem {contest_id}_{problem_id}...")

        try:
            samples = self.scraper.fetch_samples(contest_id, problem_id)
        except SampleFetcherError as e:
            logger.warning(f"Skipping {problem_id}: {e}")
            return False
        except Exception as e:
            self._report_unexpected(e, problem_id)
            logger.warning(f"Skipping {problem_id}: {e}")
            return False

        folder = self.file_manager.problem_dir(problem_id)
        try:
            self.file_manager.save_samples(samples, folder)
        except SampleFetcherError as e:
            logger.error(f"Failed to save {problem_id}: {e}")
            return False
        except Exception as e:
            self._report_unexpected(e, problem_id)
            logger.error(f"Failed to save {problem_id}: {e}")
            return False

        logger.info(f"Saved {len(samples)} samples to {folder}/")
        return True

    @staticmethod
    def _report_unexpected(error: Exception, problem_id: str) -> None:
        error_reporter.report_error(ErrorInfo(
            message=f"Unexpected error processing problem {problem_id}: {error}",
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.MEDIUM,
            original_exception=error,
            traceback_str=traceback.format_exc()
        ))
