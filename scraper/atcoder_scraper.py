"""
AtCoder scraper for AtCoder Sample Fetcher
Handles sample extraction from AtCoder task pages and contest detection from the archive
"""

from typing import List
import logging

from .base_scraper import BaseScraper
from .document import DocumentNode
from .models import Sample

from utils.error_handler import NotFoundError, handle_exception

logger = logging.getLogger(__name__)

SAMPLE_INPUT_HEADING = "Sample Input"
SAMPLE_OUTPUT_HEADING = "Sample Output"
CONTEST_LINK_PREFIX = "/contests/"


class AtCoderScraper(BaseScraper):
    """
    Scraper for AtCoder platform
    """

    BASE_URL = "https://atcoder.jp"

    def __init__(self, base_url: str = BASE_URL, timeout: int = 30, pool_size: int = 4,
                 contest_prefix: str = "abc"):
        """
        Initialize AtCoder scraper

        Args:
            base_url (str): Site root, without trailing slash
            timeout (int): Request timeout in seconds
            pool_size (int): HTTP connections kept open
            contest_prefix (str): Contest family accepted by get_latest_contest_id
        """
        super().__init__(timeout, pool_size)
        self.base_url = base_url.rstrip('/')
        self.contest_prefix = contest_prefix
        self.platform = "AtCoder"

    def build_problem_url(self, contest_id: str, problem_id: str) -> str:
        return f"{self.base_url}/contests/{contest_id}/tasks/{contest_id}_{problem_id}"

    def build_archive_url(self) -> str:
        return f"{self.base_url}/contests/archive"

    @handle_exception
    def fetch_samples(self, contest_id: str, problem_id: str) -> List[Sample]:
        """
        Fetch the sample cases of a task page

        Args:
            contest_id (str): Contest id, e.g. "abc349"
            problem_id (str): Problem letter, e.g. "a"

        Returns:
            List[Sample]: Samples in page order, possibly empty

        Raises:
            NotFoundError: If the task page does not exist
            FetchError: If the page cannot be fetched
            ParseError: If the page cannot be parsed
        """
        url = self.build_problem_url(contest_id, problem_id)
        document = self.get_page_content(url, f"problem {problem_id} not found (404)")

        samples = self.extract_samples(document)
        logger.debug(f"Extracted {len(samples)} samples from {url}")
        return samples

    @staticmethod
    def extract_samples(document: DocumentNode) -> List[Sample]:
        """
        Pair up sample input and output sections in document order

        A "Sample Input" section sets the pending input; a "Sample Output"
        section emits a sample with the pending input, which stays set. An
        output section seen before any input section therefore produces a
        sample with empty input. Task pages carry both a Japanese and an
        English statement; only the English headings match.

        Args:
            document (DocumentNode): Parsed task page

        Returns:
            List[Sample]: Extracted samples
        """
        samples = []
        pending_input = ""

        for section in document.find_all("section"):
            heading = "".join(h3.text() for h3 in section.find_all("h3"))
            text = "".join(pre.text() for pre in section.find_all("pre"))

            if heading.startswith(SAMPLE_INPUT_HEADING):
                pending_input = text
            elif heading.startswith(SAMPLE_OUTPUT_HEADING):
                samples.append(Sample(input=pending_input, output=text))

        return samples

    @handle_exception
    def get_latest_contest_id(self) -> str:
        """
        Find the most recent contest of the configured family in the archive

        Returns:
            str: Contest id, e.g. "abc349"

        Raises:
            NotFoundError: If no archive row links to a matching contest,
                or the archive page itself is missing
            FetchError: If the archive page cannot be fetched
            ParseError: If the archive page cannot be parsed
        """
        url = self.build_archive_url()
        document = self.get_page_content(url, "contests archive not found (404)")

        contest_id = self.extract_contest_id(document, self.contest_prefix)
        if not contest_id:
            raise NotFoundError(f"no contest starting with '{self.contest_prefix}' found in the archive", url)

        logger.info(f"Latest contest with prefix '{self.contest_prefix}': {contest_id}")
        return contest_id

    @staticmethod
    def extract_contest_id(document: DocumentNode, prefix: str) -> str:
        """
        Return the first archive row's contest id starting with prefix, or ""

        Each row's contest link is the first anchor whose href starts with
        /contests/; other anchors in the row (such as the start time link)
        are skipped.
        """
        for row in document.find_all("table tbody tr"):
            link = ""
            for anchor in row.find_all("a"):
                href = anchor.attr("href")
                if href.startswith(CONTEST_LINK_PREFIX):
                    link = href
                    break

            logger.debug(f"Archive row link: {link!r}")
            if not link:
                continue

            contest_id = link[len(CONTEST_LINK_PREFIX):].split('/')[0].split('?')[0]
            if contest_id.startswith(prefix):
                return contest_id

        return ""
