"""
Base scraper class for AtCoder Sample Fetcher

This module provides the abstract base class shared by contest site scrapers.
It owns the HTTP session and turns transport failures and HTTP statuses into
the fetcher's error types before handing parsed documents to subclasses.

The BaseScraper class implements:
- Requests session configuration with browser-like headers
- A connection pool sized for the configured number of concurrent fetches
- Status handling: 404 becomes NotFoundError, any other non-200 FetchError
- Body decoding (header charset, then <meta>, then UTF-8) and HTML parsing
  into the document query layer

Example:
    >>> from scraper.atcoder_scraper import AtCoderScraper
    >>> scraper = AtCoderScraper(timeout=30)
    >>> samples = scraper.fetch_samples("abc349", "a")
    >>> samples[0].input
    '3\\n'

Note:
    Requests are never retried. A failed request fails the operation that
    issued it.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from bs4.dammit import EncodingDetector

from scraper.document import DocumentNode, parse_html
from scraper.models import Sample
from utils.error_handler import FetchError, NotFoundError

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    Abstract base class for contest site scrapers.

    Attributes:
        timeout (int): Request timeout in seconds
        session (requests.Session): Shared HTTP session, safe to use from
            several worker threads for plain GET requests
    """

    def __init__(self, timeout: int = 30, pool_size: int = 4):
        """
        Initialize the base scraper.

        Args:
            timeout (int, optional): Request timeout in seconds. Defaults to 30.
            pool_size (int, optional): Connections kept per host. Should match
                the number of concurrent fetches. Defaults to 4.
        """
        self.timeout = timeout
        self.session = requests.Session()

        self.session.headers.update({
            'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36',
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })

        adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def get_page_content(self, url: str, not_found_message: str = "") -> DocumentNode:
        """
        Fetch a page and parse it

        Args:
            url (str): URL to fetch
            not_found_message (str): Message used when the server answers 404

        Returns:
            DocumentNode: Parsed document

        Raises:
            NotFoundError: If the server answers 404
            FetchError: On transport errors or any other non-200 status
            ParseError: If the HTML cannot be parsed
        """
        logger.debug(f"Fetching content from: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except RequestException as e:
            raise FetchError(f"failed to fetch {url}: {e}", original_exception=e, url=url) from e

        if response.status_code == 404:
            raise NotFoundError(not_found_message or f"page not found (404): {url}", url, status_code=404)

        if response.status_code != 200:
            raise FetchError(f"unexpected status code {response.status_code}",
                             url=url, status_code=response.status_code)

        return parse_html(self.decode_response(response), url)

    @staticmethod
    def decode_response(response: requests.Response) -> str:
        """
        Decode a response body

        A charset in the Content-Type header wins. Otherwise the document's
        own <meta> declaration is used, falling back to UTF-8. requests would
        assume ISO-8859-1 for text/html without a charset.
        """
        content_type = response.headers.get('Content-Type', '')
        if 'charset' in content_type.lower() and response.encoding:
            encoding = response.encoding
        else:
            encoding = EncodingDetector.find_declared_encoding(response.content, is_html=True) or 'utf-8'

        try:
            return response.content.decode(encoding, errors='replace')
        except LookupError:
            logger.warning(f"Unknown encoding {encoding!r} for {response.url}, using UTF-8")
            return response.content.decode('utf-8', errors='replace')

    @abstractmethod
    def build_problem_url(self, contest_id: str, problem_id: str) -> str:
        """Return the page URL of a problem."""
        raise NotImplementedError

    @abstractmethod
    def fetch_samples(self, contest_id: str, problem_id: str) -> List[Sample]:
        """Fetch the sample cases of one problem, in page order."""
        raise NotImplementedError

    @abstractmethod
    def get_latest_contest_id(self) -> str:
        """Find the most recent contest of the configured family."""
        raise NotImplementedError

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()
        return False
