"""
Workbook Fetcher
Downloads the first candidate URL that resolves and parses it into a Workbook
"""

from typing import Callable, Iterable, Optional, Tuple, Type, TypeVar

import requests

from pipeline_errors import SourceUnavailable, WorkbookParseError
from workbook.workbook import Workbook

T = TypeVar("T")
R = TypeVar("R")

FETCH_ERRORS = (requests.RequestException, WorkbookParseError)


def first_successful(
    candidates: Iterable[T],
    attempt: Callable[[T], R],
    on_failure: Optional[Callable[[int, T, Exception], None]] = None,
    tolerated: Tuple[Type[Exception], ...] = FETCH_ERRORS,
) -> Tuple[T, R]:
    """
    Try candidates strictly in order and return the first success.

    Args:
        candidates: Ordered candidates, most likely first.
        attempt: Callable producing a result or raising one of `tolerated`.
        on_failure: Optional callback(index, candidate, error) for each failure.
        tolerated: Exception types that move on to the next candidate.
            Anything else propagates immediately.

    Returns:
        (candidate, result) for the first candidate that succeeded.

    Raises:
        SourceUnavailable: every candidate failed.
    """
    attempted = 0
    last_error = None
    for candidate in candidates:
        attempted += 1
        try:
            return candidate, attempt(candidate)
        except tolerated as e:
            last_error = e
            if on_failure is not None:
                on_failure(attempted, candidate, e)
    raise SourceUnavailable(attempted, last_error)


class WorkbookFetcher:
    """Sequential retry-with-fallback download of the poverty workbook"""

    def __init__(self, logger, config, session=None):
        """Initialize fetcher with logger, config and an optional requests session"""
        self.logger = logger
        self.config = config
        source = config.source_config
        self.timeout = float(source.get("timeout_seconds", 30))
        self.headers = {"User-Agent": source["user_agent"]}
        self.session = session or requests
        self.last_source_url = None

    def _download(self, url: str) -> bytes:
        """GET the URL and return the body; HTTP errors raise"""
        response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def _download_and_parse(self, url: str) -> Workbook:
        """Download one candidate and parse it"""
        self.logger.info(f"Downloading: {url}")
        return Workbook.from_bytes(self._download(url))

    def _log_failure(self, index: int, url: str, error: Exception):
        """Log a failed candidate"""
        self.logger.warning(f"Attempt {index} failed for {url}: {error}")

    def fetch(self, urls) -> Workbook:
        """Return the workbook from the first URL that downloads and parses"""
        urls = list(urls)
        self.logger.info(f"Trying {len(urls)} candidate URLs...")
        url, workbook = first_successful(urls, self._download_and_parse, self._log_failure)
        self.last_source_url = url
        self.logger.info(f"✓ Downloaded workbook from: {url}")
        self.logger.info(f"  Sheets: {', '.join(workbook.sheet_names)}")
        return workbook
