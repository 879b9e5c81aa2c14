"""
Wiki Client

Fetches Game8 Monster Hunter Rise pages with:
- Exponential-backoff retries on transport errors and 5xx responses
- A pause after every successful request (rate limit)
- FetchError once retries are exhausted

Page discovery reads an index page and collects (page_id, name) pairs from
its links.
"""

import logging
import re
import time
from typing import List, Optional, Tuple

import requests
from lxml import html
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mhrise_wiki.config import AppConfig, get_app_config
from mhrise_wiki.exceptions import FetchError
from mhrise_wiki.parsers.text import icon_label, normalize

logger = logging.getLogger(__name__)

_ARCHIVE_LINK = re.compile(r'/archives/(\d+)')


class ServerError(Exception):
    """Retryable 5xx response."""
    pass


class WikiClient:
    """
    HTTP client for wiki pages.

    Usage:
        client = WikiClient()
        page_html = client.get_page(344983)
        pages = client.list_monster_pages(336421)
    """

    def __init__(
        self,
        app_config: Optional[AppConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize client.

        Args:
            app_config: Fetch settings (defaults to environment config)
            session: Optional requests session (for connection reuse/tests)
        """
        self._config = app_config or get_app_config()
        self._session = session or requests.Session()
        self._session.headers.update({'User-Agent': self._config.user_agent})

    @retry(
        wait=wait_exponential(multiplier=1, min=1, max=30),
        stop=stop_after_attempt(5),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout, ServerError)),
    )
    def _get(self, url: str) -> str:
        response = self._session.get(url, timeout=self._config.request_timeout)
        if response.status_code >= 500:
            raise ServerError(f"Server error {response.status_code} for {url}")
        response.raise_for_status()
        time.sleep(self._config.rate_limit_seconds)
        return response.text

    def get_page(self, page_id) -> str:
        """
        Fetch raw HTML of a page.

        Args:
            page_id: Numeric page id (archives/{page_id})

        Returns:
            Page HTML

        Raises:
            FetchError: If the page cannot be fetched after retries
        """
        url = self._config.page_url(page_id)
        logger.debug(f"Fetching page {page_id}: {url}")

        try:
            return self._get(url)
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error(f"Giving up on page {page_id} after retries: {cause}")
            raise FetchError(page_id, f"Failed to fetch {url}: {cause}") from e
        except (requests.RequestException, ServerError) as e:
            logger.error(f"Failed to fetch page {page_id}: {e}")
            raise FetchError(page_id, f"Failed to fetch {url}: {e}") from e

    def list_monster_pages(self, index_page_id) -> List[Tuple[str, str]]:
        """
        Discover monster pages linked from an index page.

        Args:
            index_page_id: Page id of the monster list page

        Returns:
            (page_id, name) pairs in page order, without duplicates

        Raises:
            FetchError: If the index page cannot be fetched
        """
        document = html.fromstring(self.get_page(index_page_id))
        pages = parse_monster_links(document, exclude=str(index_page_id))
        logger.info(f"Found {len(pages)} monster pages on index page {index_page_id}")
        return pages


def parse_monster_links(
    document: html.HtmlElement,
    exclude: Optional[str] = None
) -> List[Tuple[str, str]]:
    """
    Collect (page_id, name) pairs from archive links inside tables.

    Link text is used as the name, or the link icon's alt text for
    icon-only links.
    """
    pages = []
    seen = set()

    for anchor in document.xpath('//table//a[@href]'):
        match = _ARCHIVE_LINK.search(anchor.get('href'))
        if not match:
            continue

        page_id = match.group(1)
        if page_id == exclude or page_id in seen:
            continue

        name = normalize(anchor) or icon_label(anchor)
        if not name:
            continue

        seen.add(page_id)
        pages.append((page_id, name))

    return pages
