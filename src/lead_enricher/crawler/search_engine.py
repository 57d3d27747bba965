"""
Search engine client used as the last resort for locating a company website.
Queries the configured HTML search endpoint and picks the first usable result.
"""

import logging
from typing import List, Optional
from urllib.parse import urlparse, parse_qs, urljoin

from bs4 import BeautifulSoup

from .page_fetcher import PageFetcher
from .link_classifier import is_absolute_http_url
from ..config import get_config


class SearchEngineClient:
    """Runs a text query and selects corporate-looking result links."""

    def __init__(self, config=None, page_fetcher: Optional[PageFetcher] = None):
        self.config = config or get_config()
        self.logger = logging.getLogger(__name__)
        self.page_fetcher = page_fetcher or PageFetcher(self.config)

        self.search_url = self.config.crawler.search_url
        self.search_host = self._host(self.search_url)
        self.excluded_domains = [d.lower().lstrip('.') for d in self.config.crawler.search_excluded_domains]

    @staticmethod
    def _host(url: str) -> str:
        return (urlparse(url).hostname or '').lower()

    def is_excluded(self, url: str) -> bool:
        """True when url points at the search engine itself or an excluded domain."""
        host = self._host(url)
        if not host:
            return True
        if host == self.search_host:
            return True
        return any(host == domain or host.endswith('.' + domain) for domain in self.excluded_domains)

    def unwrap_result_url(self, href: str) -> str:
        """Return the target of a search-engine redirect link, or href unchanged."""
        try:
            absolute = urljoin(self.search_url, href)
            parsed = urlparse(absolute)
        except ValueError:
            return href

        if self.is_excluded(absolute):
            targets = parse_qs(parsed.query).get('uddg')
            if targets:
                return targets[0]
        return href

    def result_urls(self, soup: BeautifulSoup) -> List[str]:
        """List candidate result URLs from a results page, in page order."""
        urls = []
        for anchor in soup.find_all('a', href=True):
            url = self.unwrap_result_url(anchor['href'].strip())
            try:
                if not is_absolute_http_url(url) or self.is_excluded(url):
                    continue
            except ValueError:
                continue
            if url not in urls:
                urls.append(url)
        return urls

    def first_result(self, query: str) -> Optional[str]:
        """Run query and return the first acceptable result URL, if any."""
        self.logger.info(f"Searching for: {query}")
        page = self.page_fetcher.fetch_page(self.search_url, params={'q': query})
        if page is None:
            self.logger.warning(f"Search request failed for query '{query}'")
            return None

        urls = self.result_urls(page.soup)
        if not urls:
            self.logger.info(f"No usable search results for '{query}'")
            return None

        self.logger.debug(f"First search result for '{query}': {urls[0]}")
        return urls[0]

    def close(self):
        """Clean up resources."""
        self.page_fetcher.close()
