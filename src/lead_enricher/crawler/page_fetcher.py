"""
Page fetcher for crawling individual web pages.
Fetches a single URL and reduces every kind of failure to an absent result.
"""

import re
import time
import logging
from typing import List, Optional
from dataclasses import dataclass, field

import requests
from bs4 import BeautifulSoup

from ..config import get_config


_WHITESPACE_RE = re.compile(r'\s+')


@dataclass
class FetchedPage:
    """Represents a successfully fetched HTML page."""
    url: str
    final_url: str
    html: str
    text: str
    status_code: int
    response_time: float
    contact_hrefs: List[str] = field(default_factory=list)

    @property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, 'html.parser')


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return _WHITESPACE_RE.sub(' ', text or '').strip()


class PageFetcher:
    """Handles fetching individual web pages."""

    def __init__(self, config=None):
        self.config = config or get_config()
        self.logger = logging.getLogger(__name__)

        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.crawler.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
            'Accept-Encoding': 'gzip, deflate',
        })

    def fetch_page(self, url: str, params: Optional[dict] = None) -> Optional[FetchedPage]:
        """Fetch a single web page.

        Returns None when the page could not be fetched for any reason
        (transport error, timeout, non-2xx status, non-textual content).
        There are no retries: callers fall back to other URLs instead.
        """
        try:
            # Make request
            start_time = time.time()
            response = self.session.get(
                url,
                params=params,
                timeout=self.config.crawler.timeout,
                allow_redirects=True
            )
            response_time = time.time() - start_time
        except requests.exceptions.Timeout:
            self.logger.warning(f"Timeout fetching {url}")
            return None
        except requests.exceptions.ConnectionError:
            self.logger.warning(f"Connection error fetching {url}")
            return None
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Request error fetching {url}: {e}")
            return None
        except ValueError as e:
            # IDNA/unicode failures on hostnames surface as ValueError subclasses
            self.logger.warning(f"Invalid URL {url}: {e}")
            return None

        page = self._parse_page_content(response, url, response_time)
        if page:
            self.logger.debug(f"Successfully fetched: {url}")
        return page

    def _parse_page_content(self, response: requests.Response, url: str,
                            response_time: float) -> Optional[FetchedPage]:
        """Parse page content from HTTP response."""
        # Check status code
        if not 200 <= response.status_code < 300:
            self.logger.warning(f"HTTP {response.status_code} for {url}")
            return None

        # Check content type
        content_type = response.headers.get('content-type', '').lower()
        if content_type and 'html' not in content_type and 'text' not in content_type:
            self.logger.debug(f"Skipping non-HTML content: {url} ({content_type})")
            return None

        # Parse HTML
        html = response.text
        soup = BeautifulSoup(html, 'html.parser')

        # Collect mailto: and tel: targets
        contact_hrefs = []
        for link in soup.find_all('a', href=True):
            href = link['href'].strip()
            if href.lower().startswith(('mailto:', 'tel:')):
                target = href.split(':', 1)[1].split('?')[0]
                if target:
                    contact_hrefs.append(target)

        # Remove script and style elements
        for element in soup(['script', 'style', 'noscript']):
            element.decompose()

        # Clean up text
        text = normalize_whitespace(soup.get_text(separator=' '))

        return FetchedPage(
            url=url,
            final_url=response.url or url,
            html=html,
            text=text,
            status_code=response.status_code,
            response_time=response_time,
            contact_hrefs=contact_hrefs,
        )

    def close(self):
        """Clean up resources."""
        if hasattr(self, 'session'):
            self.session.close()
