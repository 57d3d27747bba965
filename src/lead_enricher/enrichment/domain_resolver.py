"""
Domain resolution for companies.

Locates a usable home page for a company by trying, in order:

1. the supplied domain under its https/http and www variants,
2. a domain guessed from the company name across common TLDs,
3. a search-engine query for "<name> company",
4. a search-engine query for "<name> contact".

Each stage runs only if every earlier stage came back empty, and the first
page that fetches successfully wins. Failing every stage is not an error.
"""

import re
import logging
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlparse
from dataclasses import dataclass

from ..crawler.page_fetcher import PageFetcher, FetchedPage
from ..crawler.search_engine import SearchEngineClient
from ..config import get_config


CANDIDATE_TLDS = ('.com', '.in', '.co.in', '.net', '.org', '.io')
MAX_NAME_TOKENS = 3

STAGE_DIRECT = 'direct_domain'
STAGE_NAME_TLD = 'name_tld_permutation'
STAGE_SEARCH_COMPANY = 'search_company'
STAGE_SEARCH_CONTACT = 'search_contact'


@dataclass(frozen=True)
class ResolvedSite:
    """The first page found for a company and how it was found."""
    domain: str
    page: FetchedPage
    stage: str


def normalize_domain(domain: Optional[str]) -> str:
    """Reduce user input such as 'https://Example.com/about' to 'example.com'."""
    if not domain:
        return ''
    domain = domain.strip().lower()
    if '://' not in domain:
        domain = '//' + domain
    try:
        host = urlparse(domain).hostname or ''
    except ValueError:
        return ''
    return host.strip('.')


def domain_slug(name: Optional[str]) -> str:
    """Build a domain label from a company name: 'Acme Widgets Pvt. Ltd' -> 'acmewidgetspvt'."""
    if not name:
        return ''
    cleaned = re.sub(r'[^a-z0-9\s]', '', name.lower())
    return ''.join(cleaned.split()[:MAX_NAME_TOKENS])


def url_variants(domain: str) -> List[str]:
    variants = [f"https://{domain}", f"http://{domain}"]
    if not domain.startswith('www.'):
        variants.extend([f"https://www.{domain}", f"http://www.{domain}"])
    return variants


class DomainResolver:
    """Runs the ordered resolution stages until one yields a page."""

    def __init__(self, config=None, page_fetcher: Optional[PageFetcher] = None,
                 search_client: Optional[SearchEngineClient] = None):
        self.config = config or get_config()
        self.logger = logging.getLogger(__name__)
        self.page_fetcher = page_fetcher or PageFetcher(self.config)
        self.search_client = search_client or SearchEngineClient(self.config, self.page_fetcher)

    def stages(self) -> List[Tuple[str, Callable[[str, str], Optional[ResolvedSite]]]]:
        return [
            (STAGE_DIRECT, self._resolve_direct),
            (STAGE_NAME_TLD, self._resolve_name_tlds),
            (STAGE_SEARCH_COMPANY, self._resolve_search_company),
            (STAGE_SEARCH_CONTACT, self._resolve_search_contact),
        ]

    def resolve(self, domain: Optional[str] = None, name: Optional[str] = None) -> Optional[ResolvedSite]:
        """Return the first site any stage finds, or None."""
        domain = normalize_domain(domain)
        name = (name or '').strip()

        for stage_name, stage in self.stages():
            site = stage(domain, name)
            if site is not None:
                self.logger.info(f"Resolved {site.page.url} via {stage_name}")
                return site
            self.logger.debug(f"Stage {stage_name} found nothing")

        self.logger.info(f"Could not resolve a website for domain={domain!r} name={name!r}")
        return None

    def _fetch_first(self, domain: str, stage: str) -> Optional[ResolvedSite]:
        for url in url_variants(domain):
            page = self.page_fetcher.fetch_page(url)
            if page is not None:
                return ResolvedSite(domain=domain, page=page, stage=stage)
        return None

    def _resolve_direct(self, domain: str, name: str) -> Optional[ResolvedSite]:
        if not domain:
            return None
        return self._fetch_first(domain, STAGE_DIRECT)

    def _resolve_name_tlds(self, domain: str, name: str) -> Optional[ResolvedSite]:
        slug = domain_slug(name)
        if not slug:
            return None

        for tld in CANDIDATE_TLDS:
            site = self._fetch_first(slug + tld, STAGE_NAME_TLD)
            if site is not None:
                return site
        return None

    def _resolve_search(self, query: str, stage: str) -> Optional[ResolvedSite]:
        url = self.search_client.first_result(query)
        if url is None:
            return None

        page = self.page_fetcher.fetch_page(url)
        if page is None:
            return None
        return ResolvedSite(domain=normalize_domain(url), page=page, stage=stage)

    def _resolve_search_company(self, domain: str, name: str) -> Optional[ResolvedSite]:
        if not name:
            return None
        return self._resolve_search(f"{name} company", STAGE_SEARCH_COMPANY)

    def _resolve_search_contact(self, domain: str, name: str) -> Optional[ResolvedSite]:
        if not name:
            return None
        return self._resolve_search(f"{name} contact", STAGE_SEARCH_CONTACT)

    def close(self):
        """Clean up resources."""
        self.page_fetcher.close()
