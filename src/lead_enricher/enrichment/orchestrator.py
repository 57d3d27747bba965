"""
Enrichment orchestrator.
Resolves a company's website, crawls its contact and career pages and
assembles the enrichment result.
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict

from ..crawler.page_fetcher import PageFetcher, FetchedPage, normalize_whitespace
from ..crawler.link_classifier import LinkTopic, canonical_url, find_links
from ..config import get_config
from .contact_extractor import ContactExtractor, ContactSet
from .domain_resolver import DomainResolver, normalize_domain, domain_slug, CANDIDATE_TLDS
from .problem_inference import infer_problems, summarize_problems


class EnrichmentInputError(ValueError):
    """Raised when neither a domain nor a company name was given."""


def _require_input(domain: Optional[str], name: Optional[str]):
    domain = (domain or '').strip()
    name = (name or '').strip()
    if not domain and not name:
        raise EnrichmentInputError("Provide a domain or a company name")
    return domain, name


@dataclass
class EnrichmentResult:
    domain: str
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    inferred_problems: List[str] = field(default_factory=list)
    problem_summary: str = ""
    resolution_stage: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Enricher:
    """Drives one enrichment per call; holds no per-call state between calls."""

    def __init__(self, config=None, page_fetcher: Optional[PageFetcher] = None,
                 resolver: Optional[DomainResolver] = None):
        self.config = config or get_config()
        self.logger = logging.getLogger(__name__)
        self.page_fetcher = page_fetcher or PageFetcher(self.config)
        self.resolver = resolver or DomainResolver(self.config, self.page_fetcher)
        self.contact_extractor = ContactExtractor()

    def enrich(self, domain: Optional[str] = None, name: Optional[str] = None) -> EnrichmentResult:
        """Enrich a company given its domain, its name, or both."""
        domain, name = _require_input(domain, name)

        self.logger.info(f"Enriching domain={domain!r} name={name!r}")

        contacts = ContactSet()
        sources: List[str] = []
        texts: List[str] = []

        site = self.resolver.resolve(domain, name)
        if site is not None:
            self._collect(site.page, contacts, sources, texts)

            attempted = {canonical_url(site.page.url), canonical_url(site.page.final_url)}
            for link in self._candidate_links(site.page):
                if link.url in attempted:
                    continue
                attempted.add(link.url)

                page = self.page_fetcher.fetch_page(link.url)
                if page is None:
                    continue
                self._collect(page, contacts, sources, texts)

        problems = infer_problems(normalize_whitespace(' '.join(texts)))

        result = EnrichmentResult(
            domain=site.domain if site else self._fallback_domain(domain, name),
            emails=contacts.emails,
            phones=contacts.phones,
            sources=sources,
            inferred_problems=problems,
            problem_summary=summarize_problems(problems),
            resolution_stage=site.stage if site else None,
        )
        self.logger.info(
            f"Enriched {result.domain or name}: {len(result.emails)} emails, "
            f"{len(result.phones)} phones from {len(result.sources)} pages"
        )
        return result

    def _candidate_links(self, page: FetchedPage):
        soup = page.soup
        links = find_links(soup, page.final_url, LinkTopic.CONTACT)
        links.extend(find_links(soup, page.final_url, LinkTopic.CAREER))
        return links

    def _collect(self, page: FetchedPage, contacts: ContactSet, sources: List[str], texts: List[str]):
        contacts.update(self.contact_extractor.extract_from_page(page))
        if page.url not in sources:
            sources.append(page.url)
        if page.text:
            texts.append(page.text)

    @staticmethod
    def _fallback_domain(domain: str, name: str) -> str:
        domain = normalize_domain(domain)
        if domain:
            return domain
        slug = domain_slug(name)
        return slug + CANDIDATE_TLDS[0] if slug else ''

    def close(self):
        """Clean up resources."""
        self.resolver.close()
        self.page_fetcher.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def enrich(domain: Optional[str] = None, name: Optional[str] = None, config=None) -> EnrichmentResult:
    """Enrich a company record using a short-lived Enricher."""
    domain, name = _require_input(domain, name)
    with Enricher(config) as enricher:
        return enricher.enrich(domain, name)
