"""
Link classification for discovered pages.
Finds anchors that probably lead to contact or hiring information.
"""

import logging
from enum import Enum
from typing import List
from urllib.parse import urldefrag, urljoin, urlparse
from dataclasses import dataclass

from bs4 import BeautifulSoup


logger = logging.getLogger(__name__)


class LinkTopic(str, Enum):
    CONTACT = "contact"
    CAREER = "career"


@dataclass(frozen=True)
class CandidateLink:
    """A resolved absolute URL and the topic it matched."""
    url: str
    topic: LinkTopic


# (href vocabulary, visible text vocabulary)
TOPIC_VOCABULARY = {
    LinkTopic.CONTACT: (('contact', 'about', 'team'), ('contact', 'about', 'team')),
    LinkTopic.CAREER: (('career', 'job', 'vacancy'), ('career', 'jobs', 'join us')),
}

TOPIC_LIMITS = {
    LinkTopic.CONTACT: 8,
    LinkTopic.CAREER: 6,
}


def get_origin(url: str) -> str:
    """Return scheme://host[:port] for an absolute URL."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Cannot determine origin of {url!r}")
    return f"{parsed.scheme}://{parsed.netloc}"


def canonical_url(url: str) -> str:
    """Drop the fragment and give a bare host an explicit '/' path."""
    url = urldefrag(url).url
    parsed = urlparse(url)
    if parsed.netloc and not parsed.path:
        url = parsed._replace(path='/').geturl()
    return url


def is_absolute_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def resolve_url(href: str, base_url: str) -> str:
    """Resolve an href found on base_url into an absolute http(s) URL.

    Raises ValueError when the result is not a fetchable absolute URL.
    """
    href = href.strip()
    if href.startswith('/'):
        resolved = urljoin(get_origin(base_url), href)
    elif not is_absolute_http_url(href):
        resolved = urljoin(base_url, href)
    else:
        resolved = href

    # Fragments point back at the same document
    resolved = canonical_url(resolved)
    if not is_absolute_http_url(resolved):
        raise ValueError(f"Not an absolute http(s) URL: {resolved!r}")
    return resolved


def _matches(link, topic: LinkTopic) -> bool:
    href_words, text_words = TOPIC_VOCABULARY[topic]
    href = link.get('href', '').lower()
    text = link.get_text(' ', strip=True).lower()
    return any(word in href for word in href_words) or any(word in text for word in text_words)


def find_links(soup: BeautifulSoup, base_url: str, topic: LinkTopic) -> List[CandidateLink]:
    """Find links on a parsed page that match the topic vocabulary.

    Relative links are resolved against base_url, duplicates are dropped
    in first-seen order and the result is capped per topic.
    """
    topic = LinkTopic(topic)
    seen = set()
    links = []

    for anchor in soup.find_all('a', href=True):
        if not _matches(anchor, topic):
            continue

        try:
            url = resolve_url(anchor['href'], base_url)
        except ValueError as e:
            logger.debug(f"Dropping link {anchor['href']!r} on {base_url}: {e}")
            continue

        if url in seen:
            continue
        seen.add(url)
        links.append(CandidateLink(url=url, topic=topic))

    return links[:TOPIC_LIMITS[topic]]
