"""
Crawler module for Lead Enricher.
Handles page fetching, link classification and search-engine lookups.
"""

from .page_fetcher import PageFetcher, FetchedPage
from .link_classifier import CandidateLink, LinkTopic, find_links
from .search_engine import SearchEngineClient

__all__ = ['PageFetcher', 'FetchedPage', 'CandidateLink', 'LinkTopic', 'find_links', 'SearchEngineClient']
