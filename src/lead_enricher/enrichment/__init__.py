"""
Enrichment module for Lead Enricher.
Handles domain resolution, contact extraction and problem inference.
"""

from .contact_extractor import ContactExtractor, ContactSet, extract_contacts
from .problem_inference import PROBLEM_RULES, ProblemKeywordRule, infer_problems
from .domain_resolver import DomainResolver, ResolvedSite
from .orchestrator import Enricher, EnrichmentInputError, EnrichmentResult, enrich

__all__ = [
    'ContactExtractor', 'ContactSet', 'extract_contacts',
    'PROBLEM_RULES', 'ProblemKeywordRule', 'infer_problems',
    'DomainResolver', 'ResolvedSite',
    'Enricher', 'EnrichmentInputError', 'EnrichmentResult', 'enrich',
]
