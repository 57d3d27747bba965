"""
Lead Enricher - company website enrichment

Turns a bare company name or domain into contact emails, phone numbers,
source pages and a few likely business problems mined from its website.
"""

__version__ = "1.0.0"

from .enrichment.orchestrator import EnrichmentInputError, EnrichmentResult, enrich

__all__ = ['enrich', 'EnrichmentInputError', 'EnrichmentResult', '__version__']
