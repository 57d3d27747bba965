"""
Pytest configuration and fixtures for Lead Enricher tests.
"""

import os
import sys
import pytest
import tempfile
from pathlib import Path

from bs4 import BeautifulSoup

# Add src to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from lead_enricher.config import Config, CrawlerConfig, AppConfig
from lead_enricher.crawler.page_fetcher import FetchedPage, normalize_whitespace


@pytest.fixture
def test_config():
    """Provide test configuration."""
    return Config(
        crawler=CrawlerConfig(
            user_agent='TestBot/1.0',
            timeout=10,
        ),
        app=AppConfig(log_level='DEBUG'),
    )


@pytest.fixture
def temp_dir():
    """Provide temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Setup test environment variables."""
    monkeypatch.setenv('LOG_LEVEL', 'DEBUG')
    for var in ('ENRICHER_USER_AGENT', 'ENRICHER_TIMEOUT', 'ENRICHER_SEARCH_URL'):
        monkeypatch.delenv(var, raising=False)


def make_page(url, html, final_url=None):
    """Build a FetchedPage the way PageFetcher would, without any HTTP."""
    soup = BeautifulSoup(html, 'html.parser')
    return FetchedPage(
        url=url,
        final_url=final_url or url,
        html=html,
        text=normalize_whitespace(soup.get_text(separator=' ')),
        status_code=200,
        response_time=0.01,
    )


class FakeFetcher:
    """Page fetcher double that serves canned pages and records every URL asked for."""

    def __init__(self, pages=None):
        self.pages = pages or {}
        self.requested = []

    def fetch_page(self, url, params=None):
        self.requested.append(url)
        return self.pages.get(url)

    def close(self):
        pass


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def sample_html_content():
    """Sample company home page."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Acme Widgets</title>
        <script>var build = 20240101123456;</script>
    </head>
    <body>
        <h1>Welcome to Acme Widgets</h1>
        <p>We still manage orders in Excel. Write to sales@acme.com for a quote.</p>
        <nav>
            <a href="/contact-us">Contact</a>
            <a href="about.html">About us</a>
            <a href="/broken-team">Our Team</a>
            <a href="/contact-us">Contact again</a>
            <a href="https://acme.com/careers">Careers</a>
            <a href="mailto:hello@acme.com">Email us</a>
        </nav>
    </body>
    </html>
    """


@pytest.fixture
def sample_contact_html():
    return """
    <html><body>
        <h1>Get in touch</h1>
        <p>Call +91 98765 43210 or mail SALES@ACME.COM.</p>
    </body></html>
    """


@pytest.fixture
def sample_about_html():
    return "<html><body><p>Acme Widgets was founded by two engineers.</p></body></html>"


@pytest.fixture
def sample_careers_html():
    return "<html><body><p>We are hiring! Recruiting: jobs@acme.com</p></body></html>"


@pytest.fixture
def mock_search_response():
    """Search engine results page with redirect-wrapped and excluded links."""
    return """
    <html>
    <body>
        <a href="https://duckduckgo.com/settings">Settings</a>
        <div class="result">
            <a class="result__a" href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.facebook.com%2Facme&amp;rut=abc">Acme on Facebook</a>
        </div>
        <div class="result">
            <a class="result__a" href="https://in.linkedin.com/company/acme">Acme | LinkedIn</a>
        </div>
        <div class="result">
            <a class="result__a" href="//duckduckgo.com/l/?uddg=https%3A%2F%2Fwww.acmewidgets.co%2F&amp;rut=def">Acme Widgets - Home</a>
        </div>
        <div class="result">
            <a class="result__a" href="https://www.acme-other.com/">Acme Other</a>
        </div>
    </body>
    </html>
    """
