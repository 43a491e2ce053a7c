"""Pytest configuration and shared fixtures for the html2all test suite.

This module provides shared fixtures and test configuration used across the
unit and integration tests.
"""

import pytest
from bs4 import BeautifulSoup

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=30)

    import os

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "docx: Tests that need python-docx")
    config.addinivalue_line("markers", "pdf: Tests that need fpdf2")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def soup():
    """Return a helper that parses a markup fragment with the stdlib parser."""

    def _parse(markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, "html.parser")

    return _parse


@pytest.fixture
def sample_html() -> str:
    """Provide a page exercising most supported elements.

    Returns
    -------
    str
        HTML page with regions, headings, emphasis, a list and a table.

    """
    return """<html>
<head><title>Quarterly report</title><style>p { color: red; }</style></head>
<body>
<header>ACME Corp</header>
<h1>Quarterly report</h1>
<p>Revenue grew <b>12%</b> compared to <i>last quarter</i>.</p>
<ul>
  <li>North region</li>
  <li>South region</li>
</ul>
<table border="1">
  <thead><tr><th>Region</th><th>Sales</th></tr></thead>
  <tbody>
    <tr><td>North</td><td>120</td></tr>
    <tr><td>South</td><td>95</td></tr>
  </tbody>
</table>
<footer>Confidential</footer>
</body>
</html>"""
