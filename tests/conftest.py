"""
Pytest configuration and fixtures for Keyword Scout tests.
"""

import random
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rng():
    """Seeded random source for repeatable draws."""
    return random.Random(1234)


class FakeTrendSource:
    """Trend collaborator returning a fixed week (or raising)."""

    def __init__(self, week=None, error=None):
        self.week = week if week is not None else [40, 45, 50, 55, 60, 65, 70]
        self.error = error
        self.calls = []

    def fetch_week(self, keyword):
        self.calls.append(keyword)
        if self.error is not None:
            raise self.error
        return list(self.week)


@pytest.fixture
def fake_trend_source():
    """Trend source with a steady week averaging 55."""
    return FakeTrendSource()


@pytest.fixture
def failing_trend_source():
    """Trend source that always fails."""
    from keyword_scout.research.trends import TrendDataError
    return FakeTrendSource(error=TrendDataError("network down"))


def make_response(status_code=200, text=""):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def mock_http_session():
    """Mock requests.Session whose get() is configured per test."""
    return MagicMock()


@pytest.fixture
def offline_orchestrator(rng, mock_http_session):
    """Orchestrator with no trend source, failing autocomplete and no batch delay."""
    from keyword_scout.seo.metrics_synthesizer import KeywordMetricsSynthesizer
    from keyword_scout.seo.remote_suggestions import RemoteSuggestionFetcher
    from keyword_scout.seo.search_orchestrator import SearchOrchestrator
    from keyword_scout.seo.suggestion_expander import SuggestionExpander

    mock_http_session.get.return_value = make_response(503)
    expander = SuggestionExpander(rng=rng)
    return SearchOrchestrator(
        expander=expander,
        fetcher=RemoteSuggestionFetcher(expander=expander, session=mock_http_session),
        synthesizer=KeywordMetricsSynthesizer(rng=rng),
        batch_delay=0,
    )


@pytest.fixture
def response_factory():
    """Factory for mock autocomplete HTTP responses."""
    return make_response


@pytest.fixture
def trend_source_factory():
    """Factory for trend sources returning a given week."""
    return lambda week: FakeTrendSource(week=week)
