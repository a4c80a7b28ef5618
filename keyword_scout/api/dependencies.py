"""
Shared component instances for request handlers.

Tests replace these through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Optional

from keyword_scout.config import get_settings
from keyword_scout.research.trends import TrendSource, build_trend_source
from keyword_scout.seo.factory import build_orchestrator
from keyword_scout.seo.remote_suggestions import RemoteSuggestionFetcher
from keyword_scout.seo.search_orchestrator import SearchOrchestrator
from keyword_scout.seo.suggestion_expander import SuggestionExpander
from keyword_scout.session import RequestTokenIssuer


@lru_cache(maxsize=1)
def get_orchestrator() -> SearchOrchestrator:
    return build_orchestrator(get_settings())


def get_fetcher() -> RemoteSuggestionFetcher:
    return get_orchestrator().fetcher


def get_expander() -> SuggestionExpander:
    return get_orchestrator().expander


@lru_cache(maxsize=1)
def get_trend_source() -> Optional[TrendSource]:
    return build_trend_source(get_settings())


@lru_cache(maxsize=1)
def get_token_issuer() -> RequestTokenIssuer:
    return RequestTokenIssuer()
