"""Build keyword components from settings."""

import random
from typing import Optional

from ..config import Settings, get_settings
from ..research.trends import build_trend_source
from .metrics_synthesizer import KeywordMetricsSynthesizer
from .remote_suggestions import RemoteSuggestionFetcher
from .search_orchestrator import SearchOrchestrator
from .suggestion_expander import SuggestionExpander


def build_rng(settings: Optional[Settings] = None) -> random.Random:
    """Seeded when ``random_seed`` is configured."""
    settings = settings or get_settings()
    return random.Random(settings.random_seed)


def build_expander(settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> SuggestionExpander:
    settings = settings or get_settings()
    return SuggestionExpander(
        rng=rng or build_rng(settings),
        limit=settings.expander_limit,
        alphabet_limit=settings.alphabet_limit,
    )


def build_fetcher(settings: Optional[Settings] = None, expander: Optional[SuggestionExpander] = None) -> RemoteSuggestionFetcher:
    settings = settings or get_settings()
    return RemoteSuggestionFetcher(
        expander=expander or build_expander(settings),
        timeout=settings.suggest_timeout,
        max_live=settings.suggest_max_live,
        remote_enabled=settings.remote_enabled,
    )


def build_synthesizer(settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> KeywordMetricsSynthesizer:
    settings = settings or get_settings()
    return KeywordMetricsSynthesizer(
        trend_source=build_trend_source(settings),
        rng=rng or build_rng(settings),
    )


def build_orchestrator(settings: Optional[Settings] = None) -> SearchOrchestrator:
    """Wire a complete orchestrator sharing one random source."""
    settings = settings or get_settings()
    rng = build_rng(settings)
    expander = build_expander(settings, rng=rng)
    return SearchOrchestrator(
        expander=expander,
        fetcher=build_fetcher(settings, expander=expander),
        synthesizer=build_synthesizer(settings, rng=rng),
        max_related=settings.max_related,
        batch_size=settings.batch_size,
        batch_delay=settings.batch_delay,
        lightweight=settings.lightweight,
    )
