"""
Keyword expansion and metrics module.

Components:
- SuggestionExpander: Template-driven candidate generation
- RemoteSuggestionFetcher: Live autocomplete with local fallback
- KeywordMetricsSynthesizer: Mock volume/difficulty/intent metrics
- SearchOrchestrator: End-to-end keyword search
"""

from .models import (
    Difficulty,
    SearchIntent,
    SuggestionSource,
    MetricsSource,
    KeywordRecord,
    SuggestionResult,
    SearchResult,
)
from .suggestion_expander import SuggestionExpander, rank_candidates
from .remote_suggestions import RemoteSuggestionFetcher, parse_suggest_payload
from .metrics_synthesizer import (
    KeywordMetricsSynthesizer,
    classify_difficulty,
    classify_intent,
    estimate_volume,
)
from .search_orchestrator import SearchOrchestrator

__all__ = [
    # Models
    "Difficulty",
    "SearchIntent",
    "SuggestionSource",
    "MetricsSource",
    "KeywordRecord",
    "SuggestionResult",
    "SearchResult",
    # Components
    "SuggestionExpander",
    "rank_candidates",
    "RemoteSuggestionFetcher",
    "parse_suggest_payload",
    "KeywordMetricsSynthesizer",
    "classify_difficulty",
    "classify_intent",
    "estimate_volume",
    "SearchOrchestrator",
]
