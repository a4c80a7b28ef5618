# Research collaborators
from .trends import (
    TrendSource,
    TrendDataError,
    RateLimitError,
    build_trend_source,
    fallback_related_queries,
)

__all__ = [
    "TrendSource",
    "TrendDataError",
    "RateLimitError",
    "build_trend_source",
    "fallback_related_queries",
]
