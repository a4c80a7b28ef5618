"""
Pydantic response models for the Keyword Scout API.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from keyword_scout.seo.models import (
    Difficulty,
    KeywordRecord,
    MetricsSource,
    SearchIntent,
    SearchResult,
)
from keyword_scout.utils.formatting import format_number


class KeywordRecordModel(BaseModel):
    """Metrics card for one keyword."""
    id: str
    keyword: str
    volume: int = Field(..., ge=1000, description="Estimated monthly searches")
    volume_display: str = Field(..., description="Compact volume, e.g. 61.0K")
    difficulty: Difficulty
    competition: float = Field(..., ge=0, le=1)
    cpc: float = Field(..., gt=0, description="Cost per click (USD)")
    trend: List[int] = Field(..., description="Relative interest over the last 7 days")
    search_intent: SearchIntent
    metrics_source: MetricsSource

    @classmethod
    def from_record(cls, record: KeywordRecord) -> "KeywordRecordModel":
        return cls(volume_display=format_number(record.volume), **record.to_dict())


class SuggestionsResponse(BaseModel):
    """Autocomplete suggestions for a query."""
    query: str
    suggestions: List[str]
    source: str = Field(..., description="google_api_success or enhanced_alphabet_traversal")
    count: int


class KeywordSearchResponse(BaseModel):
    """Main keyword plus ranked related keywords."""
    query: str
    main: KeywordRecordModel
    related: List[KeywordRecordModel]
    total_candidates: int = Field(..., description="Deduplicated candidates before selection")
    analyzed_count: int
    request_token: Optional[int] = None
    degraded: bool = False

    @classmethod
    def from_result(cls, result: SearchResult) -> "KeywordSearchResponse":
        return cls(
            query=result.query,
            main=KeywordRecordModel.from_record(result.main),
            related=[KeywordRecordModel.from_record(r) for r in result.related],
            total_candidates=result.total_candidates,
            analyzed_count=len(result.records),
            request_token=result.request_token,
            degraded=result.degraded,
        )


class QuickSuggestionsResponse(BaseModel):
    """Search box dropdown entries."""
    query: str
    suggestions: List[str]


class RelatedQueriesResponse(BaseModel):
    """Related queries reported by Google Trends."""
    query: str
    related: List[str]


class ErrorResponse(BaseModel):
    """Error payload."""
    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    """Service health status."""
    status: str
    version: str
    uptime_seconds: float
    remote_suggestions: bool
    trends_enabled: bool
    lightweight: bool
