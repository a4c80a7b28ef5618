"""
Data types shared by the keyword expansion and metrics modules.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

TREND_LENGTH = 7


# --- Enums ---

class Difficulty(str, Enum):
    """Ranking difficulty tier."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class SearchIntent(str, Enum):
    """Presumed purpose behind a search phrase."""
    INFORMATIONAL = "Informational"
    COMMERCIAL = "Commercial"
    TRANSACTIONAL = "Transactional"
    NAVIGATIONAL = "Navigational"


class SuggestionSource(str, Enum):
    """Where a suggestion list came from."""
    LIVE = "google_api_success"
    FALLBACK = "enhanced_alphabet_traversal"


class MetricsSource(str, Enum):
    """How a record's metrics were produced."""
    TRENDS = "trends"                    # live trend series
    SYNTHETIC_TREND = "synthetic_trend"  # no trend source configured
    FALLBACK = "fallback"                # trend source failed


# --- Records ---

@dataclass(frozen=True)
class KeywordRecord:
    """Synthesized metrics attached to one keyword candidate."""
    id: str
    keyword: str
    volume: int
    difficulty: Difficulty
    competition: float
    cpc: float
    trend: Tuple[int, ...]
    search_intent: SearchIntent
    metrics_source: MetricsSource = MetricsSource.TRENDS

    def __post_init__(self):
        if len(self.trend) != TREND_LENGTH:
            raise ValueError(f"trend must have {TREND_LENGTH} points, got {len(self.trend)}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "keyword": self.keyword,
            "volume": self.volume,
            "difficulty": self.difficulty.value,
            "competition": self.competition,
            "cpc": self.cpc,
            "trend": list(self.trend),
            "search_intent": self.search_intent.value,
            "metrics_source": self.metrics_source.value,
        }


@dataclass
class SuggestionResult:
    """Suggestions for a query plus the path that produced them."""
    query: str
    suggestions: List[str]
    source: SuggestionSource

    @property
    def count(self) -> int:
        return len(self.suggestions)

    @property
    def is_live(self) -> bool:
        return self.source == SuggestionSource.LIVE


@dataclass
class SearchResult:
    """Outcome of one orchestration run."""
    query: str
    main: KeywordRecord
    related: List[KeywordRecord] = field(default_factory=list)
    total_candidates: int = 0
    request_token: Optional[int] = None
    degraded: bool = False

    @property
    def records(self) -> List[KeywordRecord]:
        """Main record followed by the related ones, as displayed."""
        return [self.main] + list(self.related)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "main": self.main.to_dict(),
            "related": [r.to_dict() for r in self.related],
            "total_candidates": self.total_candidates,
            "request_token": self.request_token,
            "degraded": self.degraded,
        }
