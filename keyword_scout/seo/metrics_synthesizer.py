"""
Keyword Metrics Synthesizer

Attaches mock SEO metrics (volume, difficulty, competition, CPC, 7-day
trend, search intent) to a keyword. Volume is derived from the keyword's
trend interest and rule-based multipliers; competition and CPC are random
draws from fixed ranges. Classification (difficulty, intent) is a pure
function of keyword text and volume.

All randomness derives from an injected ``random.Random``: metric draws
use a per-keyword generator seeded from it, so seeded runs are repeatable
even when keywords are synthesized concurrently.
"""

import random
import re
import string
import threading
import time
from typing import List, Optional, Sequence

from loguru import logger

from .models import (
    TREND_LENGTH,
    Difficulty,
    KeywordRecord,
    MetricsSource,
    SearchIntent,
)

MIN_VOLUME = 1000

# (substring, multiplier), first match wins
VOLUME_MULTIPLIERS = [
    ("how to", 50000),
    ("best", 40000),
    ("free", 60000),
    ("download", 70000),
]
SHORT_KEYWORD_LENGTH = 10
SHORT_KEYWORD_MULTIPLIER = 80000
DEFAULT_MULTIPLIER = 30000

HARD_VOLUME = 100000
MEDIUM_VOLUME = 30000

COMPETITIVE_TERMS = re.compile(r"best|top|review|vs|comparison", re.IGNORECASE)

# Checked in this order; transactional wins over the others
TRANSACTIONAL_TERMS = re.compile(r"buy|purchase|order|cart|checkout|price|cost|cheap|deal", re.IGNORECASE)
INFORMATIONAL_TERMS = re.compile(r"how to|what is|guide|tutorial|learn|tips|example", re.IGNORECASE)
COMMERCIAL_TERMS = re.compile(r"best|top|review|compare|comparison|vs|alternative", re.IGNORECASE)

# Draw ranges as (low, width): value = low + random() * width
RANDOM_FACTOR_RANGE = (0.7, 0.6)
COMPETITION_RANGE = (0.15, 0.7)
CPC_RANGE = (0.3, 2.5)
FALLBACK_COMPETITION_RANGE = (0.2, 0.6)
FALLBACK_CPC_RANGE = (1.0, 2.0)
FALLBACK_VOLUME_RANGE = (10000, 60000)
SYNTHETIC_TREND_RANGE = (30, 70)

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_SUFFIX_LENGTH = 9


# ============================================================
# Pure helpers
# ============================================================

def average(values: Sequence[float]) -> float:
    """Arithmetic mean (0.0 for an empty series)."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def volume_multiplier(keyword: str) -> int:
    """Base search volume multiplier suggested by the keyword's wording."""
    lowered = keyword.lower()
    for term, multiplier in VOLUME_MULTIPLIERS:
        if term in lowered:
            return multiplier
    if len(keyword) < SHORT_KEYWORD_LENGTH:
        return SHORT_KEYWORD_MULTIPLIER
    return DEFAULT_MULTIPLIER


def estimate_volume(avg_trend: float, keyword: str, random_factor: float) -> int:
    """
    Monthly volume estimate from relative trend interest (0-100 scale).

    Rounded half-up and floored at MIN_VOLUME.
    """
    raw = (avg_trend / 100.0) * volume_multiplier(keyword) * random_factor
    return max(int(raw + 0.5), MIN_VOLUME)


def classify_difficulty(keyword: str, volume: int) -> Difficulty:
    """Short, high-volume or competitive-term keywords are hard to rank for."""
    word_count = len(keyword.split())
    if word_count <= 2 or volume > HARD_VOLUME or COMPETITIVE_TERMS.search(keyword):
        return Difficulty.HARD
    if volume > MEDIUM_VOLUME or word_count == 3:
        return Difficulty.MEDIUM
    return Difficulty.EASY


def classify_intent(keyword: str) -> SearchIntent:
    """Rule-based search intent; defaults to informational."""
    if TRANSACTIONAL_TERMS.search(keyword):
        return SearchIntent.TRANSACTIONAL
    if INFORMATIONAL_TERMS.search(keyword):
        return SearchIntent.INFORMATIONAL
    if COMMERCIAL_TERMS.search(keyword):
        return SearchIntent.COMMERCIAL
    return SearchIntent.INFORMATIONAL


def make_record_id(rng: random.Random) -> str:
    """Millisecond timestamp followed by a random base-36 suffix."""
    suffix = "".join(rng.choice(ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"{int(time.time() * 1000)}{suffix}"


# ============================================================
# Synthesizer
# ============================================================

class KeywordMetricsSynthesizer:
    """Builds a KeywordRecord for a single keyword. Never raises."""

    def __init__(self, trend_source=None, rng: Optional[random.Random] = None):
        """
        Args:
            trend_source: Object with ``fetch_week(keyword) -> list[int]``;
                None means no trend lookups (a random week is used instead)
            rng: Random source; seeds the per-keyword metric draws and
                supplies record id suffixes
        """
        self.trend_source = trend_source
        self.rng = rng or random.Random()
        self._lock = threading.Lock()
        with self._lock:
            self._base_seed = self.rng.getrandbits(64)

    def synthesize(self, keyword: str) -> KeywordRecord:
        """Synthesize metrics for one keyword."""
        keyword = keyword.strip()
        # Draws depend only on (base seed, keyword), not on thread scheduling
        rng = self._keyword_rng(keyword)

        if self.trend_source is None:
            trend = self._random_week(rng)
            source = MetricsSource.SYNTHETIC_TREND
        else:
            try:
                trend = list(self.trend_source.fetch_week(keyword))
                source = MetricsSource.TRENDS
            except Exception as e:
                logger.warning(f"Trend data unavailable for '{keyword}': {e}")
                return self._fallback_record(keyword, rng)

        try:
            return self._build_record(keyword, trend, source, rng)
        except Exception as e:
            logger.error(f"Metrics synthesis failed for '{keyword}': {e}")
            return self._fallback_record(keyword, rng)

    def _keyword_rng(self, keyword: str) -> random.Random:
        return random.Random(f"{self._base_seed}:{keyword}")

    def _record_id(self) -> str:
        with self._lock:
            return make_record_id(self.rng)

    @staticmethod
    def _draw(rng: random.Random, low_width: tuple) -> float:
        low, width = low_width
        return low + rng.random() * width

    @staticmethod
    def _random_week(rng: random.Random) -> List[int]:
        low, high = SYNTHETIC_TREND_RANGE
        return [rng.randrange(low, high) for _ in range(TREND_LENGTH)]

    def _build_record(
        self,
        keyword: str,
        trend: List[int],
        source: MetricsSource,
        rng: random.Random,
    ) -> KeywordRecord:
        volume = estimate_volume(average(trend), keyword, self._draw(rng, RANDOM_FACTOR_RANGE))

        record = KeywordRecord(
            id=self._record_id(),
            keyword=keyword,
            volume=volume,
            difficulty=classify_difficulty(keyword, volume),
            competition=self._draw(rng, COMPETITION_RANGE),
            cpc=self._draw(rng, CPC_RANGE),
            trend=tuple(trend),
            search_intent=classify_intent(keyword),
            metrics_source=source,
        )
        logger.debug(f"Synthesized '{keyword}': volume={volume}, difficulty={record.difficulty.value}")
        return record

    def _fallback_record(self, keyword: str, rng: random.Random) -> KeywordRecord:
        low, high = FALLBACK_VOLUME_RANGE
        return KeywordRecord(
            id=self._record_id(),
            keyword=keyword,
            volume=rng.randrange(low, high),
            difficulty=Difficulty.MEDIUM,
            competition=self._draw(rng, FALLBACK_COMPETITION_RANGE),
            cpc=self._draw(rng, FALLBACK_CPC_RANGE),
            trend=tuple(self._random_week(rng)),
            search_intent=classify_intent(keyword),
            metrics_source=MetricsSource.FALLBACK,
        )
