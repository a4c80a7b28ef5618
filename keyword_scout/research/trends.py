"""
Google Trends Collaborator

Weekly interest series and related queries for a keyword using pytrends.
No API key required!

Usage:
    source = TrendSource(geo="US")
    week = source.fetch_week("seo tools")          # 7 values, raises TrendDataError
    related = source.related_queries("seo tools")  # never raises
"""

import threading
import time
from typing import Callable, List, Optional

from loguru import logger
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..seo.models import TREND_LENGTH

# Used when Trends answers but the timeline is empty
BACKUP_WEEK = [50, 55, 48, 62, 58, 65, 60]

RELATED_FALLBACK_TEMPLATES = ["{keyword} tutorial", "{keyword} guide", "{keyword} tips"]


class TrendDataError(Exception):
    """Trend data could not be obtained for a keyword."""
    pass


class RateLimitError(TrendDataError):
    """Google Trends answered with HTTP 429."""
    pass


def normalize_week(values: List[float]) -> List[int]:
    """
    Coerce a raw interest series into exactly 7 non-negative integers.

    Keeps the most recent 7 points; a shorter series is left-padded with
    its first value and an empty one becomes BACKUP_WEEK.
    """
    points = [max(0, int(round(v))) for v in values if v is not None][-TREND_LENGTH:]
    if not points:
        return list(BACKUP_WEEK)
    if len(points) < TREND_LENGTH:
        points = [points[0]] * (TREND_LENGTH - len(points)) + points
    return points


def fallback_related_queries(keyword: str) -> List[str]:
    """Fixed related phrases used when Trends has nothing to offer."""
    keyword = keyword.strip()
    if not keyword:
        return []
    return [t.format(keyword=keyword) for t in RELATED_FALLBACK_TEMPLATES]


def _is_rate_limit_error(error: Exception) -> bool:
    """Check if an exception is a rate limit error."""
    response = getattr(error, "response", None)
    if getattr(response, "status_code", None) == 429:
        return True
    error_str = str(error).lower()
    return "429" in error_str or "too many" in error_str


class TrendSource:
    """Trend time-series lookups backed by pytrends."""

    def __init__(
        self,
        geo: str = "US",
        language: str = "en-US",
        timeframe: str = "today 1-m",
        min_request_interval: float = 1.0,
        max_attempts: int = 1,
        client=None,
    ):
        """
        Args:
            geo: Geographic location (US, GB, etc.)
            language: Interface language passed to Google Trends
            timeframe: Trends timeframe string (default: last 30 days)
            min_request_interval: Minimum seconds between requests
            max_attempts: Attempts per call when rate limited (1 = no retry)
            client: Pre-built TrendReq (created lazily when omitted)
        """
        self.geo = geo
        self.language = language
        self.timeframe = timeframe
        self.min_request_interval = min_request_interval
        self.max_attempts = max(1, max_attempts)
        self._client = client
        self._last_request_time: float = 0
        # TrendReq keeps the last payload on the client: payload/read pairs
        # and request pacing are serialized across worker threads
        self._lock = threading.RLock()
        logger.info(f"TrendSource initialized for {geo} ({timeframe})")

    @property
    def client(self):
        # TrendReq fetches a cookie on construction, so build it on first use
        if self._client is None:
            from pytrends.request import TrendReq
            self._client = TrendReq(hl=self.language, tz=360, timeout=(10, 25))
        return self._client

    def _rate_limit_delay(self) -> None:
        """Ensure minimum delay between API requests to avoid rate limiting."""
        with self._lock:
            elapsed = time.time() - self._last_request_time
            if elapsed < self.min_request_interval:
                time.sleep(self.min_request_interval - elapsed)
            self._last_request_time = time.time()

    def _call(self, func: Callable, *args, **kwargs):
        """Invoke a pytrends method with pacing and rate-limit retries."""
        def attempt():
            self._rate_limit_delay()
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if _is_rate_limit_error(e):
                    logger.warning(f"Rate limited by Google Trends: {e}")
                    raise RateLimitError(str(e)) from e
                raise

        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=2, min=4, max=60),
            retry=retry_if_exception_type(RateLimitError),
            reraise=True,
        )
        return retrying(attempt)

    def _build_payload(self, keyword: str) -> None:
        self._call(
            self.client.build_payload,
            kw_list=[keyword],
            cat=0,
            timeframe=self.timeframe,
            geo=self.geo,
        )

    def fetch_week(self, keyword: str) -> List[int]:
        """
        Get the last 7 interest points for a keyword.

        Raises:
            TrendDataError: network failure, rate limiting or malformed data
        """
        try:
            with self._lock:
                self._build_payload(keyword)
                interest = self._call(self.client.interest_over_time)
        except TrendDataError:
            raise
        except Exception as e:
            raise TrendDataError(f"Trend lookup failed for '{keyword}': {e}") from e

        if interest is None or getattr(interest, "empty", True) or keyword not in interest.columns:
            logger.debug(f"No timeline for '{keyword}', using backup week")
            return list(BACKUP_WEEK)

        try:
            values = interest[keyword].tolist()
        except (KeyError, AttributeError, TypeError) as e:
            raise TrendDataError(f"Malformed trend data for '{keyword}': {e}") from e

        week = normalize_week(values)
        logger.debug(f"Trend week for '{keyword}': {week}")
        return week

    def related_queries(self, keyword: str, limit: int = 10) -> List[str]:
        """
        Top related queries for a keyword.

        Returns:
            Up to ``limit`` queries (falls back to tutorial/guide/tips variants)
        """
        keyword = keyword.strip()
        if not keyword:
            return []
        fallback = fallback_related_queries(keyword)

        try:
            with self._lock:
                self._build_payload(keyword)
                related = self._call(self.client.related_queries)

            top = None
            if isinstance(related, dict) and isinstance(related.get(keyword), dict):
                top = related[keyword].get("top")

            if top is None or getattr(top, "empty", True) or "query" not in top.columns:
                logger.debug(f"No related queries for '{keyword}'")
                return fallback

            queries = [q for q in top["query"].tolist()[:limit] if isinstance(q, str) and q.strip()]
            logger.info(f"Found {len(queries)} related queries for '{keyword}'")
            return queries or fallback

        except Exception as e:
            logger.warning(f"Related queries failed for '{keyword}': {e}")
            return fallback


def build_trend_source(settings) -> Optional[TrendSource]:
    """Create the trend collaborator described by settings (None when disabled)."""
    if not settings.trends_enabled:
        logger.info("Trend lookups disabled, metrics will use synthetic trends")
        return None
    return TrendSource(
        geo=settings.trends_geo,
        language=settings.trends_language,
        timeframe=settings.trends_timeframe,
        min_request_interval=settings.trends_min_interval,
        max_attempts=settings.trends_max_attempts,
    )
