"""
Remote Autocomplete Suggestions

Asks Google's public autocomplete endpoints for suggestions, one endpoint
at a time with a short timeout. The first well-formed, non-empty answer
wins. When every endpoint fails the extended local template catalogue is
returned instead, so callers always get a list.

Usage:
    fetcher = RemoteSuggestionFetcher()
    result = fetcher.fetch("keyword research")
    print(result.source.value, result.count)
"""

import json
from typing import Dict, List, Optional, Sequence, Tuple

import requests
from loguru import logger

from .models import SuggestionResult, SuggestionSource
from .suggestion_expander import SuggestionExpander

# (url, fixed query params); the keyword is sent as ``q``
AUTOCOMPLETE_ENDPOINTS: List[Tuple[str, Dict[str, str]]] = [
    ("https://suggestqueries.google.com/complete/search", {"client": "chrome"}),
    ("https://suggestqueries.google.com/complete/search", {"client": "firefox"}),
    ("https://www.google.com/complete/search", {"client": "chrome"}),
]

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

DEFAULT_TIMEOUT = 3.0
MAX_LIVE_SUGGESTIONS = 20


def parse_suggest_payload(text: str) -> List[str]:
    """
    Extract suggestions from an autocomplete body.

    Expected format: ``[query, [suggestion, ...], ...]``. Non-string and
    blank entries are dropped; any other shape yields an empty list.

    Raises:
        ValueError: body is not valid JSON
    """
    data = json.loads(text)
    if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
        return []
    return [s.strip() for s in data[1] if isinstance(s, str) and s.strip()]


class RemoteSuggestionFetcher:
    """Live autocomplete lookups with a local fallback."""

    def __init__(
        self,
        expander: Optional[SuggestionExpander] = None,
        endpoints: Optional[Sequence[Tuple[str, Dict[str, str]]]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_live: int = MAX_LIVE_SUGGESTIONS,
        remote_enabled: bool = True,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            expander: Generator used for the fallback catalogue
            endpoints: Ordered endpoint list to try
            timeout: Seconds allowed per endpoint
            max_live: Cap on suggestions taken from a live answer
            remote_enabled: False skips the network entirely
            session: HTTP session (a new one is created when omitted)
        """
        self.expander = expander or SuggestionExpander()
        self.endpoints = list(endpoints if endpoints is not None else AUTOCOMPLETE_ENDPOINTS)
        self.timeout = timeout
        self.max_live = max_live
        self.remote_enabled = remote_enabled
        self.session = session or requests.Session()

    def fetch(self, keyword: str) -> SuggestionResult:
        """
        Get suggestions for a keyword.

        Returns:
            SuggestionResult tagged LIVE when an endpoint answered,
            FALLBACK when the local catalogue was used
        """
        keyword = keyword.strip()

        live = self._fetch_live(keyword) if self.remote_enabled and keyword else []
        if live:
            logger.success(f"Got {len(live)} live suggestions for '{keyword}'")
            return SuggestionResult(query=keyword, suggestions=live, source=SuggestionSource.LIVE)

        fallback = self.expander.expand_extended(keyword)
        logger.info(f"Using local suggestion catalogue for '{keyword}' ({len(fallback)} entries)")
        return SuggestionResult(query=keyword, suggestions=fallback, source=SuggestionSource.FALLBACK)

    def _fetch_live(self, keyword: str) -> List[str]:
        for url, params in self.endpoints:
            logger.debug(f"Trying autocomplete endpoint {url} ({params.get('client')})")
            try:
                response = self.session.get(
                    url,
                    params={**params, "q": keyword},
                    headers=BROWSER_HEADERS,
                    timeout=self.timeout,
                )
                if response.status_code != 200:
                    logger.debug(f"Autocomplete HTTP {response.status_code} from {url}")
                    continue

                suggestions = parse_suggest_payload(response.text)
            except requests.Timeout:
                logger.warning(f"Autocomplete timeout after {self.timeout}s: {url}")
                continue
            except ValueError as e:
                logger.debug(f"Autocomplete body not JSON from {url}: {e}")
                continue
            except Exception as e:
                logger.warning(f"Autocomplete request failed for {url}: {e}")
                continue

            if suggestions:
                return suggestions[:self.max_live]

        logger.debug(f"All {len(self.endpoints)} autocomplete endpoints failed for '{keyword}'")
        return []
