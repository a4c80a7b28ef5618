"""
Presentation-side search state.

A SearchSession sits between a front end and the SearchOrchestrator:

- every search gets a monotonic request token and only the result of the
  most recently issued token is accepted (stale answers are discarded)
- the last few searches and the dark-mode flag are kept in an injected
  Preferences store instead of ambient browser storage
- the dropdown suggestion list is refreshed after each accepted search
"""

import itertools
import json
import sqlite3
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from .seo.models import SearchResult

HISTORY_KEY = "searchHistory"
DARK_MODE_KEY = "darkMode"
DEFAULT_HISTORY_SIZE = 5

DEFAULT_SUGGESTIONS = [
    "how to download",
    "ai generate",
    "seo tools",
    "keyword research",
    "content strategy",
    "google trends",
    "marketing automation",
    "digital marketing",
]


class RequestTokenIssuer:
    """Thread-safe monotonic request tokens."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._latest = 0

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    @property
    def latest(self) -> int:
        return self._latest

    def is_latest(self, token: int) -> bool:
        return token == self._latest


# ============================================================
# Preferences stores
# ============================================================

class Preferences(ABC):
    """Key-value store for user preferences (JSON-serializable values)."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...


class InMemoryPreferences(Preferences):
    """Process-local preferences."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class SqlitePreferences(Preferences):
    """Preferences persisted in a small SQLite table."""

    def __init__(self, db_path: str = "data/preferences.db"):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT,
                    updated_at TEXT
                )
            """)

    def get(self, key: str, default: Any = None) -> Any:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT value FROM preferences WHERE key = ?",
                (key,)
            ).fetchone()

        if row is None:
            return default
        try:
            return json.loads(row[0])
        except (TypeError, ValueError) as e:
            logger.warning(f"Corrupt preference '{key}': {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO preferences (key, value, updated_at) VALUES (?, ?, ?)",
                (key, json.dumps(value), datetime.now().isoformat())
            )


# ============================================================
# Session
# ============================================================

@dataclass
class SearchHistoryEntry:
    """One past search."""
    id: str
    keyword: str
    timestamp: str
    results: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SearchSession:
    """Search state for a single front end."""

    def __init__(
        self,
        orchestrator,
        preferences: Optional[Preferences] = None,
        token_issuer: Optional[RequestTokenIssuer] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ):
        self.orchestrator = orchestrator
        self.preferences = preferences or InMemoryPreferences()
        self.tokens = token_issuer or RequestTokenIssuer()
        self.history_size = history_size
        self.current: Optional[SearchResult] = None
        self.suggestions: List[str] = list(DEFAULT_SUGGESTIONS)

    async def search(self, keyword: str) -> Optional[SearchResult]:
        """
        Run a search and make it current unless a newer one was issued.

        Returns:
            The accepted result, or None for blank input and stale results
        """
        keyword = keyword.strip()
        if not keyword:
            return None

        token = self.tokens.issue()
        result = await self.orchestrator.run(keyword)
        result.request_token = token

        if not self.accept(result):
            logger.debug(f"Discarding stale result for '{keyword}' (token {token} < {self.tokens.latest})")
            return None

        self.current = result
        self.suggestions = self.orchestrator.expander.quick_suggestions(keyword)
        self._record_history(keyword, len(result.records))
        return result

    def accept(self, result: SearchResult) -> bool:
        """True when the result belongs to the most recent request."""
        return result.request_token is not None and self.tokens.is_latest(result.request_token)

    @property
    def history(self) -> List[SearchHistoryEntry]:
        entries = self.preferences.get(HISTORY_KEY, []) or []
        history = []
        for entry in entries:
            try:
                history.append(SearchHistoryEntry(**entry))
            except TypeError:
                logger.debug(f"Skipping malformed history entry: {entry}")
        return history

    def _record_history(self, keyword: str, results: int) -> None:
        entry = SearchHistoryEntry(
            id=str(int(time.time() * 1000)),
            keyword=keyword,
            timestamp=datetime.now().isoformat(),
            results=results,
        )
        entries = [entry.to_dict()] + [e.to_dict() for e in self.history]
        self.preferences.set(HISTORY_KEY, entries[:self.history_size])

    @property
    def dark_mode(self) -> bool:
        return bool(self.preferences.get(DARK_MODE_KEY, False))

    @dark_mode.setter
    def dark_mode(self, enabled: bool) -> None:
        self.preferences.set(DARK_MODE_KEY, bool(enabled))

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode
