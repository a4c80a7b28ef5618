"""
Tests for search session state: request tokens, history and preferences.

Run with: pytest tests/test_session.py -v
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from keyword_scout.session import (
    DARK_MODE_KEY,
    DEFAULT_SUGGESTIONS,
    HISTORY_KEY,
    InMemoryPreferences,
    RequestTokenIssuer,
    SearchSession,
    SqlitePreferences,
)


class TestRequestTokenIssuer:
    """Tests for RequestTokenIssuer."""

    def test_tokens_increase(self):
        tokens = RequestTokenIssuer()

        first = tokens.issue()
        second = tokens.issue()

        assert second > first
        assert tokens.latest == second
        assert tokens.is_latest(second)
        assert not tokens.is_latest(first)


class TestPreferences:
    """Tests for preference stores."""

    def test_in_memory(self):
        prefs = InMemoryPreferences({"a": 1})

        assert prefs.get("a") == 1
        assert prefs.get("missing", "default") == "default"
        prefs.set("b", [1, 2])
        assert prefs.get("b") == [1, 2]

    def test_sqlite_persists(self, temp_dir):
        db_path = temp_dir / "nested" / "prefs.db"
        SqlitePreferences(str(db_path)).set(DARK_MODE_KEY, True)

        reopened = SqlitePreferences(str(db_path))

        assert reopened.get(DARK_MODE_KEY) is True
        assert reopened.get("missing") is None

    def test_sqlite_overwrites(self, temp_dir):
        prefs = SqlitePreferences(str(temp_dir / "prefs.db"))
        prefs.set("k", {"x": 1})
        prefs.set("k", {"x": 2})

        assert prefs.get("k") == {"x": 2}


class TestSearchSession:
    """Tests for SearchSession."""

    @pytest.fixture
    def session(self, offline_orchestrator):
        return SearchSession(offline_orchestrator)

    def test_initial_state(self, session):
        assert session.current is None
        assert session.history == []
        assert session.suggestions == DEFAULT_SUGGESTIONS
        assert session.dark_mode is False

    def test_search_updates_state(self, session):
        result = asyncio.run(session.search("seo tools"))

        assert result is not None
        assert result.request_token == 1
        assert session.current is result
        assert session.suggestions == session.orchestrator.expander.quick_suggestions("seo tools")

        history = session.history
        assert len(history) == 1
        assert history[0].keyword == "seo tools"
        assert history[0].results == len(result.records)

    def test_blank_search_ignored(self, session):
        assert asyncio.run(session.search("  ")) is None
        assert session.current is None
        assert session.history == []

    def test_stale_result_discarded(self, offline_orchestrator):
        session = SearchSession(offline_orchestrator)
        real_run = offline_orchestrator.run

        async def run_then_newer_request(seed):
            result = await real_run(seed)
            # A newer search was issued while this one was in flight
            session.tokens.issue()
            return result

        offline_orchestrator.run = run_then_newer_request

        assert asyncio.run(session.search("seo tools")) is None
        assert session.current is None
        assert session.history == []

    def test_accept_requires_latest_token(self, session):
        result = MagicMock(request_token=None)
        assert not session.accept(result)

        result.request_token = session.tokens.issue()
        assert session.accept(result)

    def test_history_newest_first_and_capped(self, offline_orchestrator):
        offline_orchestrator.max_related = 2
        session = SearchSession(offline_orchestrator, history_size=3)

        for keyword in ["one", "two", "three", "four"]:
            asyncio.run(session.search(keyword))

        assert [e.keyword for e in session.history] == ["four", "three", "two"]

    def test_history_stored_in_preferences(self, offline_orchestrator):
        offline_orchestrator.max_related = 2
        prefs = InMemoryPreferences()
        session = SearchSession(offline_orchestrator, preferences=prefs)

        asyncio.run(session.search("seo"))

        stored = prefs.get(HISTORY_KEY)
        assert stored[0]["keyword"] == "seo"
        assert set(stored[0]) == {"id", "keyword", "timestamp", "results"}

    def test_malformed_history_skipped(self, offline_orchestrator):
        prefs = InMemoryPreferences({HISTORY_KEY: [{"bogus": 1}, {
            "id": "1", "keyword": "seo", "timestamp": "2024-01-01T00:00:00", "results": 3,
        }]})
        session = SearchSession(offline_orchestrator, preferences=prefs)

        assert [e.keyword for e in session.history] == ["seo"]

    def test_dark_mode_toggle(self, session):
        assert session.toggle_dark_mode() is True
        assert session.preferences.get(DARK_MODE_KEY) is True
        assert session.toggle_dark_mode() is False
