#!/usr/bin/env python
"""
Keyword Scout launcher.

Usage:
    python run.py serve                       # Start the API server
    python run.py serve --port 9000
    python run.py search "how to cook"        # Full keyword search
    python run.py search "seo tools" --lightweight
    python run.py suggest "generate qr code"  # Autocomplete suggestions
    python run.py related "keyword research"  # Google Trends related queries
    python run.py history                     # Recent searches
    python run.py dark-mode                   # Toggle the dark-mode preference
"""

import sys
import os
import argparse
import asyncio
from dataclasses import replace

# Add project root
sys.path.insert(0, os.path.dirname(__file__))

from dotenv import load_dotenv
load_dotenv("config/.env")


def _print_record(record, prefix="  "):
    from keyword_scout.utils.formatting import format_number

    print(
        f"{prefix}{record.keyword:<45} "
        f"{format_number(record.volume):>8}  "
        f"{record.difficulty.value:<7} "
        f"{record.competition:.2f}  "
        f"${record.cpc:.2f}  "
        f"{record.search_intent.value}"
    )


# Preference-only commands never touch the network
OFFLINE_OVERRIDES = {"remote_enabled": False, "trends_enabled": False, "lightweight": True}


def open_session(settings, **overrides):
    """SearchSession backed by the SQLite preferences store."""
    from keyword_scout.seo.factory import build_orchestrator
    from keyword_scout.session import SearchSession, SqlitePreferences

    return SearchSession(
        build_orchestrator(replace(settings, **overrides)),
        preferences=SqlitePreferences(settings.preferences_db),
        history_size=settings.history_size,
    )


def main():
    if len(sys.argv) < 2:
        print("""
Keyword Scout
=============

Commands:
  python run.py serve [--host H] [--port P]   Start the API server
  python run.py search "<keyword>"            Keyword search with metrics
  python run.py suggest "<keyword>"           Autocomplete suggestions
  python run.py related "<keyword>"           Google Trends related queries
  python run.py history                       Show recent searches
  python run.py dark-mode                     Toggle dark-mode preference

Search flags:
  --lightweight       Alphabet-only expansion, 8 related keywords
  --offline           Skip live autocomplete and Google Trends
  --seed <n>          Seed the random source for repeatable metrics
  --max-related <n>   Number of related keywords to analyze

Examples:
  python run.py search "how to cook"
  python run.py search "generate qr code" --offline --seed 42
  python run.py suggest "keyword research"
        """)
        return

    cmd = sys.argv[1]

    from keyword_scout.config import get_settings
    from keyword_scout.logging_config import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_dir)

    if cmd == "serve":
        serve_parser = argparse.ArgumentParser(prog="run.py serve", add_help=False)
        serve_parser.add_argument("--host", default=settings.api_host)
        serve_parser.add_argument("--port", type=int, default=settings.api_port)
        serve_parser.add_argument("--reload", action="store_true")
        serve_args = serve_parser.parse_args(sys.argv[2:])

        import uvicorn
        uvicorn.run(
            "keyword_scout.api.app:app",
            host=serve_args.host,
            port=serve_args.port,
            reload=serve_args.reload,
        )

    elif cmd == "search":
        search_parser = argparse.ArgumentParser(prog="run.py search", add_help=False)
        search_parser.add_argument("keyword")
        search_parser.add_argument("--lightweight", action="store_true")
        search_parser.add_argument("--offline", action="store_true")
        search_parser.add_argument("--seed", type=int, default=None)
        search_parser.add_argument("--max-related", type=int, default=None)
        search_args = search_parser.parse_args(sys.argv[2:])

        overrides = {}
        if search_args.lightweight:
            overrides["lightweight"] = True
        if search_args.offline:
            overrides["remote_enabled"] = False
            overrides["trends_enabled"] = False
        if search_args.seed is not None:
            overrides["random_seed"] = search_args.seed
        if search_args.max_related is not None:
            overrides["max_related"] = search_args.max_related

        session = open_session(settings, **overrides)
        result = asyncio.run(session.search(search_args.keyword))
        if result is None:
            print("\n[FAIL] Keyword must not be empty")
            return

        print(f"\nKeyword: {result.query}")
        _print_record(result.main, prefix="* ")
        print(f"\nRelated keywords ({len(result.related)} of {result.total_candidates} candidates):")
        for record in result.related:
            _print_record(record)
        if result.degraded:
            print("\n[WARN] Search failed, showing fallback variants")

    elif cmd == "suggest":
        suggest_parser = argparse.ArgumentParser(prog="run.py suggest", add_help=False)
        suggest_parser.add_argument("keyword")
        suggest_parser.add_argument("--limit", type=int, default=20)
        suggest_args = suggest_parser.parse_args(sys.argv[2:])

        from keyword_scout.seo.factory import build_fetcher

        result = build_fetcher(settings).fetch(suggest_args.keyword)
        print(f"\n{result.count} suggestions for '{result.query}' ({result.source.value}):")
        for suggestion in result.suggestions[:suggest_args.limit]:
            print(f"  - {suggestion}")

    elif cmd == "related":
        related_parser = argparse.ArgumentParser(prog="run.py related", add_help=False)
        related_parser.add_argument("keyword")
        related_args = related_parser.parse_args(sys.argv[2:])

        from keyword_scout.research.trends import build_trend_source, fallback_related_queries

        source = build_trend_source(settings)
        if source is None:
            related = fallback_related_queries(related_args.keyword)
        else:
            related = source.related_queries(related_args.keyword)

        print(f"\nRelated queries for '{related_args.keyword}':")
        for query in related:
            print(f"  - {query}")

    elif cmd == "history":
        session = open_session(settings, **OFFLINE_OVERRIDES)
        if not session.history:
            print("\nNo searches yet")
            return
        print("\nRecent searches:")
        for entry in session.history:
            print(f"  {entry.timestamp[:19]}  {entry.keyword:<40} {entry.results} results")

    elif cmd == "dark-mode":
        enabled = open_session(settings, **OFFLINE_OVERRIDES).toggle_dark_mode()
        print(f"\nDark mode {'enabled' if enabled else 'disabled'}")

    else:
        print(f"Unknown command: {cmd}")
        print("Run without arguments to see available commands")


if __name__ == "__main__":
    main()
