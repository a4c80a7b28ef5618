"""
Keyword Search Orchestrator

Runs one keyword search end to end:

1. Synthesize metrics for the seed (the "main" result)
2. Expand the seed locally and fetch remote suggestions concurrently
3. Merge, filter and rank the candidate pool
4. Synthesize metrics for the top candidates in small rate-limited batches
5. Return the related keywords sorted by volume

Usage:
    orchestrator = SearchOrchestrator()
    result = asyncio.run(orchestrator.run("how to cook"))
"""

import asyncio
import time
from typing import Iterable, List, Optional

from loguru import logger

from .metrics_synthesizer import KeywordMetricsSynthesizer
from .models import KeywordRecord, SearchResult
from .remote_suggestions import RemoteSuggestionFetcher
from .suggestion_expander import SuggestionExpander, rank_candidates

MIN_CANDIDATE_LENGTH = 3   # exclusive
MAX_CANDIDATE_LENGTH = 80  # exclusive
BLOCKED_TOKENS = ("undefined", "null")
SELECTION_TARGET_LENGTH = 15

DEFAULT_MAX_RELATED = 20
LIGHTWEIGHT_MAX_RELATED = 8
DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_DELAY = 1.0

FALLBACK_VARIANTS = [
    "how to {seed}",
    "{seed} tutorial",
    "{seed} guide",
    "{seed} tips",
    "best {seed}",
]


def merge_candidates(*pools: Iterable[str]) -> List[str]:
    """Union of candidate pools, exact-match dedup, first occurrence order."""
    merged = {}
    for pool in pools:
        for candidate in pool:
            candidate = candidate.strip()
            if candidate:
                merged.setdefault(candidate, None)
    return list(merged)


def filter_candidates(candidates: Iterable[str], seed: str) -> List[str]:
    """Drop the seed, too short/long entries and placeholder garbage."""
    kept = []
    for candidate in candidates:
        if candidate == seed:
            continue
        if not MIN_CANDIDATE_LENGTH < len(candidate) < MAX_CANDIDATE_LENGTH:
            continue
        if any(token in candidate for token in BLOCKED_TOKENS):
            continue
        kept.append(candidate)
    return kept


def select_candidates(candidates: Iterable[str], seed: str, limit: int) -> List[str]:
    """Filter, rank around 15 characters and keep the first ``limit``."""
    filtered = filter_candidates(candidates, seed)
    return rank_candidates(filtered, seed, SELECTION_TARGET_LENGTH)[:limit]


class SearchOrchestrator:
    """Composes expansion, remote suggestions and metrics synthesis."""

    def __init__(
        self,
        expander: Optional[SuggestionExpander] = None,
        fetcher: Optional[RemoteSuggestionFetcher] = None,
        synthesizer: Optional[KeywordMetricsSynthesizer] = None,
        max_related: Optional[int] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY,
        lightweight: bool = False,
    ):
        """
        Args:
            expander: Local candidate generator
            fetcher: Remote suggestion fetcher (unused in lightweight mode)
            synthesizer: Metrics synthesizer
            max_related: Number of related keywords to analyze
                (default 20, or 8 in lightweight mode)
            batch_size: Concurrent syntheses per batch
            batch_delay: Seconds to pause between batches
            lightweight: Use the alphabet-only expansion without network calls
        """
        self.expander = expander or SuggestionExpander()
        self.fetcher = fetcher or RemoteSuggestionFetcher(expander=self.expander)
        self.synthesizer = synthesizer or KeywordMetricsSynthesizer()
        self.lightweight = lightweight
        if max_related is None:
            max_related = LIGHTWEIGHT_MAX_RELATED if lightweight else DEFAULT_MAX_RELATED
        self.max_related = max_related
        self.batch_size = max(1, batch_size)
        self.batch_delay = batch_delay

    async def run(self, seed: str) -> SearchResult:
        """
        Search and analyze keywords related to a seed.

        Raises:
            ValueError: seed is blank
        """
        seed = seed.strip()
        if not seed:
            raise ValueError("Seed keyword must not be empty")

        logger.info(f"Starting keyword search for '{seed}'")
        start_time = time.time()

        try:
            main = await self._synthesize(seed)
            candidates = await self._collect_candidates(seed)
        except Exception as e:
            logger.error(f"Keyword search failed for '{seed}': {e}")
            return await self._fallback_result(seed)

        selected = select_candidates(candidates, seed, self.max_related)
        logger.info(f"Analyzing {len(selected)} of {len(candidates)} candidates")

        related = await self._synthesize_batched(selected)
        related.sort(key=lambda r: r.volume, reverse=True)

        logger.success(
            f"Search for '{seed}' complete: {len(related)} related keywords "
            f"from {len(candidates)} candidates in {time.time() - start_time:.1f}s"
        )
        return SearchResult(
            query=seed,
            main=main,
            related=related,
            total_candidates=len(candidates),
        )

    async def _run_blocking(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def _synthesize(self, keyword: str) -> KeywordRecord:
        return await self._run_blocking(self.synthesizer.synthesize, keyword)

    async def _collect_candidates(self, seed: str) -> List[str]:
        if self.lightweight:
            alphabet, autocomplete = await asyncio.gather(
                self._run_blocking(self.expander.expand_alphabet, seed),
                self._run_blocking(self.expander.autocomplete_patterns, seed),
            )
            logger.debug(f"Lightweight pools: {len(alphabet)} alphabet, {len(autocomplete)} autocomplete")
            return merge_candidates(alphabet, autocomplete)

        expanded, remote = await asyncio.gather(
            self._run_blocking(self.expander.expand, seed),
            self._run_blocking(self.fetcher.fetch, seed),
        )
        logger.debug(
            f"Candidate pools: {len(expanded)} expanded, "
            f"{remote.count} remote ({remote.source.value})"
        )
        return merge_candidates(expanded, remote.suggestions)

    async def _synthesize_batched(self, keywords: List[str]) -> List[KeywordRecord]:
        records: List[KeywordRecord] = []

        for start in range(0, len(keywords), self.batch_size):
            batch = keywords[start:start + self.batch_size]
            results = await asyncio.gather(
                *(self._synthesize(k) for k in batch),
                return_exceptions=True,
            )

            for keyword, result in zip(batch, results):
                if isinstance(result, Exception):
                    logger.warning(f"Dropping '{keyword}': {result}")
                    continue
                records.append(result)

            if start + self.batch_size < len(keywords) and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)

        return records

    async def _fallback_result(self, seed: str) -> SearchResult:
        """Best-effort result built from a few fixed phrase variants."""
        main = await self._synthesize(seed)

        related = []
        for template in FALLBACK_VARIANTS:
            keyword = template.format(seed=seed)
            try:
                related.append(await self._synthesize(keyword))
            except Exception as e:
                logger.warning(f"Fallback synthesis failed for '{keyword}': {e}")

        related.sort(key=lambda r: r.volume, reverse=True)
        logger.warning(f"Returning degraded result for '{seed}' ({len(related)} related)")
        return SearchResult(
            query=seed,
            main=main,
            related=related,
            total_candidates=0,
            degraded=True,
        )
