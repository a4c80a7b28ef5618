"""
Seed Keyword Expansion

Turns one seed keyword into a ranked pool of candidate phrases using fixed
templates, alphabet traversal, numeric and year suffixes, and
phrase-specific template families. No network access.

Usage:
    expander = SuggestionExpander()

    # Full catalogue (200 max)
    candidates = expander.expand("generate qr code")

    # Lightweight alphabet-only variant (50 max, shuffled)
    quick_pool = expander.expand_alphabet("seo tools")
"""

import random
import re
from typing import Iterable, List, Optional

from loguru import logger


ALPHABET = "abcdefghijklmnopqrstuvwxyz"

# Letters that get the richer combinations in the standard catalogue
RICH_LETTERS = "abcde"

MAX_SUGGESTION_LENGTH = 100
RANKING_TARGET_LENGTH = 20

DEFAULT_LIMIT = 200
ALPHABET_LIMIT = 50
AUTOCOMPLETE_LIMIT = 100

HIGH_FREQUENCY_TEMPLATES = [
    "{seed}",
    "how to {seed}",
    "{seed} tutorial",
    "{seed} guide",
    "{seed} step by step",
    "{seed} for beginners",
    "{seed} tips",
    "{seed} tricks",
    "{seed} online",
    "{seed} free",
    "{seed} course",
    "{seed} training",
    "{seed} certification",
    "{seed} examples",
    "best {seed}",
    "{seed} vs",
    "{seed} review",
    "{seed} comparison",
    "{seed} alternative",
    "{seed} software",
    "{seed} app",
    "{seed} tool",
    "{seed} platform",
    "{seed} service",
]

LETTER_TEMPLATES = [
    "{seed} {letter}",
    "{seed} a{letter}",
    "{seed} {letter}a",
]

RICH_LETTER_TEMPLATES = [
    "how to {seed} {letter}",
    "{seed} for {letter}",
    "{seed} in {letter}",
    "{seed} with {letter}",
    "{seed} {letter} code",
    "{seed} {letter} example",
]

# Lightweight alphabet traversal patterns
ALPHABET_PATTERNS = [
    "{seed} {letter}",
    "{seed} a{letter}",
    "{seed} {letter}a",
    "how to {seed} {letter}",
    "{seed} for {letter}",
    "best {seed} {letter}",
]

YEARS = range(2020, 2026)

HOW_TO_PATTERN = re.compile(r"how to", re.IGNORECASE)
HOW_TO_SUBSTITUTES = ["ways to", "steps to", "guide to"]
HOW_TO_MODIFIERS = [
    "easily",
    "quickly",
    "at home",
    "online",
    "for free",
    "without",
    "step by step",
]

GENERATE_SUFFIXES = [
    "code", "api key", "password", "report", "invoice",
    "barcode", "qr code", "certificate", "token", "key",
    "id", "number", "file", "document", "content",
    "data", "random", "unique", "secure", "automatic",
]

# Words commonly seen around a query in autocomplete dropdowns
COMMON_AFFIXES = [
    "tutorial", "guide", "tips", "free", "online", "best", "how to",
    "vs", "review", "price", "download", "install", "setup", "config",
    "error", "fix", "problem", "issue", "help", "support", "api",
    "example", "demo", "course", "training", "certification", "job",
]

QUICK_TEMPLATES = [
    "{seed}",
    "how to {seed}",
    "{seed} tutorial",
    "{seed} guide",
    "{seed} tips",
    "best {seed}",
    "{seed} free",
    "{seed} online",
    "{seed} download",
    "{seed} app",
]


def rank_candidates(
    candidates: Iterable[str],
    seed: str,
    target_length: int = RANKING_TARGET_LENGTH
) -> List[str]:
    """
    Order candidates for display.

    Candidates containing the seed (case-insensitive) come first; within
    each group the ones whose length is closest to ``target_length`` lead.
    The sort is stable, so equal keys keep their input order.
    """
    needle = seed.lower()
    return sorted(
        candidates,
        key=lambda c: (needle not in c.lower(), abs(len(c) - target_length))
    )


def _fill(templates: Iterable[str], seed: str, **extra) -> List[str]:
    return [t.format(seed=seed, **extra) for t in templates]


class SuggestionExpander:
    """Template-driven candidate generator."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        limit: int = DEFAULT_LIMIT,
        alphabet_limit: int = ALPHABET_LIMIT,
    ):
        """
        Args:
            rng: Random source for the shuffle step (seed it for repeatable output)
            limit: Maximum candidates returned by expand()/expand_extended()
            alphabet_limit: Maximum candidates returned by expand_alphabet()
        """
        self.rng = rng or random.Random()
        self.limit = limit
        self.alphabet_limit = alphabet_limit

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def expand(self, seed: str) -> List[str]:
        """
        Expand a seed into the standard candidate catalogue.

        Returns a deduplicated, ranked list capped at ``limit``. The seed
        itself, blank entries and entries over 100 characters are dropped.
        """
        seed = seed.strip()
        if not seed:
            logger.debug("Empty seed, nothing to expand")
            return []

        candidates = self._catalogue(seed, rich_letters=RICH_LETTERS, multipliers=(10,))
        result = self._finalize(candidates, seed)
        logger.debug(f"Expanded '{seed}' into {len(result)} candidates")
        return result

    def expand_extended(self, seed: str) -> List[str]:
        """
        Larger catalogue used when live autocomplete is unavailable.

        Every letter gets the rich combinations and numeric suffixes reach
        3-digit multiples, so ordinary seeds always fill the cap.
        """
        seed = seed.strip()
        if not seed:
            return []

        candidates = self._catalogue(seed, rich_letters=ALPHABET, multipliers=(10, 100))
        result = self._finalize(candidates, seed)
        logger.debug(f"Extended expansion of '{seed}' produced {len(result)} candidates")
        return result

    def expand_alphabet(self, seed: str) -> List[str]:
        """Lightweight a-z traversal: shuffled, capped at ``alphabet_limit``."""
        seed = seed.strip()
        if not seed:
            return []

        candidates = []
        for letter in ALPHABET:
            candidates.extend(_fill(ALPHABET_PATTERNS, seed, letter=letter))

        unique = self._clean(candidates, seed)
        self.rng.shuffle(unique)
        return unique[:self.alphabet_limit]

    def autocomplete_patterns(self, seed: str) -> List[str]:
        """Autocomplete-style combinations (letters, common affixes, numbers)."""
        seed = seed.strip()
        if not seed:
            return []

        candidates = []
        for letter in ALPHABET:
            candidates.extend(_fill(LETTER_TEMPLATES, seed, letter=letter))

        for affix in COMMON_AFFIXES:
            candidates.append(f"{seed} {affix}")
            candidates.append(f"{affix} {seed}")

        for i in range(0, 21):
            candidates.append(f"{seed} {i}")
            candidates.append(f"{seed} {i}0")

        return self._clean(candidates, seed)[:AUTOCOMPLETE_LIMIT]

    def quick_suggestions(self, seed: str) -> List[str]:
        """Short list of phrase variants for a search box dropdown."""
        seed = seed.strip()
        if not seed:
            return []
        return [s for s in _fill(QUICK_TEMPLATES, seed) if s.strip()]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _catalogue(self, seed: str, rich_letters: str, multipliers: tuple) -> List[str]:
        candidates = _fill(HIGH_FREQUENCY_TEMPLATES, seed)

        for letter in ALPHABET:
            candidates.extend(_fill(LETTER_TEMPLATES, seed, letter=letter))
            if letter in rich_letters:
                candidates.extend(_fill(RICH_LETTER_TEMPLATES, seed, letter=letter))

        for i in range(1, 21):
            candidates.append(f"{seed} {i}")
            if i <= 10:
                for multiplier in multipliers:
                    candidates.append(f"{seed} {i * multiplier}")

        for year in YEARS:
            candidates.append(f"{seed} {year}")

        candidates.extend(self._how_to_variants(seed))
        candidates.extend(self._generate_variants(seed))
        return candidates

    @staticmethod
    def _how_to_variants(seed: str) -> List[str]:
        if "how to" not in seed.lower():
            return []

        variants = [HOW_TO_PATTERN.sub(sub, seed, count=1) for sub in HOW_TO_SUBSTITUTES]
        variants.extend(f"{seed} {modifier}" for modifier in HOW_TO_MODIFIERS)
        return variants

    @staticmethod
    def _generate_variants(seed: str) -> List[str]:
        if "generate" not in seed.lower():
            return []
        return [f"{seed} {suffix}" for suffix in GENERATE_SUFFIXES]

    @staticmethod
    def _clean(candidates: Iterable[str], seed: str) -> List[str]:
        """Trim, dedupe (exact match, order kept) and drop invalid entries."""
        unique = dict.fromkeys(c.strip() for c in candidates if c)
        return [
            c for c in unique
            if c and c != seed and len(c) <= MAX_SUGGESTION_LENGTH
        ]

    def _finalize(self, candidates: Iterable[str], seed: str) -> List[str]:
        return rank_candidates(self._clean(candidates, seed), seed)[:self.limit]
