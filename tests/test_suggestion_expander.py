"""
Tests for SuggestionExpander and candidate ranking.

Run with: pytest tests/test_suggestion_expander.py -v
"""

import random

import pytest

from keyword_scout.seo.suggestion_expander import (
    ALPHABET_LIMIT,
    AUTOCOMPLETE_LIMIT,
    DEFAULT_LIMIT,
    GENERATE_SUFFIXES,
    MAX_SUGGESTION_LENGTH,
    SuggestionExpander,
    rank_candidates,
)


class TestRankCandidates:
    """Tests for rank_candidates."""

    def test_seed_matches_come_first(self):
        """Entries containing the seed lead, closest to target length first."""
        ranked = rank_candidates(["zzz", "seo tools guide", "seo"], "seo", target_length=15)
        assert ranked == ["seo tools guide", "seo", "zzz"]

    def test_match_is_case_insensitive(self):
        ranked = rank_candidates(["other phrase", "SEO Tools"], "seo")
        assert ranked[0] == "SEO Tools"

    def test_equal_keys_keep_input_order(self):
        ranked = rank_candidates(["seo ab", "seo cd", "seo ef"], "seo")
        assert ranked == ["seo ab", "seo cd", "seo ef"]


class TestSuggestionExpander:
    """Tests for the template-driven expander."""

    @pytest.fixture
    def expander(self, rng):
        return SuggestionExpander(rng=rng)

    @pytest.mark.parametrize("seed", ["", "   "])
    def test_blank_seed_yields_nothing(self, expander, seed):
        assert expander.expand(seed) == []
        assert expander.expand_extended(seed) == []
        assert expander.expand_alphabet(seed) == []
        assert expander.autocomplete_patterns(seed) == []
        assert expander.quick_suggestions(seed) == []

    def test_expand_excludes_seed_and_duplicates(self, expander):
        candidates = expander.expand("seo tools")

        assert "seo tools" not in candidates
        assert len(candidates) == len(set(candidates))
        assert 0 < len(candidates) <= DEFAULT_LIMIT

    def test_expand_contains_template_families(self, expander):
        candidates = expander.expand("seo tools")

        assert "how to seo tools" in candidates
        assert "seo tools tutorial" in candidates
        assert "seo tools z" in candidates
        assert "seo tools with a" in candidates
        assert "seo tools 100" in candidates
        assert "seo tools 2025" in candidates

    def test_rich_combinations_limited_to_first_letters(self, expander):
        candidates = expander.expand("seo tools")

        assert "seo tools for e" in candidates
        assert "seo tools for f" not in candidates

    def test_generate_seed_gets_generate_suffixes(self, expander):
        candidates = expander.expand("generate qr code")

        assert "generate qr code api key" in candidates
        for suffix in GENERATE_SUFFIXES:
            assert f"generate qr code {suffix}" in candidates
        assert all("generate qr code" in c for c in candidates)

    def test_how_to_seed_gets_substitutes_and_modifiers(self, expander):
        candidates = expander.expand("how to cook")

        assert "how to cook easily" in candidates
        assert "how to cook step by step" in candidates
        # The only entries without the seed rank last
        assert set(candidates[-3:]) == {"ways to cook", "steps to cook", "guide to cook"}

    def test_how_to_substitution_keeps_rest_of_phrase(self, expander):
        candidates = expander.expand("How To bake bread")
        assert "ways to bake bread" in candidates

    def test_long_entries_dropped(self, expander):
        seed = "x" * 95
        candidates = expander.expand(seed)

        assert candidates
        assert all(len(c) <= MAX_SUGGESTION_LENGTH for c in candidates)
        assert f"how to {seed}" not in candidates

    def test_extended_catalogue_fills_cap(self, expander):
        candidates = expander.expand_extended("seo tools")

        assert len(candidates) == DEFAULT_LIMIT

    def test_custom_limit(self, rng):
        expander = SuggestionExpander(rng=rng, limit=10)
        assert len(expander.expand("seo tools")) == 10

    def test_alphabet_traversal_capped_and_shuffled(self):
        first = SuggestionExpander(rng=random.Random(5)).expand_alphabet("seo tools")
        second = SuggestionExpander(rng=random.Random(5)).expand_alphabet("seo tools")

        assert len(first) == ALPHABET_LIMIT
        assert first == second
        assert all("seo tools" in c for c in first)

    def test_autocomplete_patterns_capped(self, expander):
        patterns = expander.autocomplete_patterns("seo tools")

        assert len(patterns) == AUTOCOMPLETE_LIMIT
        assert "seo tools a" in patterns
        assert len(patterns) == len(set(patterns))

    def test_quick_suggestions(self, expander):
        quick = expander.quick_suggestions("  seo tools ")

        assert quick[0] == "seo tools"
        assert "best seo tools" in quick
        assert len(quick) == 10
