"""
Unit tests for similarity measures.
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ingest_engine.core.dedup import date_similarity, levenshtein_distance, string_similarity

BASE = datetime(2024, 1, 15, tzinfo=timezone.utc)


class TestLevenshtein:
    """Tests for edit distance"""

    @pytest.mark.parametrize("a,b,expected", [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("same", "same", 0),
    ])
    def test_known_distances(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    @given(st.text(max_size=20), st.text(max_size=20))
    def test_property_symmetric_and_bounded(self, a, b):
        """Property test: distance is symmetric and at most the longer length"""
        distance = levenshtein_distance(a, b)

        assert distance == levenshtein_distance(b, a)
        assert abs(len(a) - len(b)) <= distance <= max(len(a), len(b))


class TestStringSimilarity:
    """Tests for normalized string similarity"""

    def test_empty_strings_are_identical(self):
        assert string_similarity("", "") == 1.0

    def test_identical(self):
        assert string_similarity("FDA recall", "FDA recall") == 1.0

    def test_one_edit(self):
        assert string_similarity("abcd", "abce") == pytest.approx(0.75)

    @given(st.text(max_size=20), st.text(max_size=20))
    def test_property_range(self, a, b):
        """Property test: similarity stays within [0, 1]"""
        assert 0.0 <= string_similarity(a, b) <= 1.0


class TestDateSimilarity:
    """Tests for date similarity step function"""

    @pytest.mark.parametrize("gap,expected", [
        (timedelta(0), 1.0),
        (timedelta(hours=1), 0.8),
        (timedelta(days=3), 0.8),
        (timedelta(days=7), 0.8),
        (timedelta(days=8), 0.5),
        (timedelta(days=30), 0.5),
        (timedelta(days=31), 0.0),
    ])
    def test_steps(self, gap, expected):
        assert date_similarity(BASE, BASE + gap) == expected
        assert date_similarity(BASE + gap, BASE) == expected

    def test_unparsable_side(self):
        assert date_similarity(BASE, None) == 0.0
        assert date_similarity(None, None) == 0.0
