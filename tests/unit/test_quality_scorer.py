"""
Unit tests for quality scoring.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ingest_engine.core.rules import RuleConfigBuilder, default_rules
from ingest_engine.core.scoring import QualityPenalties, QualityScorer, score_all


@pytest.fixture
def scorer():
    return QualityScorer(default_rules())


class TestQualityScorer:
    """Tests for QualityScorer penalties"""

    def test_clean_record_scores_100(self, scorer, clean_record):
        assert scorer.score(clean_record) == 100

    def test_placeholder_title_equal_description(self, scorer):
        """Test placeholder title, description == title and short description stack"""
        assert scorer.score({"title": "Test Title", "description": "Test Title"}) == 55

    def test_missing_required_field(self, scorer, clean_record):
        del clean_record["title"]

        assert scorer.score(clean_record) == 85

    def test_each_missing_required_field_counts(self, clean_record):
        rules = RuleConfigBuilder().add_required_string("title").add_required_string("source").build()
        record = {k: v for k, v in clean_record.items() if k not in ("title", "source")}

        assert QualityScorer(rules).score(record) == 70

    def test_short_title(self, scorer, clean_record):
        clean_record["title"] = "Recall"

        assert scorer.score(clean_record) == 90

    def test_short_description(self, scorer, clean_record):
        clean_record["description"] = "Brief note."

        assert scorer.score(clean_record) == 90

    def test_invalid_date_penalized_once(self, scorer, clean_record):
        clean_record["published_at"] = "unknown"
        clean_record["date"] = "also unknown"

        assert scorer.score(clean_record) == 85

    def test_short_source(self, scorer, clean_record):
        clean_record["source"] = "EU"

        assert scorer.score(clean_record) == 90

    @pytest.mark.parametrize("title", ["Sample recall notice", "EXAMPLE device clearance", "Latest contest results"])
    def test_placeholder_titles(self, scorer, clean_record, title):
        clean_record["title"] = title

        assert scorer.score(clean_record) == 80

    def test_score_clamped_at_zero(self):
        penalties = QualityPenalties(missing_required_field=200)
        rules = RuleConfigBuilder().add_required_string("title").build()

        assert QualityScorer(rules, penalties).score({}) == 0

    def test_non_mapping_record(self, scorer):
        assert scorer.score(None) == 85

    def test_score_all_preserves_order(self, clean_record):
        scores = score_all([clean_record, {}], default_rules())

        assert scores == [100, 85]

    def test_custom_penalties(self, clean_record):
        clean_record["title"] = "Recall"
        scorer = QualityScorer(default_rules(), QualityPenalties(short_title=30))

        assert scorer.score(clean_record) == 70

    @given(st.dictionaries(
        st.sampled_from(["title", "description", "published_at", "date", "source", "region"]),
        st.one_of(st.none(), st.integers(), st.text(alphabet="TestSampleabc019 -/", max_size=60)),
    ))
    def test_property_score_range(self, record):
        """Property test: scores always stay within [0, 100]"""
        score = QualityScorer(default_rules()).score(record)

        assert isinstance(score, int)
        assert 0 <= score <= 100
