# tests/test_advisory.py
"""Tests for recommended-field warnings and their priorities."""

import pytest

from ldprofiles.advisory import AdvisoryEngine, classify_priority
from ldprofiles.presence import is_present


class TestIsPresent:
    """Test suite for the shared presence rule."""

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_string_and_none_missing(self, value):
        assert is_present({'field': value}, 'field') is False

    @pytest.mark.parametrize("value", [[], {}, 0, False, "x"])
    def test_other_values_present(self, value):
        assert is_present({'field': value}, 'field') is True

    def test_absent_key(self):
        assert is_present({}, 'field') is False

    def test_non_mapping_document(self):
        assert is_present(['field'], 'field') is False


class TestClassifyPriority:
    """Test suite for classify_priority."""

    def test_rich_results_wins_over_llm(self, news_profile):
        """Test a field in both subsets is ranked high, never medium."""
        assert classify_priority(news_profile, 'image') == ('high', 'Important for rich results eligibility')

    def test_llm_only(self, news_profile):
        assert classify_priority(news_profile, 'description') == ('medium', 'Optimized for LLM processing')

    def test_neither(self, news_profile):
        assert classify_priority(news_profile, 'keywords') == ('low', 'Recommended for general SEO')


class TestAdvisoryEngine:
    """Test suite for AdvisoryEngine."""

    @pytest.fixture
    def engine(self):
        """Create an AdvisoryEngine instance."""
        return AdvisoryEngine()

    def test_one_warning_per_missing_field(self, engine, news_profile):
        """Test warnings follow declared order and carry priorities."""
        warnings = engine.check_recommended({'headline': 'Hello world'}, news_profile)

        assert [w.field for w in warnings] == ['image', 'description', 'keywords']
        assert [w.priority for w in warnings] == ['high', 'medium', 'low']
        assert warnings[0].message == "Recommended field 'image' is missing"
        assert warnings[1].description == 'Summary of the news item'
        assert all(w.importance == 'recommended' for w in warnings)

    def test_empty_values_warn(self, engine, news_profile):
        """Test empty strings and None count as missing."""
        warnings = engine.check_recommended(
            {'image': '', 'description': None, 'keywords': 'news'},
            news_profile,
        )

        assert [w.field for w in warnings] == ['image', 'description']

    def test_empty_containers_do_not_warn(self, engine, news_profile):
        """Test empty lists and dicts count as present."""
        warnings = engine.check_recommended(
            {'image': {}, 'description': [], 'keywords': []},
            news_profile,
        )

        assert warnings == []

    def test_required_and_optional_ignored(self, engine, news_profile):
        warnings = engine.check_recommended(
            {'image': 'https://example.com/a.jpg', 'description': 'd', 'keywords': 'k'},
            news_profile,
        )

        assert warnings == []
