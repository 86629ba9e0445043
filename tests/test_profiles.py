# tests/test_profiles.py
"""Tests for profile loading and the profile registry."""

import pytest

from ldprofiles.exceptions import (
    ProfileConsistencyError,
    ProfileDefinitionError,
    UnknownProfileError,
)
from ldprofiles.profiles import (
    ProfileRegistry,
    load_profile_dir,
    load_profile_file,
    profile_from_dict,
)


SHIPPED_TYPES = [
    'Article', 'Event', 'FAQPage', 'JobPosting',
    'LocalBusiness', 'Product', 'Recipe', 'Review',
]


class TestProfileFromDict:
    """Test suite for building profiles from raw mappings."""

    def test_tiers_keep_declared_order(self, news_profile):
        """Test field tiers preserve the order they were declared in."""
        assert list(news_profile.required) == ['headline', 'author']
        assert list(news_profile.recommended) == ['image', 'description', 'keywords']
        assert news_profile.rich_results_fields == ('headline', 'image')

    def test_missing_type_rejected(self):
        """Test a profile needs a type name."""
        with pytest.raises(ProfileDefinitionError):
            profile_from_dict({'required': {}})

    def test_bad_field_reports_profile_and_field(self):
        """Test field errors name the profile and field."""
        with pytest.raises(ProfileDefinitionError) as exc_info:
            profile_from_dict({'type': 'Broken', 'required': {'name': {'type': 'text'}}})

        assert exc_info.value.profile_type == 'Broken'
        assert exc_info.value.field_name == 'name'

    def test_find_field_prefers_required(self):
        """Test a field declared in two tiers resolves to the earlier tier."""
        profile = profile_from_dict({
            'type': 'Overlap',
            'required': {'hiringOrganization': {'type': 'string'}},
            'optional': {'hiringOrganization': {'type': 'object'}},
        })

        importance, definition = profile.find_field('hiringOrganization')
        assert importance == 'required'
        assert definition.constraint.json_type == 'string'
        assert profile.declared_fields == ['hiringOrganization']

    def test_find_field_unknown(self, news_profile):
        assert news_profile.find_field('nope') is None

    def test_consistency_problems(self):
        """Test scoring-subset names must be declared somewhere."""
        profile = profile_from_dict({
            'type': 'Loose',
            'required': {'name': {'type': 'string'}},
            'richResultsFields': ['name', 'image'],
            'llmOptimizedFields': ['summary'],
        })

        problems = profile.consistency_problems()
        assert len(problems) == 2
        assert any("'image'" in problem for problem in problems)
        assert any("'summary'" in problem for problem in problems)


class TestProfileFiles:
    """Test suite for YAML profile loading."""

    def test_load_file(self, tmp_path):
        """Test a YAML profile file loads into a definition."""
        path = tmp_path / "thing.yaml"
        path.write_text(
            "type: Thing\n"
            "category: content\n"
            "required:\n"
            "  name:\n"
            "    type: string\n"
            "    examples: [\"Widget\"]\n"
            "richResultsFields: [name]\n"
        )

        profile = load_profile_file(path)

        assert profile.type == 'Thing'
        assert profile.required['name'].examples == ('Widget',)
        assert profile.llm_optimized_fields == ()

    def test_invalid_yaml(self, tmp_path):
        """Test unparseable YAML is a definition error."""
        path = tmp_path / "broken.yaml"
        path.write_text("type: [unclosed\n")

        with pytest.raises(ProfileDefinitionError):
            load_profile_file(path)

    def test_load_dir_sorted(self, tmp_path):
        """Test directory loading is sorted by file name."""
        (tmp_path / "b.yaml").write_text("type: Beta\n")
        (tmp_path / "a.yaml").write_text("type: Alpha\n")
        (tmp_path / "notes.txt").write_text("ignored")

        profiles = load_profile_dir(tmp_path)

        assert [p.type for p in profiles] == ['Alpha', 'Beta']

    def test_missing_dir(self, tmp_path):
        with pytest.raises(ProfileDefinitionError):
            load_profile_dir(tmp_path / "missing")


class TestProfileRegistry:
    """Test suite for ProfileRegistry."""

    def test_get_and_contains(self, registry):
        """Test registered profiles can be looked up."""
        assert 'NewsItem' in registry
        assert len(registry) == 2
        assert registry.get('NewsItem').type == 'NewsItem'
        assert registry.list_types() == ['NewsItem', 'Bare']

    def test_get_unknown_raises(self, registry):
        """Test unknown types raise UnknownProfileError."""
        with pytest.raises(UnknownProfileError) as exc_info:
            registry.get('Bogus')

        assert exc_info.value.profile_type == 'Bogus'
        assert str(exc_info.value) == 'Unknown profile type: Bogus'

    def test_unknown_is_key_error(self, registry):
        with pytest.raises(KeyError):
            registry.get('Bogus')

    def test_find_unknown_returns_none(self, registry):
        assert registry.find('Bogus') is None

    def test_by_category(self, registry):
        assert registry.by_category('content') == ['NewsItem', 'Bare']
        assert registry.by_category('business') == []

    def test_strict_registration_rejects_inconsistent(self):
        """Test strict registries refuse undeclared scoring fields."""
        loose = profile_from_dict({
            'type': 'Loose',
            'required': {'name': {'type': 'string'}},
            'richResultsFields': ['image'],
        })

        with pytest.raises(ProfileConsistencyError) as exc_info:
            ProfileRegistry([loose])

        assert exc_info.value.profile_type == 'Loose'
        assert len(exc_info.value.problems) == 1

    def test_permissive_registration_warns(self, caplog):
        """Test non-strict registries keep inconsistent profiles and log a warning."""
        loose = profile_from_dict({
            'type': 'Loose',
            'required': {'name': {'type': 'string'}},
            'richResultsFields': ['image'],
        })

        registry = ProfileRegistry([loose], strict=False)

        assert 'Loose' in registry
        assert "inconsistent" in caplog.text

    def test_register_replaces(self, registry, news_profile):
        """Test re-registering a type replaces the earlier profile."""
        registry.register(news_profile)

        assert len(registry) == 2
        assert registry.get('NewsItem') is news_profile


class TestBuiltinProfiles:
    """Test suite for the shipped YAML profiles."""

    @pytest.fixture
    def builtin(self):
        """Registry with the shipped profiles."""
        return ProfileRegistry.builtin()

    def test_all_shipped_profiles_load(self, builtin):
        """Test every shipped profile loads and passes the consistency check."""
        assert sorted(builtin.list_types()) == SHIPPED_TYPES

    @pytest.mark.parametrize("profile_type", SHIPPED_TYPES)
    def test_type_discriminator_required(self, builtin, profile_type):
        """Test each shipped profile pins @type to its own type name."""
        profile = builtin.get(profile_type)

        assert '@type' in profile.required
        assert profile.required['@type'].constraint.value == profile_type
        assert profile.rich_results_fields
        assert profile.llm_optimized_fields

    def test_date_formats(self, builtin):
        """Test declared date fields are mapped to their format."""
        assert builtin.get('Article').date_formats['datePublished'] == 'date-time'
        assert builtin.get('JobPosting').date_formats['datePosted'] == 'date'
        assert 'headline' not in builtin.get('Article').date_formats

    def test_recipe_llm_fields_declared(self, builtin):
        """Test the recipe's ingredient list is declared where it is scored."""
        recipe = builtin.get('Recipe')

        assert 'recipeIngredient' in recipe.required
        assert 'recipeIngredient' in recipe.llm_optimized_fields

    def test_extra_dirs(self, tmp_path):
        """Test extra directories are loaded after the shipped profiles."""
        (tmp_path / "custom.yaml").write_text(
            "type: Custom\ncategory: content\nrequired:\n  name:\n    type: string\n"
        )

        registry = ProfileRegistry.builtin(extra_dirs=[tmp_path])

        assert 'Custom' in registry
        assert 'Article' in registry
