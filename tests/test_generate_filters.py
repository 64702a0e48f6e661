"""Tests for include-pattern filtering."""

import pytest

from grafana_tfgen.catalog import ResourceCatalog, ResourceDescriptor
from grafana_tfgen.generate.errors import MalformedPatternError
from grafana_tfgen.generate.filters import (
    filter_resources,
    glob_match,
    matches_any_pattern,
    validate_patterns,
)
from grafana_tfgen.generate.imports import local_name_for


@pytest.fixture
def catalog():
    return ResourceCatalog(
        [
            ResourceDescriptor("grafana_dashboard"),
            ResourceDescriptor("grafana_data_source"),
            ResourceDescriptor("grafana_folder"),
            ResourceDescriptor("grafana_team"),
        ]
    )


class TestFilterResources:
    def test_no_patterns_returns_catalog_unchanged(self, catalog):
        assert filter_resources(catalog, []) is catalog

    def test_exact_type(self, catalog):
        assert filter_resources(catalog, ["grafana_folder.*"]).names() == ("grafana_folder",)

    def test_type_glob(self, catalog):
        filtered = filter_resources(catalog, ["grafana_da*.*"])
        assert filtered.names() == ("grafana_dashboard", "grafana_data_source")

    def test_any_pattern_matches(self, catalog):
        filtered = filter_resources(catalog, ["grafana_team.*", "grafana_folder.x"])
        assert filtered.names() == ("grafana_folder", "grafana_team")

    def test_character_class(self, catalog):
        filtered = filter_resources(catalog, ["grafana_[ft]*.*"])
        assert filtered.names() == ("grafana_folder", "grafana_team")

    def test_no_match_gives_empty_catalog(self, catalog):
        assert len(filter_resources(catalog, ["grafana_user.*"])) == 0

    @pytest.mark.parametrize("pattern", ["grafana_folder", "*", ""])
    def test_pattern_without_dot_is_malformed(self, catalog, pattern):
        with pytest.raises(MalformedPatternError, match="<type>.<name>"):
            filter_resources(catalog, ["grafana_team.*", pattern])

    @pytest.mark.parametrize("pattern", ["grafana_[folder.*", "grafana_folder.[", "grafana_folder.x\\"])
    def test_invalid_glob_is_malformed(self, catalog, pattern):
        with pytest.raises(MalformedPatternError):
            filter_resources(catalog, [pattern])


class TestMatchesAnyPattern:
    def test_no_patterns_match_everything(self):
        assert matches_any_pattern("grafana_folder", "anything", []) is True

    def test_name_glob(self):
        patterns = ["grafana_folder.team_*"]
        assert matches_any_pattern("grafana_folder", "team_a", patterns) is True
        assert matches_any_pattern("grafana_folder", "other", patterns) is False

    def test_type_must_match_too(self):
        assert matches_any_pattern("grafana_team", "team_a", ["grafana_folder.*"]) is False

    def test_matches_full_address(self):
        assert matches_any_pattern("grafana_folder", "abc", ["grafana_folder.abc"]) is True
        assert matches_any_pattern("grafana_folder", "abcd", ["grafana_folder.abc"]) is False

    def test_case_sensitive(self):
        assert matches_any_pattern("grafana_folder", "ABC", ["grafana_folder.abc"]) is False

    def test_leading_digit_names_match_with_underscore(self):
        name = local_name_for("1:abc")
        assert matches_any_pattern("grafana_folder", name, ["grafana_folder._1_*"])
        assert not matches_any_pattern("grafana_folder", name, ["grafana_folder.1_*"])


class TestGlobMatch:
    def test_question_mark(self):
        assert glob_match("a?c", "abc")
        assert not glob_match("a?c", "abbc")

    def test_negated_class(self):
        assert glob_match("[^a]bc", "xbc")
        assert not glob_match("[^a]bc", "abc")

    def test_bang_is_a_literal_class_member(self):
        assert glob_match("[!a]bc", "!bc")
        assert glob_match("[!a]bc", "abc")
        assert not glob_match("[!a]bc", "xbc")

    @pytest.mark.parametrize("pattern", ["[]a]", "[]", "[^]", "[-a]", "[a-]", "[a-\\"])
    def test_unescaped_bracket_or_dash_in_class_is_malformed(self, pattern):
        with pytest.raises(MalformedPatternError):
            glob_match(pattern, "a")

    def test_escaped_class_members(self):
        assert glob_match("[\\]\\-]", "]")
        assert glob_match("[\\]\\-]", "-")
        assert not glob_match("[\\]\\-]", "a")

    def test_range(self):
        assert glob_match("v[0-9]", "v7")
        assert not glob_match("v[0-9]", "vx")

    def test_reversed_range_is_malformed(self):
        with pytest.raises(MalformedPatternError):
            glob_match("v[9-0]", "v1")

    def test_wildcards_do_not_cross_slash(self):
        assert not glob_match("a*c", "a/c")
        assert not glob_match("a?c", "a/c")
        assert glob_match("a*c", "a-b_c")

    def test_literal_regex_characters(self):
        assert glob_match("a+b(c)", "a+b(c)")
        assert not glob_match("a.b", "axb")

    def test_escaped_star_is_literal(self):
        assert glob_match("a\\*", "a*")
        assert not glob_match("a\\*", "ab")

    def test_validate_patterns(self):
        validate_patterns(["grafana_*.*", "grafana_folder.[a-z]*"])
        with pytest.raises(MalformedPatternError):
            validate_patterns(["nodot"])
