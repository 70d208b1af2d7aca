"""Tests for transform_chain.matchers: matcher normalization."""

import re

import pytest

from transform_chain.errors import BadMatcherError
from transform_chain.matchers import normalize_matcher


@pytest.mark.parametrize("match", [None, ""])
def test_empty_matcher_means_no_matcher(match):
    assert normalize_matcher(match) is None


def test_callable_used_as_is():
    def predicate(filename):
        return filename.endswith("x.js")

    assert normalize_matcher(predicate) is predicate


def test_regex_searches_anywhere():
    matcher = normalize_matcher(re.compile(r"lib/"))
    assert matcher("/project/lib/a.js")
    assert not matcher("/project/src/a.js")


def test_glob_string_is_single_pattern_list():
    matcher = normalize_matcher("**/*.test.js")
    assert matcher("/project/src/a.test.js")
    assert not matcher("/project/src/a.js")


def test_glob_list_later_negation_excludes():
    matcher = normalize_matcher(["**/*.js", "!**/vendor/**"])
    assert matcher("/project/src/a.js")
    assert not matcher("/project/vendor/jquery.js")


def test_glob_list_order_matters():
    matcher = normalize_matcher(["!**/vendor/**", "**/*.js"])
    assert matcher("/project/vendor/jquery.js")


def test_negation_only_matches_nothing():
    matcher = normalize_matcher(["!**/*.min.js"])
    assert not matcher("/project/a.js")
    assert not matcher("/project/a.min.js")


def test_empty_pattern_list_matches_nothing():
    matcher = normalize_matcher([])
    assert not matcher("/project/a.js")


def test_anchored_absolute_pattern():
    matcher = normalize_matcher("/project/src/*.js")
    assert matcher("/project/src/a.js")
    assert not matcher("/other/src/a.js")


def test_windows_separators_normalized():
    matcher = normalize_matcher("**/src/*.js")
    assert matcher("C:\\project\\src\\a.js")


def test_tuple_of_patterns_accepted():
    matcher = normalize_matcher(("**/a.js", "**/b.js"))
    assert matcher("/x/b.js")


def test_glob_braces_expand():
    matcher = normalize_matcher("**/{lib,src}/*.{js,mjs}")
    assert matcher("/project/lib/a.js")
    assert matcher("/project/src/a.mjs")
    assert not matcher("/project/test/a.js")


def test_bare_name_does_not_match_files_inside_directory():
    matcher = normalize_matcher("lib")
    assert not matcher("/proj/lib/a.js")


def test_single_star_stays_within_one_directory():
    matcher = normalize_matcher("/proj/*.js")
    assert matcher("/proj/a.js")
    assert not matcher("/proj/lib/a.js")
    assert not normalize_matcher("*.js")("/proj/a.js")


def test_negation_can_be_undone_by_later_pattern():
    matcher = normalize_matcher(["**/*.js", "!**/vendor/**", "**/vendor/keep.js"])
    assert not matcher("/project/vendor/drop.js")
    assert matcher("/project/vendor/keep.js")


@pytest.mark.parametrize("match", [3, 1.5, {"a": 1}, ["**/*.js", 3], b"*.js", object()])
def test_bad_matcher_types(match):
    with pytest.raises(BadMatcherError, match="Bad matcher"):
        normalize_matcher(match)


def test_bad_matcher_error_names_type():
    with pytest.raises(BadMatcherError) as exc_info:
        normalize_matcher({"a": 1})
    assert exc_info.value.matcher_type == "dict"
    assert str(exc_info.value).endswith("Got: dict")
