"""Tests for marklint.patterns."""

from __future__ import annotations

import pytest

from marklint.models import MarkerKind
from marklint.patterns import (
    InvalidPattern,
    MarkerPatterns,
    build_pattern,
    compile_pattern,
    default_patterns,
)


def test_build_pattern_captures_label_only() -> None:
    pattern = build_pattern("tag")

    match = pattern.search("prefix [ TAG :  my-id  ] suffix")

    assert match is not None
    assert match.group(1) == "my-id"
    assert pattern.groups == 1


def test_build_pattern_escapes_keyword() -> None:
    pattern = build_pattern("a.b")

    assert pattern.search("[a.b:x]") is not None
    assert pattern.search("[axb:x]") is None


@pytest.mark.parametrize("keyword", ["", "two words", "ta:g", "[tag", "tag]"])
def test_build_pattern_rejects_bad_keywords(keyword: str) -> None:
    with pytest.raises(InvalidPattern):
        build_pattern(keyword)


def test_compile_pattern_requires_single_group() -> None:
    assert compile_pattern(r"<<(\w+)>>").groups == 1

    with pytest.raises(InvalidPattern):
        compile_pattern(r"<<\w+>>")
    with pytest.raises(InvalidPattern):
        compile_pattern(r"(a)(b)")


def test_compile_pattern_wraps_regex_errors() -> None:
    with pytest.raises(InvalidPattern) as excinfo:
        compile_pattern(r"([unclosed")

    assert isinstance(excinfo.value, ValueError)


def test_marker_patterns_defaults_and_overrides() -> None:
    defaults = default_patterns()
    custom = MarkerPatterns.from_mapping({MarkerKind.DIR_LABEL: "folder"})

    assert defaults.for_kind(MarkerKind.REFERENCE).search("[ref:x]") is not None
    assert custom.for_kind(MarkerKind.DIR_LABEL).search("[folder:x]") is not None
    assert custom.for_kind(MarkerKind.DIR_LABEL).search("[dir:x]") is None
    assert custom.for_kind(MarkerKind.TAG).search("[tag:x]") is not None


def test_marker_patterns_invalid_keyword_fails_at_construction() -> None:
    with pytest.raises(InvalidPattern):
        MarkerPatterns.from_keywords(ref="re f")


def test_for_kind_rejects_non_kind() -> None:
    with pytest.raises(KeyError):
        default_patterns().for_kind("dir")  # type: ignore[arg-type]
