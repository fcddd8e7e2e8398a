"""Glob and exclude-pattern behaviour."""

from __future__ import annotations

import pytest

from componentlens.matching import PathMatcher, compile_glob, expand_braces, glob_matches


def test_expand_braces_expands_every_group() -> None:
    assert expand_braces("src/{a,b}/*.{tsx,jsx}") == [
        "src/a/*.tsx",
        "src/a/*.jsx",
        "src/b/*.tsx",
        "src/b/*.jsx",
    ]


def test_expand_braces_without_group_is_identity() -> None:
    assert expand_braces("**/*.tsx") == ["**/*.tsx"]


@pytest.mark.parametrize(
    "path",
    ["src/screens/LoginScreen.tsx", "a/b/c/HomeScreen.jsx", "HomeScreen.tsx"],
)
def test_screen_glob_matches_nested_and_top_level(path: str) -> None:
    assert glob_matches("**/*Screen.{tsx,jsx}", path)


def test_screen_glob_rejects_other_extensions() -> None:
    assert not glob_matches("**/*Screen.{tsx,jsx}", "src/screens/LoginScreen.ts")


def test_single_star_stays_within_segment() -> None:
    regex = compile_glob("src/*.tsx")
    assert regex.match("src/Button.tsx")
    assert not regex.match("src/ui/Button.tsx")


def test_question_mark_matches_one_character() -> None:
    regex = compile_glob("src/?.tsx")
    assert regex.match("src/A.tsx")
    assert not regex.match("src/AB.tsx")
    assert not regex.match("src//.tsx")


def test_leading_dot_slash_is_ignored() -> None:
    matcher = PathMatcher(["**/components/*.tsx"])
    assert matcher.matches_component("./src/components/Card.tsx", "Card.tsx")


def test_basename_can_match_component_pattern() -> None:
    matcher = PathMatcher(["*Button.tsx"])
    assert matcher.matches_component("deeply/nested/PrimaryButton.tsx", "PrimaryButton.tsx")


def test_exclude_wildcard_matches_basename() -> None:
    matcher = PathMatcher(exclude_patterns=["*.test.*"])
    assert matcher.is_excluded("src/Button.test.tsx", "Button.test.tsx")
    assert not matcher.is_excluded("src/Button.tsx", "Button.tsx")


def test_exclude_literal_text_is_escaped() -> None:
    matcher = PathMatcher(exclude_patterns=["*.spec.*"])
    assert not matcher.is_excluded("src/Buttonxspecxtsx", "Buttonxspecxtsx")


def test_exclude_substring_matches_relative_path() -> None:
    matcher = PathMatcher(exclude_patterns=["node_modules"])
    assert matcher.is_excluded("node_modules/pkg/index.js", "index.js")
    assert matcher.is_excluded("node_modules", "node_modules")
