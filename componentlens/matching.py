"""Glob and exclude-pattern matching for component discovery."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Pattern, Sequence, Tuple

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand every ``{a,b,c}`` group into independent patterns.

    >>> expand_braces("**/*.{tsx,jsx}")
    ['**/*.tsx', '**/*.jsx']
    """
    match = _BRACE_GROUP.search(pattern)
    if match is None:
        return [pattern]
    head = pattern[: match.start()]
    tail = pattern[match.end() :]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option.strip()}{tail}"))
    return expanded


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> Pattern[str]:
    """Compile a single (brace-free) glob into an anchored regex."""
    parts: List[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
            continue
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile("^" + "".join(parts) + "$")


@lru_cache(maxsize=512)
def _compile_exclude(pattern: str) -> Pattern[str]:
    return re.compile(".*".join(re.escape(piece) for piece in pattern.split("*")))


def _normalise(path: str) -> str:
    normalised = path.replace("\\", "/")
    while normalised.startswith("./"):
        normalised = normalised[2:]
    return normalised


class PathMatcher:
    """Matches relative paths and file names against component and exclude patterns."""

    def __init__(
        self,
        component_patterns: Sequence[str] = (),
        exclude_patterns: Sequence[str] = (),
    ) -> None:
        self._component_patterns: Tuple[str, ...] = tuple(component_patterns)
        self._exclude_patterns: Tuple[str, ...] = tuple(exclude_patterns)
        self._compiled: Tuple[Pattern[str], ...] = tuple(
            compile_glob(expanded)
            for pattern in self._component_patterns
            for expanded in expand_braces(pattern)
        )

    @property
    def component_patterns(self) -> Tuple[str, ...]:
        return self._component_patterns

    @property
    def exclude_patterns(self) -> Tuple[str, ...]:
        return self._exclude_patterns

    def matches_component(self, relative_path: str, file_name: str) -> bool:
        """Return True when the path or bare file name matches any component glob."""
        test_path = _normalise(relative_path)
        return any(
            regex.match(test_path) is not None or regex.match(file_name) is not None
            for regex in self._compiled
        )

    def is_excluded(self, relative_path: str, file_name: str) -> bool:
        """Return True when any exclude pattern hits the file name or relative path."""
        test_path = _normalise(relative_path)
        for pattern in self._exclude_patterns:
            if not pattern:
                continue
            if "*" in pattern:
                regex = _compile_exclude(pattern)
                if regex.search(file_name) or regex.search(test_path):
                    return True
            elif pattern in file_name or pattern in test_path:
                return True
        return False


def glob_matches(pattern: str, relative_path: str, file_name: str | None = None) -> bool:
    """Convenience check of one glob (with brace groups) against a path."""
    name = file_name if file_name is not None else _normalise(relative_path).rsplit("/", 1)[-1]
    return PathMatcher([pattern]).matches_component(relative_path, name)


__all__ = ["PathMatcher", "compile_glob", "expand_braces", "glob_matches"]
