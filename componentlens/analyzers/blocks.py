"""String- and comment-aware brace scanning over TypeScript/JSX source text."""

from __future__ import annotations

import re
from typing import Iterator, List, NamedTuple, Optional, Pattern, Tuple

_OPENERS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = {"}", "]", ")"}
_QUOTES = {'"', "'"}


class Segment(NamedTuple):
    """Top-level slice of a block body and the separator that ended it."""

    text: str
    separator: str


def skip_string_literal(text: str, index: int) -> int:
    """Return the index just past the string literal starting at ``index``."""
    quote = text[index]
    index += 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        if char == "\n" and quote in _QUOTES:
            # Unterminated single-line string; resume at the line break.
            return index
        if quote == "`" and text.startswith("${", index):
            close = find_matching_brace(text, index + 1)
            index = (close + 1) if close is not None else length
            continue
        index += 1
    return length


def _skip_comment(text: str, index: int) -> Optional[int]:
    """Return the index just past a comment starting at ``index``, or None."""
    if text.startswith("//", index):
        end = text.find("\n", index)
        return len(text) if end == -1 else end
    if text.startswith("/*", index):
        end = text.find("*/", index + 2)
        return len(text) if end == -1 else end + 2
    return None


def find_matching_brace(text: str, open_index: int) -> Optional[int]:
    """Return the index of the bracket closing the one at ``open_index``.

    Counts nesting across all bracket kinds while skipping string literals,
    template literals and comments. Returns None when the block never closes.
    """
    if open_index >= len(text) or text[open_index] not in _OPENERS:
        return None
    depth = 0
    index = open_index
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES or char == "`":
            index = skip_string_literal(text, index)
            continue
        if char == "/":
            skipped = _skip_comment(text, index)
            if skipped is not None:
                index = skipped
                continue
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return None


def strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments that are not inside string literals."""
    pieces: List[str] = []
    index = 0
    start = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES or char == "`":
            index = skip_string_literal(text, index)
            continue
        if char == "/":
            skipped = _skip_comment(text, index)
            if skipped is not None:
                pieces.append(text[start:index])
                comment = text[index:skipped]
                pieces.append("\n" * comment.count("\n"))
                index = skipped
                start = index
                continue
        index += 1
    pieces.append(text[start:])
    return "".join(pieces)


def split_top_level(text: str, separators: str = ",", *, generics: bool = False) -> List[Segment]:
    """Split ``text`` on separators that sit outside brackets, strings and comments.

    With ``generics`` set, type-argument lists such as ``Map<K, V>`` also nest.
    A ``<`` only opens one when it follows an identifier or ``.``, and the ``>``
    of ``=>`` never closes one.
    """
    segments: List[Segment] = []
    depth = 0
    angles = 0
    index = 0
    start = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES or char == "`":
            index = skip_string_literal(text, index)
            continue
        if char == "/":
            skipped = _skip_comment(text, index)
            if skipped is not None:
                index = skipped
                continue
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(0, depth - 1)
        elif generics and char == "<" and index > 0 and _opens_type_arguments(text[index - 1]):
            angles += 1
        elif generics and char == ">" and angles > 0 and text[index - 1] != "=":
            angles -= 1
        elif depth == 0 and angles == 0 and char in separators:
            segments.append(Segment(text[start:index], char))
            start = index + 1
        index += 1
    if text[start:].strip():
        segments.append(Segment(text[start:], ""))
    return segments


def _opens_type_arguments(previous: str) -> bool:
    return previous.isalnum() or previous in "_$."


def iter_blocks(text: str, header: Pattern[str]) -> Iterator[Tuple[re.Match[str], str]]:
    """Yield ``(header match, body)`` for every brace block introduced by ``header``.

    ``header`` must end right after the opening ``{``. An unbalanced block
    yields the remainder of the text as its body.
    """
    for match in header.finditer(text):
        open_index = match.end() - 1
        if text[open_index] != "{":
            continue
        close_index = find_matching_brace(text, open_index)
        body = text[open_index + 1 : close_index] if close_index is not None else text[open_index + 1 :]
        yield match, body


def collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


__all__ = [
    "Segment",
    "collapse_whitespace",
    "find_matching_brace",
    "iter_blocks",
    "skip_string_literal",
    "split_top_level",
    "strip_comments",
]
