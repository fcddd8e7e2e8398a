"""Style declaration extraction for StyleSheet objects and utility-class attributes."""

from __future__ import annotations

import re
from typing import Iterator, List, Optional

from ..models import FRAMEWORK_REACT_NATIVE, FRAMEWORK_TAILWIND, StyleRecord
from .blocks import (
    collapse_whitespace,
    find_matching_brace,
    iter_blocks,
    skip_string_literal,
    split_top_level,
    strip_comments,
)

_STYLESHEET_HEADER = re.compile(r"\bStyleSheet\.create\s*\(\s*\{")
_CLASS_ATTRIBUTE = re.compile(r"(?<![\w-])(?:className|class)\s*=\s*")
_KEY_VALUE = re.compile(r"^\s*(?:(['\"])(?P<quoted>[^'\"]+)\1|(?P<bare>[A-Za-z_$][\w$-]*))\s*:\s*(?P<value>[\s\S]+)$")
_QUOTED_SCALAR = re.compile(r"^(['\"`])(?P<inner>[^'\"`]*)\1$")


def extract_styles(source: str, framework: str) -> List[StyleRecord]:
    """Return the style declarations appropriate for ``framework``."""
    if framework == FRAMEWORK_REACT_NATIVE:
        return extract_stylesheet_styles(source)
    if framework == FRAMEWORK_TAILWIND:
        return extract_class_styles(source)
    return []


def extract_stylesheet_styles(source: str) -> List[StyleRecord]:
    """Read ``StyleSheet.create({...})`` calls into one record per block property."""
    styles: List[StyleRecord] = []
    for _, body in iter_blocks(source, _STYLESHEET_HEADER):
        for block_name, block_body in _iter_named_objects(strip_comments(body)):
            for segment in split_top_level(block_body, ","):
                parsed = _parse_key_value(segment.text)
                if parsed is None:
                    continue
                prop, value = parsed
                styles.append(
                    StyleRecord(
                        property=prop,
                        value=_clean_value(value),
                        context="style",
                        name=block_name,
                    )
                )
    return styles


def extract_class_styles(source: str) -> List[StyleRecord]:
    """Split every ``className``/``class`` attribute value into utility tokens."""
    styles: List[StyleRecord] = []
    for value in iter_class_values(source):
        for token in value.split():
            styles.append(StyleRecord(property="className", value=token, context="className"))
    return styles


def iter_class_values(source: str) -> Iterator[str]:
    """Yield the literal text of each class attribute, interpolations removed."""
    for match in _CLASS_ATTRIBUTE.finditer(source):
        start = match.end()
        if start >= len(source):
            continue
        opener = source[start]
        if opener in {'"', "'", "`"}:
            end = skip_string_literal(source, start)
            yield _literal_text(source[start:end])
        elif opener == "{":
            close = find_matching_brace(source, start)
            expression = source[start + 1 : close] if close is not None else source[start + 1 :]
            literals = list(_iter_literals(expression))
            if literals:
                yield " ".join(literals)


def remove_interpolations(template: str) -> str:
    """Drop ``${...}`` segments from the body of a template literal."""
    pieces: List[str] = []
    index = 0
    while True:
        start = template.find("${", index)
        if start == -1:
            pieces.append(template[index:])
            break
        pieces.append(template[index:start])
        close = find_matching_brace(template, start + 1)
        if close is None:
            break
        pieces.append(" ")
        index = close + 1
    return "".join(pieces)


def _iter_literals(expression: str) -> Iterator[str]:
    index = 0
    length = len(expression)
    while index < length:
        char = expression[index]
        if char in {'"', "'", "`"}:
            end = skip_string_literal(expression, index)
            yield _literal_text(expression[index:end])
            index = end
            continue
        index += 1


def _literal_text(literal: str) -> str:
    if not literal:
        return ""
    quote = literal[0]
    body = literal[1:-1] if len(literal) > 1 and literal.endswith(quote) else literal[1:]
    if quote == "`":
        body = remove_interpolations(body)
    return body


def _iter_named_objects(body: str) -> Iterator[tuple[str, str]]:
    for segment in split_top_level(body, ","):
        parsed = _parse_key_value(segment.text)
        if parsed is None:
            continue
        name, value = parsed
        value = value.strip()
        if not value.startswith("{"):
            continue
        close = find_matching_brace(value, 0)
        yield name, value[1:close] if close is not None else value[1:]


def _parse_key_value(text: str) -> Optional[tuple[str, str]]:
    match = _KEY_VALUE.match(text.strip())
    if match is None:
        return None
    key = match.group("quoted") or match.group("bare")
    return key, match.group("value")


def _clean_value(value: str) -> str:
    cleaned = collapse_whitespace(value).rstrip(",;").strip()
    quoted = _QUOTED_SCALAR.match(cleaned)
    if quoted:
        return quoted.group("inner")
    return cleaned


__all__ = [
    "extract_class_styles",
    "extract_styles",
    "extract_stylesheet_styles",
    "iter_class_values",
    "remove_interpolations",
]
