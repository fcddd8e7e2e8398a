"""Prop extraction strategies: tree-sitter AST with a brace/line heuristic fallback."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import List, Optional

from ..logging import get_logger
from ..models import PropRecord
from .blocks import collapse_whitespace, iter_blocks, split_top_level, strip_comments
from .tree_sitter import TREE_SITTER_AVAILABLE, TypeScriptParser

_INTERFACE_HEADER = re.compile(
    r"\binterface\s+(\w*Props)\b(?:\s*<[^{}]*?>)?(?:\s+extends\s+[^{]+?)?\s*\{"
)
_TYPE_HEADER = re.compile(
    r"\btype\s+(\w*Props)\b(?:\s*<[^{}=]*?>)?\s*=\s*(?:[^{};=]*?&\s*)?\{"
)
_DECLARATION = re.compile(
    r"^\s*(?:readonly\s+)?(?P<name>[A-Za-z_$][\w$]*|'[^']+'|\"[^\"]+\")\s*(?P<optional>\?)?\s*"
    r"(?P<rest>[:(<][\s\S]*)$"
)
_COMMENT = re.compile(r"/\*[\s\S]*?\*/|//[^\n]*")

_LOGGER = get_logger("analyzers.props")


class PropExtractor(ABC):
    """Contract for strategies that read component props out of source text."""

    name: str = "base"

    @abstractmethod
    def extract(self, source: str, file_name: str = "component.tsx") -> List[PropRecord]:
        """Return the props declared by ``*Props`` interfaces and type aliases."""


class HeuristicPropExtractor(PropExtractor):
    """Brace-balanced block search with one declaration per top-level line or separator."""

    name = "heuristic"

    def extract(self, source: str, file_name: str = "component.tsx") -> List[PropRecord]:
        props: List[PropRecord] = []
        for header in (_INTERFACE_HEADER, _TYPE_HEADER):
            for _, body in iter_blocks(source, header):
                props.extend(parse_prop_block(body))
        return props


class TreeSitterPropExtractor(PropExtractor):
    """Reads props from the tree-sitter syntax tree; raises when parsing is impossible."""

    name = "tree_sitter"

    def __init__(self, parser: TypeScriptParser | None = None) -> None:
        self._parser = parser or TypeScriptParser()

    @property
    def available(self) -> bool:
        return self._parser.enabled

    def extract(self, source: str, file_name: str = "component.tsx") -> List[PropRecord]:
        props: List[PropRecord] = []
        for declaration in self._parser.props_declarations(source, file_name):
            for prop in declaration.properties:
                props.append(
                    PropRecord(
                        name=prop.name,
                        type=prop.type,
                        required=not prop.optional,
                        description=prop.doc,
                    )
                )
        return props


class FallbackPropExtractor(PropExtractor):
    """Prefers ``primary``; any failure or empty result defers to ``fallback``."""

    name = "fallback"

    def __init__(self, primary: PropExtractor, fallback: PropExtractor) -> None:
        self.primary = primary
        self.fallback = fallback

    def extract(self, source: str, file_name: str = "component.tsx") -> List[PropRecord]:
        try:
            props = self.primary.extract(source, file_name)
        except Exception as exc:  # parser failures must never surface to callers
            _LOGGER.debug(
                "%s prop extraction failed for %s, using %s: %s",
                self.primary.name,
                file_name,
                self.fallback.name,
                exc,
            )
            return self.fallback.extract(source, file_name)
        if props:
            return props
        return self.fallback.extract(source, file_name)


def default_prop_extractor() -> PropExtractor:
    """Return the AST extractor with heuristic fallback when tree-sitter is installed."""
    heuristic = HeuristicPropExtractor()
    if TREE_SITTER_AVAILABLE:
        return FallbackPropExtractor(TreeSitterPropExtractor(), heuristic)
    return heuristic


def parse_prop_block(body: str) -> List[PropRecord]:
    """Parse the body of a props object type into PropRecords."""
    props: List[_PendingProp] = []
    pending_doc: Optional[str] = None

    for segment in split_top_level(body, ",;\n", generics=True):
        raw = segment.text
        comments = _COMMENT.findall(raw)
        code = strip_comments(raw).strip()
        doc = _comment_text(comments[-1]) if comments else None

        if not code:
            if doc is not None:
                if props and props[-1].open_line and props[-1].description is None:
                    props[-1].description = doc
                else:
                    pending_doc = doc
            if props and segment.separator == "\n":
                props[-1].open_line = False
            continue

        match = _DECLARATION.match(code)
        if match is None or code.startswith("["):
            if props and not code.startswith("["):
                # Continuation of a multi-line or comma-containing type.
                props[-1].type_parts.append(props[-1].separator + code)
                props[-1].separator = segment.separator
                props[-1].open_line = segment.separator != "\n"
            continue

        rest = match.group("rest")
        type_text = rest[1:] if rest.startswith(":") else rest
        props.append(
            _PendingProp(
                name=match.group("name").strip("'\""),
                optional=bool(match.group("optional")),
                type_parts=[type_text],
                separator=segment.separator,
                description=doc or pending_doc,
                open_line=segment.separator != "\n",
            )
        )
        pending_doc = None

    return [prop.finish() for prop in props]


class _PendingProp:
    def __init__(
        self,
        name: str,
        optional: bool,
        type_parts: List[str],
        separator: str,
        description: Optional[str],
        open_line: bool,
    ) -> None:
        self.name = name
        self.optional = optional
        self.type_parts = type_parts
        self.separator = separator
        self.description = description
        self.open_line = open_line

    def finish(self) -> PropRecord:
        type_text = collapse_whitespace("".join(self.type_parts)).strip().rstrip(";,").strip()
        return PropRecord(
            name=self.name,
            type=type_text or "any",
            required=not self.optional,
            description=self.description,
        )


def _comment_text(comment: str) -> Optional[str]:
    body = comment.strip()
    if body.startswith("//"):
        body = body[2:]
    else:
        body = body.removeprefix("/**").removeprefix("/*").removesuffix("*/")
    lines = [line.strip().lstrip("*").strip() for line in body.splitlines()]
    text = " ".join(line for line in lines if line)
    return text or None


__all__ = [
    "FallbackPropExtractor",
    "HeuristicPropExtractor",
    "PropExtractor",
    "TreeSitterPropExtractor",
    "default_prop_extractor",
    "parse_prop_block",
]
