"""Tree-sitter powered TypeScript/TSX structure access."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

try:  # pragma: no cover - optional dependency
    from tree_sitter import Parser
    from tree_sitter_languages import get_language

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    Parser = None  # type: ignore[assignment]
    get_language = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False


_PROPS_SUFFIX = "Props"
_OBJECT_BODY_TYPES = {"object_type", "interface_body"}


@dataclass
class ParsedProperty:
    name: str
    type: str
    optional: bool
    doc: Optional[str]


@dataclass
class ParsedInterface:
    name: str
    properties: List[ParsedProperty]


class TypeScriptParser:
    """Parses TypeScript/TSX source and collects ``*Props`` declarations."""

    def __init__(self, enabled: Optional[bool] = None) -> None:
        self._enabled = TREE_SITTER_AVAILABLE if enabled is None else enabled
        self._parsers: Dict[str, Parser] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled and TREE_SITTER_AVAILABLE

    def props_declarations(self, source: str, file_name: str = "component.tsx") -> List[ParsedInterface]:
        """Return interface and type-alias object declarations whose name ends with ``Props``.

        Raises RuntimeError when the parser is unavailable; callers fall back to
        text heuristics.
        """
        parser = self._get_parser(self._language_for_file(file_name))
        if parser is None:
            raise RuntimeError("tree-sitter TypeScript grammar is not available")
        source_bytes = source.encode("utf-8")
        tree = parser.parse(source_bytes)
        return list(self._collect_declarations(tree.root_node, source_bytes))

    def _get_parser(self, language_key: str) -> Optional[Parser]:
        if not self.enabled:
            return None
        parser = self._parsers.get(language_key)
        if parser is not None:
            return parser
        language = get_language(language_key)
        parser = Parser()
        parser.set_language(language)
        self._parsers[language_key] = parser
        return parser

    @staticmethod
    def _language_for_file(file_name: str) -> str:
        lower = file_name.lower()
        if lower.endswith((".tsx", ".jsx", ".js")):
            return "tsx"
        return "typescript"

    @staticmethod
    def _node_text(node, source_bytes) -> str:  # type: ignore[no-untyped-def]
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    def _collect_declarations(self, node, source_bytes) -> Iterable[ParsedInterface]:  # type: ignore[no-untyped-def]
        for child in node.children:
            if child.type in {"interface_declaration", "type_alias_declaration"}:
                name_node = child.child_by_field_name("name")
                name = self._node_text(name_node, source_bytes) if name_node else ""
                body = self._declaration_body(child)
                if name.endswith(_PROPS_SUFFIX) and body is not None:
                    yield ParsedInterface(
                        name=name,
                        properties=list(self._collect_properties(body, source_bytes)),
                    )
            yield from self._collect_declarations(child, source_bytes)

    @staticmethod
    def _declaration_body(node):  # type: ignore[no-untyped-def]
        if node.type == "interface_declaration":
            body = node.child_by_field_name("body")
            return body if body is not None and body.type in _OBJECT_BODY_TYPES else None
        value = node.child_by_field_name("value")
        if value is None:
            return None
        if value.type == "object_type":
            return value
        # `type XProps = Base & { ... }` keeps the first inline object literal.
        for child in value.children:
            if child.type == "object_type":
                return child
        return None

    def _collect_properties(self, body, source_bytes) -> List[ParsedProperty]:  # type: ignore[no-untyped-def]
        properties: List[ParsedProperty] = []
        pending_doc: Optional[str] = None
        last_row = -1
        for member in body.named_children:
            if member.type == "comment":
                doc = _clean_comment(self._node_text(member, source_bytes))
                if properties and member.start_point[0] == last_row and properties[-1].doc is None:
                    # Trailing comment on the same line describes the previous prop.
                    properties[-1].doc = doc
                else:
                    pending_doc = doc
                continue
            if member.type not in {"property_signature", "method_signature"}:
                pending_doc = None
                continue
            name_node = member.child_by_field_name("name")
            if name_node is None:
                pending_doc = None
                continue
            name = self._node_text(name_node, source_bytes).strip("'\"")
            optional = any(child.type == "?" for child in member.children)
            if member.type == "method_signature":
                remainder = source_bytes[name_node.end_byte : member.end_byte]
                type_text = remainder.decode("utf-8", errors="ignore").lstrip().lstrip("?").strip()
            else:
                type_node = member.child_by_field_name("type")
                type_text = self._node_text(type_node, source_bytes) if type_node else "any"
                type_text = type_text.lstrip().removeprefix(":").strip()
            properties.append(
                ParsedProperty(
                    name=name,
                    type=" ".join(type_text.rstrip(";,").split()),
                    optional=optional,
                    doc=pending_doc,
                )
            )
            pending_doc = None
            last_row = member.end_point[0]
        return properties


def _clean_comment(text: str) -> Optional[str]:
    body = text.strip()
    if body.startswith("//"):
        body = body[2:]
    else:
        body = body.removeprefix("/**").removeprefix("/*").removesuffix("*/")
    lines = [line.strip().lstrip("*").strip() for line in body.splitlines()]
    cleaned = " ".join(line for line in lines if line)
    return cleaned or None


__all__ = ["ParsedInterface", "ParsedProperty", "TREE_SITTER_AVAILABLE", "TypeScriptParser"]
