from __future__ import annotations

import textwrap

import pytest

from componentlens.analyzers.props import (
    FallbackPropExtractor,
    HeuristicPropExtractor,
    TreeSitterPropExtractor,
)
from componentlens.analyzers.tree_sitter import TREE_SITTER_AVAILABLE, TypeScriptParser

SOURCE = textwrap.dedent(
    """
    import React from 'react';

    interface ButtonProps {
      title: string;
      onPress?: () => void;
    }

    export const Button = ({ title }: ButtonProps) => <Text>{title}</Text>;
    """
)


def test_disabled_parser_raises() -> None:
    parser = TypeScriptParser(enabled=False)

    assert parser.enabled is False
    with pytest.raises(RuntimeError):
        parser.props_declarations(SOURCE, "Button.tsx")


def test_fallback_uses_heuristic_when_parser_is_disabled() -> None:
    primary = TreeSitterPropExtractor(TypeScriptParser(enabled=False))
    extractor = FallbackPropExtractor(primary, HeuristicPropExtractor())

    props = extractor.extract(SOURCE, "Button.tsx")

    assert [(prop.name, prop.type, prop.required) for prop in props] == [
        ("title", "string", True),
        ("onPress", "() => void", False),
    ]


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
def test_parser_collects_props_declarations() -> None:
    declarations = TypeScriptParser().props_declarations(SOURCE, "Button.tsx")

    assert [declaration.name for declaration in declarations] == ["ButtonProps"]
    properties = declarations[0].properties
    assert [(prop.name, prop.type, prop.optional) for prop in properties] == [
        ("title", "string", False),
        ("onPress", "() => void", True),
    ]


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
def test_parser_reads_intersection_type_alias() -> None:
    source = "type CardProps = BaseProps & { elevated?: boolean };\n"

    declarations = TypeScriptParser().props_declarations(source, "Card.ts")

    assert [declaration.name for declaration in declarations] == ["CardProps"]
    assert [(prop.name, prop.optional) for prop in declarations[0].properties] == [("elevated", True)]
