"""Aggregates design tokens and recurring patterns across analyzed components."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Callable, Dict, List, Optional, Sequence

from ..models import (
    ColorPalette,
    ColorToken,
    ComponentRecord,
    DesignSystemSnapshot,
    SemanticColors,
    SpacingSystem,
    StylePattern,
    StyleRecord,
    TokenUsage,
    TypographySystem,
)

MAX_PATTERNS = 20
MAX_PATTERN_EXAMPLES = 3

_COLOR_LITERAL = re.compile(
    r"#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3,4})\b|rgba?\([^)]+\)|hsla?\([^)]+\)"
)
_PALETTE = (
    "slate|gray|zinc|neutral|stone|red|orange|amber|yellow|lime|green|emerald|teal|cyan|"
    "sky|blue|indigo|violet|purple|fuchsia|pink|rose"
)
_SHADES = "50|100|200|300|400|500|600|700|800|900|950"
_UTILITY_COLOR = re.compile(rf"(?:^|:)(bg|text|border)-((?:{_PALETTE})-(?:{_SHADES}))$")
_UTILITY_TEXT_SIZE = re.compile(r"(?:^|:)text-(xs|sm|base|lg|xl|[2-9]xl)$")
_UTILITY_FONT_WEIGHT = re.compile(
    r"(?:^|:)font-(thin|extralight|light|normal|medium|semibold|bold|extrabold|black)$"
)
_SPACING_SCALE = (
    r"0|px|0\.5|1|1\.5|2|2\.5|3|3\.5|4|5|6|7|8|9|10|11|12|14|16|20|24|28|32|36|40|44|48|52|56|60|64|72|80|96"
)
_UTILITY_SPACING = re.compile(rf"(?:^|:)-?(m[trblxy]?|p[trblxy]?|gap(?:-[xy])?)-({_SPACING_SCALE})$")

_SEMANTIC_DEFAULTS: Dict[str, Sequence[str]] = {
    "success": ("#10B981", "green-500"),
    "warning": ("#F59E0B", "yellow-500"),
    "error": ("#EF4444", "red-500"),
    "info": ("#3B82F6", "blue-500"),
}


class DesignSystemAnalyzer:
    """Builds a DesignSystemSnapshot from the style records of many components."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))

    def aggregate(self, components: Sequence[ComponentRecord]) -> DesignSystemSnapshot:
        return DesignSystemSnapshot(
            colors=self.extract_colors(components),
            typography=self.extract_typography(components),
            spacing=self.extract_spacing(components),
            common_patterns=self.extract_patterns(components),
            component_count=len(components),
            extracted_at=self._clock(),
        )

    def extract_colors(self, components: Sequence[ComponentRecord]) -> ColorPalette:
        buckets: Dict[str, Dict[str, ColorToken]] = {
            "background": {},
            "text": {},
            "border": {},
            "accent": {},
        }
        for component in components:
            for style in component.styles:
                for bucket, color in _colors_in(style):
                    _add_color(buckets[bucket], color, style.property)

        return ColorPalette(
            background=list(buckets["background"].values()),
            text=list(buckets["text"].values()),
            border=list(buckets["border"].values()),
            accent=list(buckets["accent"].values()),
            semantic=SemanticColors(
                **{
                    name: [ColorToken(name=value, value=value, usage=1, contexts=["default"]) for value in values]
                    for name, values in _SEMANTIC_DEFAULTS.items()
                }
            ),
        )

    def extract_typography(self, components: Sequence[ComponentRecord]) -> TypographySystem:
        typography = TypographySystem()
        for component in components:
            for style in component.styles:
                prop = style.property.lower()
                if "fontsize" in prop or "font-size" in prop:
                    _count(typography.font_sizes, style.value)
                elif "fontweight" in prop or "font-weight" in prop:
                    _count(typography.font_weights, style.value)
                elif "fontfamily" in prop or "font-family" in prop:
                    _count(typography.font_families, style.value)
                elif "lineheight" in prop or "line-height" in prop:
                    _count(typography.line_heights, style.value)

                if style.context != "className":
                    continue
                size = _UTILITY_TEXT_SIZE.search(style.value)
                if size:
                    _count(typography.font_sizes, size.group(1))
                weight = _UTILITY_FONT_WEIGHT.search(style.value)
                if weight:
                    _count(typography.font_weights, weight.group(1))
        return typography

    def extract_spacing(self, components: Sequence[ComponentRecord]) -> SpacingSystem:
        spacing = SpacingSystem()
        for component in components:
            for style in component.styles:
                prop = style.property.lower()
                if "margin" in prop:
                    _count(spacing.margins, style.value)
                elif "padding" in prop:
                    _count(spacing.paddings, style.value)
                elif "gap" in prop:
                    _count(spacing.gaps, style.value)

                if style.context != "className":
                    continue
                match = _UTILITY_SPACING.search(style.value)
                if match is None:
                    continue
                kind, size = match.groups()
                if kind.startswith("gap"):
                    _count(spacing.gaps, size)
                elif kind.startswith("m"):
                    _count(spacing.margins, size)
                else:
                    _count(spacing.paddings, size)
        return spacing

    def extract_patterns(self, components: Sequence[ComponentRecord]) -> List[StylePattern]:
        counts: Dict[str, int] = {}
        examples: Dict[str, List[str]] = {}

        def _seen(signature: str, component: ComponentRecord) -> None:
            counts[signature] = counts.get(signature, 0) + 1
            names = examples.setdefault(signature, [])
            if component.name not in names and len(names) < MAX_PATTERN_EXAMPLES:
                names.append(component.name)

        for component in components:
            _seen(component_signature(component), component)
            for style in component.styles:
                _seen(f"{style.property}:{style.value}", component)

        recurring = sorted(
            (item for item in counts.items() if item[1] > 1),
            key=lambda item: item[1],
            reverse=True,
        )[:MAX_PATTERNS]
        return [
            StylePattern(
                name=f"pattern-{index}",
                pattern=signature,
                usage=usage,
                examples=examples[signature],
            )
            for index, (signature, usage) in enumerate(recurring)
        ]


def component_signature(component: ComponentRecord) -> str:
    prop_types = ",".join(sorted(prop.type for prop in component.props))
    return f"{component.category}:props({prop_types}):styles({len(component.styles)})"


def _colors_in(style: StyleRecord) -> List[tuple[str, str]]:
    found: List[tuple[str, str]] = []
    prop = style.property.lower()
    for color in _COLOR_LITERAL.findall(style.value):
        if "background" in prop or "bg" in prop:
            found.append(("background", color))
        elif "color" in prop or "text" in prop:
            found.append(("text", color))
        elif "border" in prop:
            found.append(("border", color))
        else:
            found.append(("accent", color))

    if style.context == "className":
        utility = _UTILITY_COLOR.search(style.value)
        if utility:
            prefix, color = utility.groups()
            bucket = {"bg": "background", "text": "text", "border": "border"}[prefix]
            found.append((bucket, color))
    return found


def _add_color(bucket: Dict[str, ColorToken], color: str, context: str) -> None:
    token = bucket.get(color)
    if token is None:
        bucket[color] = ColorToken(name=color, value=color, usage=1, contexts=[context])
        return
    token.usage += 1
    if context not in token.contexts:
        token.contexts.append(context)


def _count(table: Dict[str, TokenUsage], value: str) -> None:
    entry = table.get(value)
    if entry is None:
        table[value] = TokenUsage(value=value, usage=1)
    else:
        entry.usage += 1


__all__ = ["DesignSystemAnalyzer", "MAX_PATTERNS", "component_signature"]
