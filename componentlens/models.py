"""Core data models shared across componentlens components."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

FRAMEWORK_REACT_NATIVE = "react-native"
FRAMEWORK_TAILWIND = "tailwind"
FRAMEWORK_UNKNOWN = "unknown"


@dataclass(frozen=True)
class PropRecord:
    """A single prop declared on a component's props interface or type."""

    name: str
    type: str
    required: bool
    description: Optional[str] = None


@dataclass(frozen=True)
class StyleRecord:
    """A style declaration found in a component source file."""

    property: str
    value: str
    frequency: int = 1
    context: str = "style"
    name: Optional[str] = None


@dataclass(frozen=True)
class ComponentRecord:
    """Structured metadata extracted from one component source file."""

    name: str
    file_path: str
    framework: str
    props: List[PropRecord]
    styles: List[StyleRecord]
    usage_examples: List[str]
    dependencies: List[str]
    category: str
    last_modified: datetime
    description: Optional[str] = None


@dataclass
class ComponentMatch:
    """Similarity result between a target component and a candidate."""

    component: ComponentRecord
    similarity: float
    match_reasons: List[str] = field(default_factory=list)
    differences: List[str] = field(default_factory=list)


@dataclass
class ComponentSummary:
    """Condensed view of a component used by list queries."""

    name: str
    file_path: str
    framework: str
    category: str
    props_count: int
    last_modified: datetime

    @classmethod
    def from_record(cls, record: ComponentRecord) -> "ComponentSummary":
        return cls(
            name=record.name,
            file_path=record.file_path,
            framework=record.framework,
            category=record.category,
            props_count=len(record.props),
            last_modified=record.last_modified,
        )


@dataclass
class CategoryInfo:
    """Per-category counts with a few example component names."""

    name: str
    component_count: int
    description: str
    examples: List[str] = field(default_factory=list)


@dataclass
class ColorToken:
    name: str
    value: str
    usage: int = 1
    contexts: List[str] = field(default_factory=list)


@dataclass
class TokenUsage:
    value: str
    usage: int = 1


@dataclass
class SemanticColors:
    success: List[ColorToken] = field(default_factory=list)
    warning: List[ColorToken] = field(default_factory=list)
    error: List[ColorToken] = field(default_factory=list)
    info: List[ColorToken] = field(default_factory=list)


@dataclass
class ColorPalette:
    """Colors bucketed by the semantics of the property that used them."""

    background: List[ColorToken] = field(default_factory=list)
    text: List[ColorToken] = field(default_factory=list)
    border: List[ColorToken] = field(default_factory=list)
    accent: List[ColorToken] = field(default_factory=list)
    semantic: SemanticColors = field(default_factory=SemanticColors)


@dataclass
class TypographySystem:
    font_sizes: Dict[str, TokenUsage] = field(default_factory=dict)
    font_weights: Dict[str, TokenUsage] = field(default_factory=dict)
    line_heights: Dict[str, TokenUsage] = field(default_factory=dict)
    font_families: Dict[str, TokenUsage] = field(default_factory=dict)


@dataclass
class SpacingSystem:
    margins: Dict[str, TokenUsage] = field(default_factory=dict)
    paddings: Dict[str, TokenUsage] = field(default_factory=dict)
    gaps: Dict[str, TokenUsage] = field(default_factory=dict)


@dataclass
class StylePattern:
    """A recurring component shape or style declaration."""

    name: str
    pattern: str
    usage: int
    examples: List[str] = field(default_factory=list)


@dataclass
class DesignSystemSnapshot:
    """Aggregate design tokens derived from a set of analyzed components."""

    colors: ColorPalette
    typography: TypographySystem
    spacing: SpacingSystem
    common_patterns: List[StylePattern]
    component_count: int
    extracted_at: datetime


def to_jsonable(value: Any) -> Any:
    """Convert models (recursively) into JSON-serialisable structures."""
    if is_dataclass(value) and not isinstance(value, type):
        return {item.name: to_jsonable(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, datetime):
        return value.isoformat().replace("+00:00", "Z")
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(item) for item in value]
    return value
