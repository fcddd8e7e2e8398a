"""Source analyzers that turn component files into structured metadata."""

from .category import CategoryDetector, CategoryRule, default_rules
from .component import ComponentAnalyzer
from .design_system import DesignSystemAnalyzer
from .props import (
    FallbackPropExtractor,
    HeuristicPropExtractor,
    PropExtractor,
    TreeSitterPropExtractor,
    default_prop_extractor,
)
from .similarity import SimilarityAnalyzer

__all__ = [
    "CategoryDetector",
    "CategoryRule",
    "ComponentAnalyzer",
    "DesignSystemAnalyzer",
    "FallbackPropExtractor",
    "HeuristicPropExtractor",
    "PropExtractor",
    "SimilarityAnalyzer",
    "TreeSitterPropExtractor",
    "default_prop_extractor",
    "default_rules",
]
