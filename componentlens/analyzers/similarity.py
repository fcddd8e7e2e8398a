"""Pairwise component similarity scoring."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..models import ComponentMatch, ComponentRecord, PropRecord, StyleRecord

NAME_WEIGHT = 0.3
CATEGORY_WEIGHT = 0.2
FRAMEWORK_WEIGHT = 0.1
PROPS_WEIGHT = 0.25
STYLES_WEIGHT = 0.15

_NAME_NOTE_THRESHOLD = 0.5


def levenshtein(left: str, right: str) -> int:
    """Classic edit distance with a rolling row."""
    if len(left) < len(right):
        left, right = right, left
    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i]
        for j, right_char in enumerate(right, start=1):
            cost = 0 if left_char == right_char else 1
            current.append(min(current[j - 1] + 1, previous[j] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def name_similarity(left: str, right: str) -> float:
    longest = max(len(left), len(right))
    if longest == 0:
        return 1.0
    return (longest - levenshtein(left, right)) / longest


def props_similarity(left: Sequence[PropRecord], right: Sequence[PropRecord]) -> float:
    if not left and not right:
        return 1.0
    if not left or not right:
        return 0.0
    right_pairs = {(prop.name, prop.type) for prop in right}
    common = sum(1 for prop in left if (prop.name, prop.type) in right_pairs)
    union = {prop.name for prop in left} | {prop.name for prop in right}
    return min(1.0, common / len(union))


def styles_similarity(left: Sequence[StyleRecord], right: Sequence[StyleRecord]) -> float:
    if not left and not right:
        return 1.0
    if not left or not right:
        return 0.0
    left_pairs = {(style.property, style.value) for style in left}
    right_pairs = {(style.property, style.value) for style in right}
    return len(left_pairs & right_pairs) / len(left_pairs | right_pairs)


class SimilarityAnalyzer:
    """Ranks candidates by a weighted blend of name, category, framework, props and styles."""

    def find_similar(
        self,
        target: ComponentRecord,
        candidates: Iterable[ComponentRecord],
        threshold: float = 0.3,
        max_results: Optional[int] = None,
        *,
        include_self: bool = False,
    ) -> List[ComponentMatch]:
        matches: List[ComponentMatch] = []
        for candidate in candidates:
            if not include_self and candidate.file_path == target.file_path:
                continue
            score = self.similarity(target, candidate)
            if score < threshold:
                continue
            matches.append(
                ComponentMatch(
                    component=candidate,
                    similarity=score,
                    match_reasons=self.match_reasons(target, candidate),
                    differences=self.differences(target, candidate),
                )
            )
        matches.sort(key=lambda match: match.similarity, reverse=True)
        if max_results:
            return matches[:max_results]
        return matches

    def similarity(self, left: ComponentRecord, right: ComponentRecord) -> float:
        if left.name == right.name and left.file_path == right.file_path:
            return 1.0

        achieved = 0.0
        achieved += name_similarity(left.name, right.name) * NAME_WEIGHT
        if left.category == right.category:
            achieved += CATEGORY_WEIGHT
        if left.framework == right.framework:
            achieved += FRAMEWORK_WEIGHT
        achieved += props_similarity(left.props, right.props) * PROPS_WEIGHT
        achieved += styles_similarity(left.styles, right.styles) * STYLES_WEIGHT

        maximum = NAME_WEIGHT + CATEGORY_WEIGHT + FRAMEWORK_WEIGHT + PROPS_WEIGHT + STYLES_WEIGHT
        return achieved / maximum

    def match_reasons(self, left: ComponentRecord, right: ComponentRecord) -> List[str]:
        reasons: List[str] = []
        if left.category == right.category:
            reasons.append(f"Same category: {left.category}")
        if left.framework == right.framework:
            reasons.append(f"Same framework: {left.framework}")
        right_names = {prop.name for prop in right.props}
        common = [prop.name for prop in left.props if prop.name in right_names]
        if common:
            reasons.append(f"Common props: {', '.join(common)}")
        if name_similarity(left.name, right.name) > _NAME_NOTE_THRESHOLD:
            reasons.append(f"Similar names: {left.name} / {right.name}")
        return reasons

    def differences(self, left: ComponentRecord, right: ComponentRecord) -> List[str]:
        differences: List[str] = []
        if left.category != right.category:
            differences.append(f"Different categories: {left.category} vs {right.category}")
        if left.framework != right.framework:
            differences.append(f"Different frameworks: {left.framework} vs {right.framework}")
        left_names = {prop.name for prop in left.props}
        right_names = {prop.name for prop in right.props}
        only_left = [prop.name for prop in left.props if prop.name not in right_names]
        only_right = [prop.name for prop in right.props if prop.name not in left_names]
        if only_left:
            differences.append(f"Unique props in {left.name}: {', '.join(only_left)}")
        if only_right:
            differences.append(f"Unique props in {right.name}: {', '.join(only_right)}")
        return differences


__all__ = [
    "SimilarityAnalyzer",
    "levenshtein",
    "name_similarity",
    "props_similarity",
    "styles_similarity",
]
