"""Rule-based component category detection."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..models import ComponentRecord

GENERAL_CATEGORY = "general"

_PATH_WEIGHT = 3.0
_FILENAME_WEIGHT = 2.0
_CONTENT_WEIGHT = 1.0
_PROP_WEIGHT = 0.5
_MIN_CONFIDENCE = 0.1
_MAX_SUGGESTIONS = 3


@dataclass
class CategoryRule:
    """Substring signals that vote for a category, scaled by ``priority``."""

    name: str
    path_patterns: List[str] = field(default_factory=list)
    filename_patterns: List[str] = field(default_factory=list)
    content_patterns: List[str] = field(default_factory=list)
    priority: float = 1.0


def default_rules() -> List[CategoryRule]:
    """Return a fresh copy of the built-in rules, highest priority first."""
    return [
        CategoryRule(
            name="auth",
            path_patterns=["/auth/", "/authentication/", "/login/", "/signin/"],
            filename_patterns=["login", "signin", "signup", "auth", "register"],
            content_patterns=["password", "email", "authenticate", "login", "signin"],
            priority=10,
        ),
        CategoryRule(
            name="forms",
            path_patterns=["/forms/", "/form/"],
            filename_patterns=["form", "input", "field", "validation"],
            content_patterns=["onSubmit", "validation", "formik", "react-hook-form"],
            priority=9,
        ),
        CategoryRule(
            name="navigation",
            path_patterns=["/navigation/", "/nav/", "/menu/"],
            filename_patterns=["nav", "menu", "drawer", "tab", "stack"],
            content_patterns=["navigation", "navigate", "router", "route"],
            priority=8,
        ),
        CategoryRule(
            name="ui",
            path_patterns=["/ui/", "/components/ui/", "/common/"],
            filename_patterns=["button", "modal", "dialog", "alert", "toast"],
            content_patterns=["className", "styled", "theme"],
            priority=7,
        ),
        CategoryRule(
            name="layout",
            path_patterns=["/layout/", "/layouts/", "/containers/"],
            filename_patterns=["layout", "container", "wrapper", "header", "footer"],
            content_patterns=["flex", "grid", "container", "wrapper"],
            priority=6,
        ),
        CategoryRule(
            name="screens",
            path_patterns=["/screens/", "/pages/", "/views/"],
            filename_patterns=["screen", "page", "view"],
            content_patterns=["Screen", "Page", "View"],
            priority=5,
        ),
        CategoryRule(
            name="list",
            path_patterns=["/list/", "/table/", "/grid/"],
            filename_patterns=["list", "table", "grid", "item", "row"],
            content_patterns=["FlatList", "SectionList", "map(", "forEach"],
            priority=4,
        ),
        CategoryRule(
            name="detail",
            path_patterns=["/detail/", "/details/", "/profile/"],
            filename_patterns=["detail", "profile", "info", "about"],
            content_patterns=["detail", "profile", "information"],
            priority=3,
        ),
        CategoryRule(
            name="overlay",
            path_patterns=["/modal/", "/dialog/", "/popup/", "/overlay/"],
            filename_patterns=["modal", "dialog", "popup", "overlay", "sheet"],
            content_patterns=["Modal", "Dialog", "Popup", "overlay", "visible"],
            priority=2,
        ),
    ]


class CategoryDetector:
    """Scores components against an owned, priority-ordered list of rules."""

    def __init__(self, rules: Optional[Iterable[CategoryRule]] = None) -> None:
        self._rules: List[CategoryRule] = list(rules) if rules is not None else default_rules()
        self._sort()

    @property
    def rules(self) -> List[CategoryRule]:
        return copy.deepcopy(self._rules)

    def add_rule(self, rule: CategoryRule) -> None:
        self._rules.append(rule)
        self._sort()

    def remove_rule(self, name: str) -> bool:
        for index, rule in enumerate(self._rules):
            if rule.name == name:
                del self._rules[index]
                return True
        return False

    def detect(self, component: ComponentRecord, content: Optional[str] = None) -> str:
        """Return the best-scoring category name, or ``general`` when nothing matches."""
        signals = _Signals.from_component(component, content)
        best_name = GENERAL_CATEGORY
        best_score = 0.0
        for rule in self._rules:
            score = self._score(rule, signals, include_props=True)
            if score > best_score:
                best_name, best_score = rule.name, score
        return best_name

    def suggest(self, component: ComponentRecord, content: Optional[str] = None) -> List[Dict[str, float | str]]:
        """Return up to three ``{category, confidence}`` candidates, most confident first."""
        signals = _Signals.from_component(component, content)
        suggestions: List[Dict[str, float | str]] = []
        for rule in self._rules:
            maximum = (
                len(rule.path_patterns) * _PATH_WEIGHT
                + len(rule.filename_patterns) * _FILENAME_WEIGHT
                + len(rule.content_patterns) * _CONTENT_WEIGHT
            ) * rule.priority
            score = self._score(rule, signals, include_props=False)
            if score <= 0 or maximum <= 0:
                continue
            confidence = min(score / maximum, 1.0)
            if confidence > _MIN_CONFIDENCE:
                suggestions.append({"category": rule.name, "confidence": confidence})
        suggestions.sort(key=lambda item: item["confidence"], reverse=True)
        return suggestions[:_MAX_SUGGESTIONS]

    def category_stats(self, components: Iterable[ComponentRecord]) -> Dict[str, int]:
        stats: Dict[str, int] = {}
        for component in components:
            category = component.category or GENERAL_CATEGORY
            stats[category] = stats.get(category, 0) + 1
        return stats

    @staticmethod
    def _score(rule: CategoryRule, signals: "_Signals", *, include_props: bool) -> float:
        score = 0.0
        for pattern in rule.path_patterns:
            if pattern.lower() in signals.file_path:
                score += rule.priority * _PATH_WEIGHT
        for pattern in rule.filename_patterns:
            needle = pattern.lower()
            if needle in signals.file_name or needle in signals.component_name:
                score += rule.priority * _FILENAME_WEIGHT
        if signals.content is not None:
            for pattern in rule.content_patterns:
                if pattern.lower() in signals.content:
                    score += rule.priority * _CONTENT_WEIGHT
        if include_props:
            for prop_name, prop_type in signals.props:
                for pattern in rule.content_patterns:
                    needle = pattern.lower()
                    if needle in prop_name or needle in prop_type:
                        score += rule.priority * _PROP_WEIGHT
        return score

    def _sort(self) -> None:
        # Stable sort keeps insertion order between equal priorities.
        self._rules.sort(key=lambda rule: rule.priority, reverse=True)


@dataclass
class _Signals:
    file_path: str
    file_name: str
    component_name: str
    content: Optional[str]
    props: List[tuple[str, str]]

    @classmethod
    def from_component(cls, component: ComponentRecord, content: Optional[str]) -> "_Signals":
        file_path = component.file_path.replace(os.sep, "/").lower()
        return cls(
            file_path=file_path,
            file_name=os.path.basename(file_path),
            component_name=component.name.lower(),
            content=content.lower() if content else None,
            props=[(prop.name.lower(), prop.type.lower()) for prop in component.props],
        )


__all__ = ["CategoryDetector", "CategoryRule", "GENERAL_CATEGORY", "default_rules"]
