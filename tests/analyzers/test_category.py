"""Category detection scoring."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import List

from componentlens.analyzers.category import CategoryDetector, CategoryRule, default_rules
from componentlens.models import ComponentRecord, PropRecord


def _component(
    file_path: str,
    name: str | None = None,
    props: List[PropRecord] | None = None,
    category: str = "general",
) -> ComponentRecord:
    stem = file_path.rsplit("/", 1)[-1].split(".", 1)[0]
    return ComponentRecord(
        name=name or stem,
        file_path=file_path,
        framework="react-native",
        props=props or [],
        styles=[],
        usage_examples=[],
        dependencies=[],
        category=category,
        last_modified=datetime(2024, 1, 1, tzinfo=UTC),
    )


def test_auth_path_outweighs_forms_filename() -> None:
    detector = CategoryDetector()

    assert detector.detect(_component("/app/src/auth/LoginForm.tsx")) == "auth"


def test_no_signal_means_general() -> None:
    assert CategoryDetector().detect(_component("/app/src/misc/Thing.tsx")) == "general"


def test_content_patterns_are_case_insensitive() -> None:
    detector = CategoryDetector()
    component = _component("/app/src/misc/Thing.tsx")

    assert detector.detect(component, "const { handleSubmit } = useForm(); <form onSubmit={x}>") == "forms"


def test_prop_signals_contribute_half_weight() -> None:
    detector = CategoryDetector()
    component = _component(
        "/app/src/misc/Thing.tsx",
        props=[PropRecord(name="password", type="string", required=True)],
    )

    assert detector.detect(component) == "auth"


def test_ties_keep_the_higher_priority_rule() -> None:
    rules = [
        CategoryRule(name="first", filename_patterns=["widget"], priority=5),
        CategoryRule(name="second", filename_patterns=["widget"], priority=5),
    ]

    assert CategoryDetector(rules).detect(_component("/app/Widget.tsx")) == "first"


def test_suggest_returns_top_three_by_confidence() -> None:
    detector = CategoryDetector()
    component = _component("/app/src/auth/forms/LoginForm.tsx")

    suggestions = detector.suggest(component)

    # forms has fewer patterns, so the same kind of hits gives it a higher confidence.
    assert [item["category"] for item in suggestions] == ["forms", "auth"]
    confidences = [item["confidence"] for item in suggestions]
    assert confidences == sorted(confidences, reverse=True)
    assert all(0.1 < value <= 1.0 for value in confidences)


def test_suggest_ignores_prop_signals() -> None:
    component = _component(
        "/app/src/misc/Thing.tsx",
        props=[PropRecord(name="password", type="string", required=True)],
    )

    assert CategoryDetector().suggest(component) == []


def test_add_and_remove_rules_are_per_instance() -> None:
    detector = CategoryDetector()
    other = CategoryDetector()
    detector.add_rule(CategoryRule(name="charts", filename_patterns=["chart"], priority=20))

    assert detector.rules[0].name == "charts"
    assert detector.detect(_component("/app/src/misc/LineChart.tsx")) == "charts"
    assert other.detect(_component("/app/src/misc/LineChart.tsx")) == "general"
    assert detector.remove_rule("charts") is True
    assert detector.remove_rule("charts") is False


def test_rules_snapshot_cannot_mutate_detector() -> None:
    detector = CategoryDetector()
    snapshot = detector.rules
    snapshot[0].priority = -1
    snapshot.clear()

    assert [rule.name for rule in detector.rules] == [rule.name for rule in default_rules()]
    assert detector.rules[0].priority == 10


def test_category_stats_counts_components() -> None:
    components = [
        _component("/a/One.tsx", category="ui"),
        _component("/a/Two.tsx", category="ui"),
        _component("/a/Three.tsx", category=""),
    ]

    assert CategoryDetector().category_stats(components) == {"ui": 2, "general": 1}
