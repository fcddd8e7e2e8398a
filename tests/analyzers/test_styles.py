"""Style extraction for StyleSheet objects and class attributes."""

from __future__ import annotations

from componentlens.analyzers.styles import (
    extract_class_styles,
    extract_styles,
    extract_stylesheet_styles,
    remove_interpolations,
)
from componentlens.models import StyleRecord

STYLESHEET_SOURCE = """
const styles = StyleSheet.create({
  button: {
    borderRadius: 8,
    alignItems: 'center',
    shadowOffset: { width: 0, height: 2 },
  },
  // secondary variant
  secondary: {
    backgroundColor: "#F2F2F7",
    borderColor: '#C7C7CC',
  },
});
"""


def test_stylesheet_blocks_become_named_records() -> None:
    styles = extract_stylesheet_styles(STYLESHEET_SOURCE)

    assert styles[0] == StyleRecord(property="borderRadius", value="8", context="style", name="button")
    assert [(style.name, style.property, style.value) for style in styles] == [
        ("button", "borderRadius", "8"),
        ("button", "alignItems", "center"),
        ("button", "shadowOffset", "{ width: 0, height: 2 }"),
        ("secondary", "backgroundColor", "#F2F2F7"),
        ("secondary", "borderColor", "#C7C7CC"),
    ]
    assert all(style.frequency == 1 for style in styles)


def test_multiple_stylesheet_calls_are_collected() -> None:
    source = STYLESHEET_SOURCE + "\nconst more = StyleSheet.create({ box: { flex: 1 } });\n"

    styles = extract_stylesheet_styles(source)

    assert styles[-1] == StyleRecord(property="flex", value="1", context="style", name="box")


def test_class_attributes_split_into_tokens() -> None:
    source = """
    <div className="bg-white rounded-lg">
      <p class='text-gray-600'>hi</p>
    </div>
    """
    styles = extract_class_styles(source)

    assert [style.value for style in styles] == ["bg-white", "rounded-lg", "text-gray-600"]
    assert all(style.property == "className" and style.context == "className" for style in styles)


def test_class_expressions_and_template_literals() -> None:
    source = """
    <div className={"p-4 flex"} />
    <div className={`m-2 ${active ? 'ring' : ''} shadow`} />
    """
    values = [style.value for style in extract_class_styles(source)]

    assert values == ["p-4", "flex", "m-2", "shadow"]


def test_remove_interpolations_handles_nested_braces() -> None:
    assert remove_interpolations("a ${fn({ x: 1 })} b").split() == ["a", "b"]


def test_extract_styles_dispatches_on_framework() -> None:
    assert extract_styles(STYLESHEET_SOURCE, "react-native")
    assert extract_styles('<div className="p-2" />', "tailwind")[0].value == "p-2"
    assert extract_styles(STYLESHEET_SOURCE, "unknown") == []
