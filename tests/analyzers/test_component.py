"""Per-file component analysis."""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest

from componentlens.analyzers.category import CategoryDetector
from componentlens.analyzers.component import (
    ComponentAnalyzer,
    component_name,
    detect_framework,
    extract_dependencies,
    extract_description,
    extract_usage_examples,
    fallback_category,
)
from componentlens.analyzers.props import HeuristicPropExtractor, PropExtractor
from componentlens.analyzers.styles import extract_styles
from componentlens.errors import ErrorTracker
from tests._fixtures.project_builder import ProjectBuilder

BUTTON_SOURCE = """
import React from 'react';
import { TouchableOpacity, Text, StyleSheet } from 'react-native';
import { useTheme } from '../theme';

interface ButtonProps {
  title: string;
  onPress: () => void;
}

/**
 * Primary call-to-action button.
 *
 * @example
 * <Button
 *   title="Save"
 *   onPress={save}
 * />
 * @param title label
 */
export const Button = ({ title, onPress }: ButtonProps) => (
  <TouchableOpacity style={styles.button} onPress={onPress}>
    <Text>{title}</Text>
  </TouchableOpacity>
);

const styles = StyleSheet.create({
  button: {
    backgroundColor: '#007AFF',
  },
});
"""


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("src/LoginScreen.tsx", "Login"),
        ("src/HeaderComponent.tsx", "Header"),
        ("src/SettingsPage.jsx", "Settings"),
        ("src/Screen.tsx", "Screen"),
        ("src/Card.tsx", "Card"),
    ],
)
def test_component_name_strips_one_suffix(path: str, expected: str) -> None:
    assert component_name(path) == expected


def test_detect_framework_markers() -> None:
    assert detect_framework("import { View } from 'react-native';") == "react-native"
    assert detect_framework("const s = StyleSheet.create({});") == "react-native"
    assert detect_framework("return <View />;") == "react-native"
    assert detect_framework('<div className="p-4" />') == "tailwind"
    assert detect_framework(".btn { @apply px-4; }") == "tailwind"
    assert detect_framework("export const x = 1;") == "unknown"


def test_tailwind_component_mentioning_text_is_not_react_native() -> None:
    source = 'const Text = "label";\nexport const Card = () => <div className="p-4">{Text}</div>;'

    assert detect_framework(source) == "tailwind"


def test_web_image_tag_with_class_names_is_tailwind() -> None:
    source = (
        "import Image from 'next/image';\n"
        "export const Hero = () => (\n"
        "  <div className=\"bg-white rounded-lg\"><Image src=\"/hero.png\" alt=\"\" /></div>\n"
        ");\n"
    )

    framework = detect_framework(source)

    assert framework == "tailwind"
    assert [style.value for style in extract_styles(source, framework)] == ["bg-white", "rounded-lg"]


def test_primitive_tags_without_class_names_are_react_native() -> None:
    assert detect_framework("export const Row = () => <Pressable><Text>Hi</Text></Pressable>;") == "react-native"
    assert detect_framework("export const Avatar = () => <Image source={uri} />;") == "unknown"


def test_usage_examples_strip_gutter_and_stop_at_next_tag() -> None:
    examples = extract_usage_examples(BUTTON_SOURCE)

    assert examples == ['<Button\n  title="Save"\n  onPress={save}\n/>']


def test_dependencies_are_external_and_deduplicated() -> None:
    source = """
    import React, { useState } from 'react';
    import {
      View,
    } from "react-native";
    import './global.css';
    import 'polyfill';
    export { helper } from 'shared-utils';
    const lodash = require('lodash');
    import Other from 'react';
    // import Ghost from 'ghost';
    """

    assert extract_dependencies(source) == [
        "react",
        "react-native",
        "polyfill",
        "shared-utils",
        "lodash",
    ]


def test_description_is_first_plain_doc_line() -> None:
    assert extract_description(BUTTON_SOURCE) == "Primary call-to-action button."
    assert extract_description("/** @deprecated */\nconst x = 1;") is None
    assert extract_description("/**\n * @deprecated Use PrimaryButton.\n * Legacy button.\n */") is None
    assert extract_description("const x = 1;") is None


def test_fallback_category_ladder() -> None:
    assert fallback_category("/app/src/auth/Form.tsx") == "auth"
    assert fallback_category("/app/src/components/ui/Thing.tsx") == "ui"
    assert fallback_category("/app/src/widgets/DataTable.tsx") == "list"
    assert fallback_category("/app/src/widgets/Thing.tsx") == "general"


def test_analyze_builds_full_record(project: ProjectBuilder) -> None:
    project.write({"src/components/Button.tsx": BUTTON_SOURCE})
    path = project.path("src/components/Button.tsx")
    analyzer = ComponentAnalyzer(
        project.config_manager(),
        category_detector=CategoryDetector(),
        prop_extractor=HeuristicPropExtractor(),
    )

    record = analyzer.analyze(path)

    assert record is not None
    assert record.name == "Button"
    assert record.file_path == str(path)
    assert record.framework == "react-native"
    assert [(prop.name, prop.required) for prop in record.props] == [("title", True), ("onPress", True)]
    assert [(style.name, style.property, style.value) for style in record.styles] == [
        ("button", "backgroundColor", "#007AFF")
    ]
    assert record.dependencies == ["react", "react-native"]
    assert record.description == "Primary call-to-action button."
    assert record.category == "ui"
    assert record.last_modified == datetime.fromtimestamp(os.stat(path).st_mtime, UTC)
    assert record.last_modified.tzinfo is not None


def test_analyze_without_detector_uses_fallback_ladder(project: ProjectBuilder) -> None:
    project.write({"src/auth/LoginForm.tsx": "export const LoginForm = () => null;\n"})

    record = ComponentAnalyzer(project.config_manager()).analyze(project.path("src/auth/LoginForm.tsx"))

    assert record is not None
    assert record.category == "auth"


def test_analyze_missing_file_returns_none_and_records_error(project: ProjectBuilder) -> None:
    errors = ErrorTracker()
    analyzer = ComponentAnalyzer(project.config_manager(), errors=errors)

    assert analyzer.analyze(project.path("src/components/Missing.tsx")) is None
    [report] = errors.reports()
    assert report.operation == "read_component"
    assert report.recoverable is True


class _BrokenExtractor(PropExtractor):
    name = "broken"

    def extract(self, source: str, file_name: str = "component.tsx"):  # type: ignore[override]
        raise RuntimeError("cannot parse")


def test_failing_step_keeps_the_rest_of_the_record(project: ProjectBuilder) -> None:
    project.write({"src/components/Button.tsx": BUTTON_SOURCE})
    errors = ErrorTracker()
    analyzer = ComponentAnalyzer(project.config_manager(), prop_extractor=_BrokenExtractor(), errors=errors)

    record = analyzer.analyze(project.path("src/components/Button.tsx"))

    assert record is not None
    assert record.props == []
    assert record.styles
    assert errors.reports()[0].operation == "extract_props"
