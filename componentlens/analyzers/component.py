"""Per-file component analysis: read once, extract everything best-effort."""

from __future__ import annotations

import dataclasses
import os
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple, TypeVar

from ..config import ConfigManager
from ..errors import ErrorTracker
from ..logging import get_logger
from ..models import (
    FRAMEWORK_REACT_NATIVE,
    FRAMEWORK_TAILWIND,
    FRAMEWORK_UNKNOWN,
    ComponentRecord,
)
from .blocks import strip_comments
from .category import GENERAL_CATEGORY, CategoryDetector
from .props import PropExtractor, default_prop_extractor
from .styles import extract_styles

T = TypeVar("T")

_NAME_SUFFIX = re.compile(r"(?:Component|Screen|Page)$")

_REACT_NATIVE_IMPORTS = re.compile(r"['\"]react-native['\"]|\bStyleSheet\.create\b")
# Primitive tags are checked after the class-attribute markers.
_REACT_NATIVE_TAGS = re.compile(
    r"<(?:View|Text|TouchableOpacity|TouchableHighlight|ScrollView|FlatList|SectionList|"
    r"SafeAreaView|Pressable|TextInput|KeyboardAvoidingView)\b"
)
_TAILWIND_MARKERS = re.compile(r"(?<![\w-])(?:className|class)\s*=|@apply\b|@tailwind\b")

_DOC_COMMENT = re.compile(r"/\*\*([\s\S]*?)\*/")
_TAG_LINE = re.compile(r"^@(\w+)\s*(.*)$")

_IMPORT_SOURCES = (
    re.compile(r"\b(?:import|export)\s+(?:type\s+)?[\w$*{}\s,]*?\bfrom\s*['\"]([^'\"\n]+)['\"]"),
    re.compile(r"\bimport\s*['\"]([^'\"\n]+)['\"]"),
    re.compile(r"\bimport\s*\(\s*['\"]([^'\"\n]+)['\"]\s*\)"),
    re.compile(r"\brequire\s*\(\s*['\"]([^'\"\n]+)['\"]\s*\)"),
)

# Used only when no CategoryDetector is injected; first hit wins.
_PATH_CATEGORIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("auth", ("/auth/", "/authentication/")),
    ("forms", ("/forms/", "/form/")),
    ("ui", ("/ui/", "/components/ui/")),
    ("layout", ("/layout/", "/layouts/")),
    ("screens", ("/screens/", "/pages/")),
)
_FILENAME_CATEGORIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("auth", ("login", "signin", "auth")),
    ("forms", ("button", "input", "form")),
    ("list", ("list", "table", "grid")),
    ("detail", ("detail", "info", "profile")),
    ("overlay", ("modal", "dialog", "popup")),
    ("layout", ("header", "footer", "nav")),
)


class ComponentAnalyzer:
    """Turns one component source file into a ComponentRecord."""

    def __init__(
        self,
        config_manager: ConfigManager,
        category_detector: CategoryDetector | None = None,
        prop_extractor: PropExtractor | None = None,
        errors: ErrorTracker | None = None,
    ) -> None:
        self.config_manager = config_manager
        self.category_detector = category_detector
        self.prop_extractor = prop_extractor or default_prop_extractor()
        self.errors = errors
        self.logger = get_logger("analyzer")

    def analyze(self, path: Path | str) -> Optional[ComponentRecord]:
        """Return the component metadata, or None when the file cannot be read."""
        file_path = str(path)
        try:
            content, last_modified = read_source(file_path)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Failed to read component %s: %s", file_path, exc)
            if self.errors is not None:
                self.errors.record(exc, "read_component", file_path=file_path, severity="medium")
            return None

        file_name = os.path.basename(file_path)
        framework = self._step("framework", file_path, FRAMEWORK_UNKNOWN, lambda: detect_framework(content))
        record = ComponentRecord(
            name=component_name(file_path),
            file_path=file_path,
            framework=framework,
            props=self._step("props", file_path, [], lambda: self.prop_extractor.extract(content, file_name)),
            styles=self._step("styles", file_path, [], lambda: extract_styles(content, framework)),
            usage_examples=self._step("examples", file_path, [], lambda: extract_usage_examples(content)),
            dependencies=self._step("dependencies", file_path, [], lambda: extract_dependencies(content)),
            category=GENERAL_CATEGORY,
            last_modified=last_modified,
            description=self._step("description", file_path, None, lambda: extract_description(content)),
        )
        category = self._step("category", file_path, GENERAL_CATEGORY, lambda: self._categorize(record, content))
        return dataclasses.replace(record, category=category)

    def _categorize(self, record: ComponentRecord, content: str) -> str:
        if self.category_detector is not None:
            return self.category_detector.detect(record, content)
        return fallback_category(record.file_path)

    def _step(self, step: str, file_path: str, default: T, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as exc:  # one failing extractor must not drop the whole record
            self.logger.debug("Extraction step %s failed for %s: %s", step, file_path, exc)
            if self.errors is not None:
                self.errors.record(exc, f"extract_{step}", file_path=file_path, severity="low")
            return default


def read_source(path: str) -> Tuple[str, datetime]:
    """Read content and mtime from the same open handle."""
    with open(path, "rb") as handle:
        stat = os.fstat(handle.fileno())
        raw = handle.read()
    return raw.decode("utf-8"), datetime.fromtimestamp(stat.st_mtime, UTC)


def component_name(file_path: str) -> str:
    stem = Path(file_path).stem
    return _NAME_SUFFIX.sub("", stem, count=1) or stem


def detect_framework(content: str) -> str:
    if _REACT_NATIVE_IMPORTS.search(content):
        return FRAMEWORK_REACT_NATIVE
    if _TAILWIND_MARKERS.search(content):
        return FRAMEWORK_TAILWIND
    if _REACT_NATIVE_TAGS.search(content):
        return FRAMEWORK_REACT_NATIVE
    return FRAMEWORK_UNKNOWN


def extract_usage_examples(content: str) -> List[str]:
    """Collect the bodies of ``@example`` tags from doc comments."""
    examples: List[str] = []
    for comment in _DOC_COMMENT.finditer(content):
        current: Optional[List[str]] = None
        for line in _doc_lines(comment.group(1)):
            tag = _TAG_LINE.match(line.strip())
            if tag:
                if current is not None:
                    examples.append(_join_example(current))
                current = [tag.group(2)] if tag.group(1) == "example" else None
                continue
            if current is not None:
                current.append(line)
        if current is not None:
            examples.append(_join_example(current))
    return [example for example in examples if example]


def extract_dependencies(content: str) -> List[str]:
    """Return external module specifiers in first-seen order."""
    code = strip_comments(content)
    found: List[Tuple[int, str]] = []
    for pattern in _IMPORT_SOURCES:
        found.extend((match.start(), match.group(1)) for match in pattern.finditer(code))
    dependencies: List[str] = []
    for _, source in sorted(found):
        if source.startswith((".", "/")) or source in dependencies:
            continue
        dependencies.append(source)
    return dependencies


def extract_description(content: str) -> Optional[str]:
    """Return the first plain line of the first doc comment."""
    comment = _DOC_COMMENT.search(content)
    if comment is None:
        return None
    for line in _doc_lines(comment.group(1)):
        text = line.strip()
        if not text:
            continue
        if text.startswith("@"):
            return None
        return text
    return None


def fallback_category(file_path: str) -> str:
    normalized = file_path.replace(os.sep, "/").lower()
    file_name = os.path.basename(normalized)
    for category, needles in _PATH_CATEGORIES:
        if any(needle in normalized for needle in needles):
            return category
    for category, needles in _FILENAME_CATEGORIES:
        if any(needle in file_name for needle in needles):
            return category
    return GENERAL_CATEGORY


def _doc_lines(body: str) -> List[str]:
    lines = []
    for raw in body.splitlines():
        stripped = raw.lstrip()
        if stripped.startswith("*"):
            stripped = stripped[1:]
            if stripped.startswith(" "):
                stripped = stripped[1:]
        lines.append(stripped.rstrip())
    return lines


def _join_example(lines: List[str]) -> str:
    return "\n".join(lines).strip()


__all__ = [
    "ComponentAnalyzer",
    "component_name",
    "detect_framework",
    "extract_dependencies",
    "extract_description",
    "extract_usage_examples",
    "fallback_category",
    "read_source",
]
