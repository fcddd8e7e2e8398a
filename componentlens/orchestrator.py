"""Pipeline orchestration: scan, cache, analyze and answer component queries."""

from __future__ import annotations

import os
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Set

from .analyzers.category import CategoryDetector
from .analyzers.component import ComponentAnalyzer, read_source
from .analyzers.design_system import DesignSystemAnalyzer
from .analyzers.similarity import SimilarityAnalyzer
from .config import ConfigManager
from .errors import ComponentNotFoundError, ErrorTracker
from .logging import get_logger
from .models import (
    CategoryInfo,
    ComponentMatch,
    ComponentRecord,
    ComponentSummary,
    DesignSystemSnapshot,
)
from .scanner import ComponentScanner
from .stores import ComponentCache, TTLCache

_DESCRIPTION_TEXT_WEIGHT = 0.7
_DESCRIPTION_PROPS_WEIGHT = 0.3
_MAX_CATEGORY_EXAMPLES = 3


class Orchestrator:
    """Coordinates discovery and analysis and serves queries over the results.

    Every collaborator can be injected so independent instances (one per
    analyzed project, for example) never share state.
    """

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        *,
        root: Path | str | None = None,
        config_path: Path | str | None = None,
        scanner: ComponentScanner | None = None,
        analyzer: ComponentAnalyzer | None = None,
        cache: ComponentCache | None = None,
        category_detector: CategoryDetector | None = None,
        similarity: SimilarityAnalyzer | None = None,
        design_system: DesignSystemAnalyzer | None = None,
        design_cache: TTLCache[DesignSystemSnapshot] | None = None,
        errors: ErrorTracker | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.logger = get_logger("orchestrator")
        self.config_manager = config_manager or ConfigManager(config_path, root=root)
        self._check_config()

        config = self.config_manager.config
        self.errors = errors or ErrorTracker()
        self.category_detector = category_detector or CategoryDetector()
        self.scanner = scanner or ComponentScanner(self.config_manager, errors=self.errors)
        self.analyzer = analyzer or ComponentAnalyzer(
            self.config_manager,
            category_detector=self.category_detector,
            errors=self.errors,
        )
        self.cache = cache or ComponentCache(self.config_manager)
        self.similarity = similarity or SimilarityAnalyzer()
        self.design_system = design_system or DesignSystemAnalyzer()
        self.design_cache: TTLCache[DesignSystemSnapshot] = design_cache or TTLCache(
            default_ttl=config.design_system_ttl
        )
        self._clock = clock or time.monotonic
        self._components: Dict[str, ComponentRecord] = {}
        self._last_refresh: Optional[float] = None

    # ------------------------------------------------------------------
    # Pipeline

    def refresh(self) -> List[ComponentRecord]:
        """Rescan the project, reusing cached records whose files are unchanged."""
        paths = self.scanner.scan()
        self.logger.info("Refreshing %d component files", len(paths))

        records: Dict[str, ComponentRecord] = {}
        seen: Set[str] = set()
        reused = 0
        for path in paths:
            seen.add(path)
            try:
                record, from_cache = self._load(path)
            except Exception as exc:  # per-file failures never abort the pass
                self.logger.warning("Failed to analyze %s: %s", path, exc)
                self.errors.record(exc, "analyze_component", file_path=path, severity="medium")
                continue
            if record is None:
                continue
            reused += int(from_cache)
            records[record.file_path] = record

        for stale in [path for path in self.cache.paths() if path not in seen]:
            self.cache.invalidate(stale)

        self._components = records
        self._last_refresh = self._clock()
        self.design_cache.clear()
        self.logger.debug(
            "Refresh complete: %d components (%d from cache)", len(records), reused
        )
        return list(records.values())

    def get_all_components(self) -> List[ComponentRecord]:
        config = self.config_manager.config
        if self._last_refresh is None:
            return self.refresh()
        if config.auto_refresh and self._clock() - self._last_refresh >= config.refresh_interval:
            return self.refresh()
        return list(self._components.values())

    # ------------------------------------------------------------------
    # Queries

    def list_components(
        self, category: str | None = None, framework: str | None = None
    ) -> List[ComponentSummary]:
        summaries: List[ComponentSummary] = []
        for record in self.get_all_components():
            if category and record.category != category:
                continue
            if framework and record.framework != framework:
                continue
            summaries.append(ComponentSummary.from_record(record))
        return summaries

    def get_component_details(self, name: str) -> ComponentRecord:
        if not name:
            raise ValueError("Component name is required")
        for record in self.get_all_components():
            if record.name == name:
                return record
        raise ComponentNotFoundError(f"Component '{name}' not found")

    def find_similar(
        self, name: str, threshold: float = 0.3, max_results: int | None = None
    ) -> List[ComponentMatch]:
        target = self.get_component_details(name)
        return self.similarity.find_similar(
            target, self.get_all_components(), threshold=threshold, max_results=max_results
        )

    def find_by_description(
        self, description: str, props: Sequence[str] | None = None
    ) -> List[ComponentMatch]:
        """Rank components whose name or description mentions ``description``."""
        if not description:
            raise ValueError("Description is required")
        needle = description.lower()
        words = [word for word in needle.split() if word]
        wanted = [prop for prop in (props or []) if prop]

        matches: List[ComponentMatch] = []
        for record in self.get_all_components():
            reasons: List[str] = []
            differences: List[str] = []
            name_text = record.name.lower()
            description_text = (record.description or "").lower()

            if needle in name_text or needle in description_text:
                text_score = 1.0
            else:
                haystack = f"{name_text} {description_text}"
                hits = sum(1 for word in words if word in haystack)
                text_score = hits / len(words) if words else 0.0
            if needle in name_text:
                reasons.append("Name match")
            if description_text and needle in description_text:
                reasons.append("Description match")

            prop_names = {prop.name for prop in record.props}
            matched_props = [prop for prop in wanted if prop in prop_names]
            missing_props = [prop for prop in wanted if prop not in prop_names]
            if matched_props:
                reasons.append(f"Matching props: {', '.join(matched_props)}")
            if missing_props:
                differences.append(f"Missing props: {', '.join(missing_props)}")

            if wanted:
                prop_score = len(matched_props) / len(wanted)
                score = text_score * _DESCRIPTION_TEXT_WEIGHT + prop_score * _DESCRIPTION_PROPS_WEIGHT
            else:
                score = text_score
            if text_score <= 0:
                continue
            if text_score < 1.0:
                reasons.append(f"Partial text match ({text_score:.0%})")
            matches.append(
                ComponentMatch(
                    component=record,
                    similarity=score,
                    match_reasons=reasons,
                    differences=differences,
                )
            )
        matches.sort(key=lambda match: match.similarity, reverse=True)
        return matches

    def get_design_system(self, category: str | None = None) -> DesignSystemSnapshot:
        components = self.get_all_components()
        key = f"design-system:{category or '*'}"
        cached = self.design_cache.get(key)
        if cached is not None:
            return cached
        if category:
            components = [record for record in components if record.category == category]
        snapshot = self.design_system.aggregate(components)
        self.design_cache.set(key, snapshot)
        return snapshot

    def get_categories(self) -> List[CategoryInfo]:
        grouped: Dict[str, List[str]] = {}
        for record in self.get_all_components():
            grouped.setdefault(record.category, []).append(record.name)
        return [
            CategoryInfo(
                name=name,
                component_count=len(names),
                description=f"Components in the {name} category",
                examples=names[:_MAX_CATEGORY_EXAMPLES],
            )
            for name, names in grouped.items()
        ]

    def suggest_categories(self, name: str) -> List[Dict[str, Any]]:
        record = self.get_component_details(name)
        try:
            content, _ = read_source(record.file_path)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.debug("Suggesting categories without content for %s: %s", name, exc)
            content = None
        return self.category_detector.suggest(record, content)

    def cache_stats(self) -> Dict[str, Any]:
        return {
            "components": self.cache.stats(),
            "design_system": self.design_cache.stats(),
        }

    def error_report(self) -> Dict[str, Any]:
        return {
            "summary": self.errors.summary(),
            "errors": [
                {
                    "operation": report.operation,
                    "severity": report.severity,
                    "message": report.message,
                    "file_path": report.file_path,
                    "recoverable": report.recoverable,
                    "timestamp": report.timestamp,
                }
                for report in self.errors.reports()
            ],
        }

    # ------------------------------------------------------------------
    # Internal helpers

    def _check_config(self) -> None:
        result = self.config_manager.validate()
        for warning in result.warnings:
            self.logger.warning("Config warning: %s", warning)
        result.raise_for_errors()

    def _load(self, path: str) -> tuple[Optional[ComponentRecord], bool]:
        try:
            modified = datetime.fromtimestamp(os.stat(path).st_mtime, UTC)
        except OSError as exc:
            self.logger.warning("Failed to stat %s: %s", path, exc)
            self.errors.record(exc, "stat_component", file_path=path, severity="low")
            return None, False

        if self.cache.is_fresh(path, modified):
            cached = self.cache.get(path)
            if cached is not None:
                return cached, True

        record = self.analyzer.analyze(path)
        if record is not None:
            self.cache.put(record)
        return record, False


__all__ = ["Orchestrator"]
