"""Structural validation of scan configuration data."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping

from .config import ConfigError


@dataclass
class ValidationResult:
    """Errors block a pipeline run; warnings are reported and tolerated."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ConfigError(
                "Invalid configuration: " + "; ".join(self.errors), errors=self.errors
            )


class ConfigValidator:
    """Checks file-schema configuration data before a scan starts."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else Path.cwd()

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = ValidationResult()
        self._validate_scan_paths(data.get("scanPaths"), result)
        self._validate_string_list(data.get("excludePatterns"), "excludePatterns", result, allow_empty=True)
        self._validate_frameworks(data.get("frameworks"), result)
        self._validate_string_list(data.get("componentPatterns"), "componentPatterns", result)
        self._validate_cache_settings(data, result)
        return result

    def _validate_scan_paths(self, scan_paths: Any, result: ValidationResult) -> None:
        if not isinstance(scan_paths, list) or not scan_paths:
            result.errors.append("scanPaths must be a non-empty list")
            return

        for scan_path in scan_paths:
            if not isinstance(scan_path, str):
                result.errors.append(f"scanPath must be a string: {scan_path!r}")
                continue
            resolved = Path(scan_path).expanduser()
            if not resolved.is_absolute():
                resolved = self._root / resolved
            if not resolved.exists():
                result.warnings.append(f"Scan path does not exist: {scan_path}")
            elif not resolved.is_dir():
                result.errors.append(f"Scan path is not a directory: {scan_path}")

    def _validate_string_list(
        self,
        value: Any,
        label: str,
        result: ValidationResult,
        *,
        allow_empty: bool = False,
    ) -> None:
        if not isinstance(value, list) or (not value and not allow_empty):
            qualifier = "a list" if allow_empty else "a non-empty list"
            result.errors.append(f"{label} must be {qualifier}")
            return
        for item in value:
            if not isinstance(item, str):
                result.errors.append(f"{label} entries must be strings: {item!r}")

    def _validate_frameworks(self, frameworks: Any, result: ValidationResult) -> None:
        if not isinstance(frameworks, list) or not frameworks:
            result.errors.append("frameworks must be a non-empty list")
            return

        if not any(isinstance(fw, dict) and fw.get("enabled", True) is True for fw in frameworks):
            result.warnings.append("No frameworks are enabled")

        for framework in frameworks:
            if not isinstance(framework, dict):
                result.errors.append(f"Framework entries must be mappings: {framework!r}")
                continue
            name = framework.get("name")
            if not isinstance(name, str) or not name:
                result.errors.append("Framework name is required and must be a string")
                name = "<unnamed>"
            if not isinstance(framework.get("enabled", True), bool):
                result.errors.append(f"Framework enabled must be a boolean: {name}")
            extensions = framework.get("fileExtensions")
            if not isinstance(extensions, list) or not extensions:
                result.errors.append(f"Framework fileExtensions must be a non-empty list: {name}")
            for key in ("componentPatterns", "stylePatterns"):
                if key in framework and not isinstance(framework[key], list):
                    result.errors.append(f"Framework {key} must be a list: {name}")

    def _validate_cache_settings(self, data: Mapping[str, Any], result: ValidationResult) -> None:
        for key in ("cacheEnabled", "autoRefresh"):
            if key in data and not isinstance(data[key], bool):
                result.errors.append(f"{key} must be a boolean")

        interval = data.get("refreshInterval")
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval < 0:
            result.errors.append("refreshInterval must be a non-negative number")
        elif interval < 60 and data.get("autoRefresh") is True:
            result.warnings.append("refreshInterval less than 60 seconds may impact performance")

        max_size = data.get("cacheMaxSize")
        if max_size is not None and (
            isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0
        ):
            result.errors.append("cacheMaxSize must be a positive integer")

        ttl = data.get("designSystemTtl")
        if ttl is not None and (isinstance(ttl, bool) or not isinstance(ttl, (int, float)) or ttl < 0):
            result.errors.append("designSystemTtl must be a non-negative number")


__all__ = ["ConfigValidator", "ValidationResult"]
