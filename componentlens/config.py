"""Configuration loading and path predicates for componentlens."""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .logging import get_logger
from .matching import PathMatcher

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .validation import ValidationResult

DEFAULT_CONFIG_FILENAME = "componentlens.config.json"

_LOGGER = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be parsed or is fundamentally invalid."""

    def __init__(self, message: str, errors: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.errors = list(errors)


@dataclass
class FrameworkConfig:
    """Per-framework discovery rules."""

    name: str
    enabled: bool = True
    file_extensions: List[str] = field(default_factory=list)
    component_patterns: List[str] = field(default_factory=list)
    style_patterns: List[str] = field(default_factory=list)


@dataclass
class ScanConfig:
    """Represents the scan settings defined in componentlens.config.json."""

    scan_paths: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)
    frameworks: List[FrameworkConfig] = field(default_factory=list)
    component_patterns: List[str] = field(default_factory=list)
    cache_enabled: bool = True
    auto_refresh: bool = True
    refresh_interval: float = 300
    cache_max_size: int = 1000
    design_system_ttl: float = 300


# Mapping between the camelCase file schema and ScanConfig attributes.
_FIELD_KEYS: Dict[str, str] = {
    "scanPaths": "scan_paths",
    "excludePatterns": "exclude_patterns",
    "componentPatterns": "component_patterns",
    "cacheEnabled": "cache_enabled",
    "autoRefresh": "auto_refresh",
    "refreshInterval": "refresh_interval",
    "cacheMaxSize": "cache_max_size",
    "designSystemTtl": "design_system_ttl",
}

_FRAMEWORK_KEYS: Dict[str, str] = {
    "name": "name",
    "enabled": "enabled",
    "fileExtensions": "file_extensions",
    "componentPatterns": "component_patterns",
    "stylePatterns": "style_patterns",
}


def default_config_data() -> Dict[str, Any]:
    """Return the default configuration in file-schema form."""
    return {
        "scanPaths": ["./src", "./components", "./screens"],
        "excludePatterns": [
            "node_modules",
            "*.test.*",
            "*.spec.*",
            "__tests__",
            "dist",
            "build",
            ".git",
        ],
        "frameworks": [
            {
                "name": "react-native",
                "enabled": True,
                "fileExtensions": [".tsx", ".jsx", ".ts", ".js"],
                "componentPatterns": [
                    "*Screen.tsx",
                    "*Component.tsx",
                    "*Screen.jsx",
                    "*Component.jsx",
                ],
                "stylePatterns": ["StyleSheet.create", "styled-components", "style="],
            },
            {
                "name": "tailwind",
                "enabled": True,
                "fileExtensions": [".tsx", ".jsx", ".html", ".vue"],
                "componentPatterns": ["className=", "class="],
                "stylePatterns": ["@apply", "tailwind.config.*", "className="],
            },
        ],
        "componentPatterns": [
            "**/*Component.{tsx,jsx,ts,js}",
            "**/*Screen.{tsx,jsx,ts,js}",
            "**/components/*.{tsx,jsx,ts,js}",
            "**/screens/*.{tsx,jsx,ts,js}",
        ],
        "cacheEnabled": True,
        "autoRefresh": True,
        "refreshInterval": 300,
        "cacheMaxSize": 1000,
        "designSystemTtl": 300,
    }


def merge_config_data(
    base: Mapping[str, Any], overrides: Mapping[str, Any]
) -> Dict[str, Any]:
    """Shallow-merge ``overrides`` over ``base``; frameworks merge by name."""
    merged = copy.deepcopy(dict(base))
    for key, value in overrides.items():
        if key == "frameworks":
            continue
        merged[key] = copy.deepcopy(value)

    user_frameworks = overrides.get("frameworks")
    if isinstance(user_frameworks, list):
        base_frameworks = [
            dict(entry) for entry in _as_list(base.get("frameworks")) if isinstance(entry, dict)
        ]
        by_name = {entry.get("name"): index for index, entry in enumerate(base_frameworks)}
        for entry in user_frameworks:
            if not isinstance(entry, dict):
                continue
            index = by_name.get(entry.get("name"))
            if index is None:
                base_frameworks.append(copy.deepcopy(entry))
                by_name[entry.get("name")] = len(base_frameworks) - 1
            else:
                base_frameworks[index] = _deep_merge(base_frameworks[index], entry)
        merged["frameworks"] = base_frameworks
    return merged


def parse_config_data(data: Mapping[str, Any]) -> ScanConfig:
    """Coerce file-schema data into a ScanConfig, falling back to defaults per field."""
    defaults = default_config_data()

    def _list(key: str) -> List[str]:
        value = data.get(key)
        if isinstance(value, (list, tuple)):
            return _as_str_list(value)
        return _as_str_list(defaults[key])

    frameworks: List[FrameworkConfig] = []
    for entry in _as_list(data.get("frameworks", defaults["frameworks"])):
        framework = _parse_framework(entry)
        if framework is not None:
            frameworks.append(framework)

    cache_enabled = _as_bool(data.get("cacheEnabled"))
    auto_refresh = _as_bool(data.get("autoRefresh"))
    refresh_interval = _as_float(data.get("refreshInterval"))
    cache_max_size = _as_int(data.get("cacheMaxSize"))
    design_system_ttl = _as_float(data.get("designSystemTtl"))

    return ScanConfig(
        scan_paths=_list("scanPaths"),
        exclude_patterns=_list("excludePatterns"),
        frameworks=frameworks,
        component_patterns=_list("componentPatterns"),
        cache_enabled=defaults["cacheEnabled"] if cache_enabled is None else cache_enabled,
        auto_refresh=defaults["autoRefresh"] if auto_refresh is None else auto_refresh,
        refresh_interval=(
            defaults["refreshInterval"] if refresh_interval is None else refresh_interval
        ),
        cache_max_size=defaults["cacheMaxSize"] if cache_max_size is None else cache_max_size,
        design_system_ttl=(
            defaults["designSystemTtl"] if design_system_ttl is None else design_system_ttl
        ),
    )


def config_to_data(config: ScanConfig) -> Dict[str, Any]:
    """Serialise a ScanConfig back into the camelCase file schema."""
    data: Dict[str, Any] = {
        key: copy.deepcopy(getattr(config, attr)) for key, attr in _FIELD_KEYS.items()
    }
    data["frameworks"] = [
        {key: copy.deepcopy(getattr(framework, attr)) for key, attr in _FRAMEWORK_KEYS.items()}
        for framework in config.frameworks
    ]
    return data


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a JSON or YAML config file; a missing file yields an empty mapping."""
    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}

    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            loaded = yaml.safe_load(text)
        else:
            loaded = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def load_config(config_path: Path) -> ScanConfig:
    """Load configuration from disk merged over the defaults."""
    config_file = _resolve_config_path(config_path)
    user_data = read_config_file(config_file)
    return parse_config_data(merge_config_data(default_config_data(), user_data))


class ConfigManager:
    """Owns the scan configuration and the path predicates derived from it."""

    def __init__(
        self,
        config_path: Path | str | None = None,
        *,
        root: Path | str | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self.root = Path(root).expanduser().resolve() if root is not None else Path.cwd().resolve()
        if config_path is None:
            self.config_path = self.root / DEFAULT_CONFIG_FILENAME
        else:
            self.config_path = _resolve_config_path(Path(config_path))
        data = merge_config_data(default_config_data(), read_config_file(self.config_path))
        if overrides:
            data = merge_config_data(data, overrides)
        self._data = data
        self._apply()

    @property
    def config(self) -> ScanConfig:
        return self._config

    @property
    def raw_data(self) -> Dict[str, Any]:
        """Return the merged file-schema data before type coercion."""
        return copy.deepcopy(self._data)

    def get_config(self) -> ScanConfig:
        """Return a copy of the effective configuration."""
        return copy.deepcopy(self._config)

    def validate(self) -> "ValidationResult":
        """Validate the merged configuration against the schema and the filesystem."""
        from .validation import ConfigValidator

        return ConfigValidator(root=self.root).validate(self._data)

    def update_config(self, updates: Mapping[str, Any]) -> None:
        """Merge file-schema ``updates`` over the current configuration."""
        self._data = merge_config_data(self._data, updates)
        self._apply()

    def save_config(self) -> None:
        """Persist the effective configuration as JSON."""
        payload = config_to_data(self._config)
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        _LOGGER.info("Saved configuration to %s", self.config_path)

    def get_framework_config(self, name: str) -> Optional[FrameworkConfig]:
        """Return the framework config when it exists and is enabled."""
        for framework in self._config.frameworks:
            if framework.name == name and framework.enabled:
                return framework
        return None

    def enabled_frameworks(self) -> List[FrameworkConfig]:
        return [framework for framework in self._config.frameworks if framework.enabled]

    def scan_roots(self) -> List[Path]:
        """Return scan paths resolved against the working root."""
        roots: List[Path] = []
        for scan_path in self._config.scan_paths:
            candidate = Path(scan_path).expanduser()
            if not candidate.is_absolute():
                candidate = self.root / candidate
            roots.append(Path(os.path.normpath(candidate)))
        return roots

    def relative_path(self, path: Path | str) -> str:
        """Return ``path`` relative to the working root using forward slashes."""
        return os.path.relpath(self._absolute(path), self.root).replace(os.sep, "/")

    def is_path_included(self, path: Path | str) -> bool:
        """Return True when the path is under a scan root and not excluded."""
        absolute = self._absolute(path)
        if not any(_is_within(absolute, root) for root in self.scan_roots()):
            return False
        return not self._matcher.is_excluded(self.relative_path(absolute), absolute.name)

    def is_component_file(self, path: Path | str) -> bool:
        """Return True when the path looks like a component source for an enabled framework."""
        absolute = self._absolute(path)
        if not self.is_path_included(absolute):
            return False

        extension = absolute.suffix
        if not any(extension in framework.file_extensions for framework in self.enabled_frameworks()):
            return False

        return self._matcher.matches_component(self.relative_path(absolute), absolute.name)

    # ------------------------------------------------------------------
    # Internal helpers

    def _apply(self) -> None:
        self._config = parse_config_data(self._data)
        self._matcher = PathMatcher(
            self._config.component_patterns, self._config.exclude_patterns
        )

    def _absolute(self, path: Path | str) -> Path:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.root / candidate
        return Path(os.path.normpath(candidate))


def _is_within(path: Path, root: Path) -> bool:
    return path == root or path.is_relative_to(root)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / DEFAULT_CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _parse_framework(entry: Any) -> Optional[FrameworkConfig]:
    if not isinstance(entry, dict):
        return None
    name = _as_str(entry.get("name"))
    if not name:
        return None
    enabled = _as_bool(entry.get("enabled"))
    return FrameworkConfig(
        name=name,
        enabled=True if enabled is None else enabled,
        file_extensions=_as_str_list(entry.get("fileExtensions")),
        component_patterns=_as_str_list(entry.get("componentPatterns")),
        style_patterns=_as_str_list(entry.get("stylePatterns")),
    )


def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_FILENAME",
    "FrameworkConfig",
    "ScanConfig",
    "config_to_data",
    "default_config_data",
    "load_config",
    "merge_config_data",
    "parse_config_data",
    "read_config_file",
]
