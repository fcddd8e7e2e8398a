"""Configuration loading, merging and path predicates."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from componentlens.config import (
    ConfigError,
    ConfigManager,
    default_config_data,
    load_config,
    merge_config_data,
    parse_config_data,
)
from tests._fixtures.project_builder import ProjectBuilder


def test_defaults_when_config_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.json")

    assert config.scan_paths == ["./src", "./components", "./screens"]
    assert "node_modules" in config.exclude_patterns
    assert [fw.name for fw in config.frameworks] == ["react-native", "tailwind"]
    assert config.cache_enabled is True
    assert config.auto_refresh is True
    assert config.refresh_interval == 300
    assert config.cache_max_size == 1000
    assert config.design_system_ttl == 300


def test_user_fields_override_defaults_shallowly() -> None:
    merged = merge_config_data(default_config_data(), {"scanPaths": ["./app"], "cacheEnabled": False})

    assert merged["scanPaths"] == ["./app"]
    assert merged["cacheEnabled"] is False
    assert merged["componentPatterns"] == default_config_data()["componentPatterns"]


def test_frameworks_merge_by_name() -> None:
    merged = merge_config_data(
        default_config_data(),
        {
            "frameworks": [
                {"name": "tailwind", "enabled": False},
                {"name": "vue", "fileExtensions": [".vue"]},
            ]
        },
    )
    by_name = {fw["name"]: fw for fw in merged["frameworks"]}

    assert list(by_name) == ["react-native", "tailwind", "vue"]
    assert by_name["tailwind"]["enabled"] is False
    assert by_name["tailwind"]["fileExtensions"] == [".tsx", ".jsx", ".html", ".vue"]
    assert by_name["react-native"]["enabled"] is True


def test_wrong_typed_fields_fall_back_to_defaults() -> None:
    config = parse_config_data({"scanPaths": "not-a-list", "refreshInterval": "soon", "cacheEnabled": "no"})

    assert config.scan_paths == ["./src", "./components", "./screens"]
    assert config.refresh_interval == 300
    assert config.cache_enabled is False


def test_yaml_config_is_supported(tmp_path: Path) -> None:
    path = tmp_path / "componentlens.yaml"
    path.write_text("scanPaths:\n  - ./ui\nrefreshInterval: 120\n", encoding="utf-8")

    config = load_config(path)

    assert config.scan_paths == ["./ui"]
    assert config.refresh_interval == 120


def test_invalid_json_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "componentlens.config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "componentlens.config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_manager_reads_config_from_root(project: ProjectBuilder) -> None:
    project.write_config({"scanPaths": ["./ui"], "cacheMaxSize": 5})

    manager = ConfigManager(root=project.path())

    assert manager.config.scan_paths == ["./ui"]
    assert manager.config.cache_max_size == 5
    assert manager.scan_roots() == [project.path("ui")]


def test_update_and_save_round_trip(project: ProjectBuilder) -> None:
    manager = ConfigManager(root=project.path())
    manager.update_config({"autoRefresh": False})
    manager.save_config()

    saved = json.loads((project.path() / "componentlens.config.json").read_text(encoding="utf-8"))
    assert saved["autoRefresh"] is False
    assert ConfigManager(root=project.path()).config.auto_refresh is False


def test_get_framework_config_ignores_disabled(project: ProjectBuilder) -> None:
    manager = project.config_manager(frameworks=[{"name": "tailwind", "enabled": False}])

    assert manager.get_framework_config("react-native") is not None
    assert manager.get_framework_config("tailwind") is None
    assert [fw.name for fw in manager.enabled_frameworks()] == ["react-native"]


def test_is_path_included_requires_scan_root(project: ProjectBuilder) -> None:
    manager = project.config_manager()

    assert manager.is_path_included(project.path("src/components/Button.tsx"))
    assert not manager.is_path_included(project.path("lib/Button.tsx"))


def test_is_path_included_honours_excludes(project: ProjectBuilder) -> None:
    manager = project.config_manager()

    assert not manager.is_path_included(project.path("src/node_modules/pkg/Button.tsx"))
    assert not manager.is_path_included(project.path("src/components/Button.test.tsx"))
    assert not manager.is_path_included(project.path("src/__tests__/Button.tsx"))


def test_is_component_file_checks_extension_and_glob(project: ProjectBuilder) -> None:
    manager = project.config_manager()

    assert manager.is_component_file(project.path("src/components/Button.tsx"))
    assert manager.is_component_file(project.path("src/auth/LoginScreen.tsx"))
    assert not manager.is_component_file(project.path("src/utils/format.ts"))
    assert not manager.is_component_file(project.path("src/components/Button.css"))


def test_is_component_file_requires_enabled_framework_extension(project: ProjectBuilder) -> None:
    manager = project.config_manager(
        frameworks=[
            {"name": "react-native", "enabled": False},
            {"name": "tailwind", "fileExtensions": [".html"]},
        ],
        componentPatterns=["**/components/*.{tsx,html}"],
    )

    assert not manager.is_component_file(project.path("src/components/Button.tsx"))
    assert manager.is_component_file(project.path("src/components/Button.html"))
