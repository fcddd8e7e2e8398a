"""Component file discovery."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List

from .config import ConfigManager
from .errors import ErrorTracker
from .logging import get_logger


class ComponentScanner:
    """Walks the configured scan roots and returns candidate component files."""

    def __init__(self, config_manager: ConfigManager, errors: ErrorTracker | None = None) -> None:
        self.config_manager = config_manager
        self.errors = errors
        self.logger = get_logger("scanner")

    def scan(self) -> List[str]:
        """Return absolute paths of component files under every existing scan root."""
        candidates: List[Path] = []
        for root in self.config_manager.scan_roots():
            if not root.is_dir():
                self.logger.debug("Skipping missing scan root %s", root)
                continue
            candidates.extend(self._iter_files(root))

        components = [str(path) for path in candidates if self.config_manager.is_component_file(path)]
        self.logger.debug(
            "Scanner found %d component files among %d candidates", len(components), len(candidates)
        )
        return components

    def is_component_file(self, path: Path | str) -> bool:
        return self.config_manager.is_component_file(path)

    def should_exclude(self, path: Path | str) -> bool:
        return not self.config_manager.is_path_included(path)

    def _iter_files(self, root: Path) -> Iterator[Path]:
        def _on_error(exc: OSError) -> None:
            self.logger.warning("Failed to scan directory %s: %s", exc.filename, exc)
            if self.errors is not None:
                self.errors.record(exc, "scan_directory", file_path=exc.filename, severity="low")

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            current_dir = Path(dirpath)

            # Pruning dirnames in place stops os.walk from descending into excluded subtrees.
            dirnames[:] = sorted(
                name for name in dirnames if self.config_manager.is_path_included(current_dir / name)
            )

            for filename in sorted(filenames):
                path = current_dir / filename
                if self.config_manager.is_path_included(path):
                    yield path


__all__ = ["ComponentScanner"]
