"""componentlens: component discovery, analysis and design-system extraction."""

from .config import ConfigError, ConfigManager, ScanConfig, load_config
from .errors import ComponentNotFoundError, ErrorTracker
from .models import ComponentMatch, ComponentRecord, DesignSystemSnapshot, PropRecord, StyleRecord
from .orchestrator import Orchestrator

__version__ = "0.1.0"

__all__ = [
    "ComponentMatch",
    "ComponentNotFoundError",
    "ComponentRecord",
    "ConfigError",
    "ConfigManager",
    "DesignSystemSnapshot",
    "ErrorTracker",
    "Orchestrator",
    "PropRecord",
    "ScanConfig",
    "StyleRecord",
    "__version__",
    "load_config",
]
