"""
Load tree lock engine configuration.
"""
import json
import os
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_CONFIG_PATH = os.path.join("config", "treelock.json")


@dataclass
class EngineConfig:
    duplicate_labels: str = "last"   # or "error"
    log_level: str = "WARNING"
    trace_path: Optional[str] = None


def safe_get(d: dict, key: str, default: Any) -> Any:
    """Get dictionary value with default fallback."""
    return d[key] if key in d else default


def load_config(path: str | None = DEFAULT_CONFIG_PATH) -> EngineConfig:
    """Load configuration from JSON file, or return defaults."""
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        defaults = EngineConfig()
        return EngineConfig(
            duplicate_labels=safe_get(data, "duplicate_labels", defaults.duplicate_labels),
            log_level=safe_get(data, "log_level", defaults.log_level),
            trace_path=safe_get(data, "trace_path", defaults.trace_path),
        )
    return EngineConfig()
