"""Scan configuration: file selection, thresholds, score weights, policies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .category import Category
from .errors import ConfigError
from .utils import read_yaml_file

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".codepulse.yaml"
DEFAULT_INCLUDE: Tuple[str, ...] = ("*.ts", "*.tsx", "*.js", "*.jsx", "*.py", "*.vue", "*.svelte")
DEFAULT_EXCLUDE: Tuple[str, ...] = ("node_modules",)
SECRET_MATCH_MODES = ("first", "all")


def default_weights() -> Dict[str, int]:
    return {category.value: category.default_weight for category in Category}


@dataclass(frozen=True)
class ScanConfig:
    """Settings shared by the scan loop, the detectors and the scorer."""

    include: Tuple[str, ...] = DEFAULT_INCLUDE
    exclude: Tuple[str, ...] = DEFAULT_EXCLUDE
    god_file_lines: int = 500
    near_empty_lines: int = 5
    weights: Mapping[str, int] = field(default_factory=default_weights)
    secret_match_mode: str = "first"
    isolate_file_errors: bool = True
    file_timeout: Optional[float] = None
    scan_timeout: Optional[float] = None
    fail_under: int = 0

    def __post_init__(self) -> None:
        if self.secret_match_mode not in SECRET_MATCH_MODES:
            raise ConfigError(
                f"secret_match_mode must be one of {', '.join(SECRET_MATCH_MODES)}, got {self.secret_match_mode!r}"
            )
        if self.god_file_lines < 0 or self.near_empty_lines < 0:
            raise ConfigError("Line thresholds must be non-negative")
        for timeout_name in ("file_timeout", "scan_timeout"):
            value = getattr(self, timeout_name)
            if value is not None and value <= 0:
                raise ConfigError(f"{timeout_name} must be positive when set")
        unknown = set(self.weights) - {category.value for category in Category}
        if unknown:
            raise ConfigError(f"Unknown weight categories: {sorted(unknown)}")
        for name, weight in self.weights.items():
            if not isinstance(weight, int) or isinstance(weight, bool) or weight < 0:
                raise ConfigError(f"Weight for {name} must be a non-negative integer")
        merged = default_weights()
        merged.update(self.weights)
        object.__setattr__(self, "weights", MappingProxyType(merged))

    def weight(self, category: Category) -> int:
        return self.weights[category.value]

    def with_overrides(self, **changes: Any) -> "ScanConfig":
        """Return a copy with ``changes`` applied, ignoring ``None`` values."""

        return replace(self, **{key: value for key, value in changes.items() if value is not None})


_FIELD_TYPES: Dict[str, Tuple[type, ...]] = {
    "include": (list, tuple, str),
    "exclude": (list, tuple, str),
    "god_file_lines": (int,),
    "near_empty_lines": (int,),
    "weights": (dict,),
    "secret_match_mode": (str,),
    "isolate_file_errors": (bool,),
    "file_timeout": (int, float, type(None)),
    "scan_timeout": (int, float, type(None)),
    "fail_under": (int,),
}


def config_from_mapping(data: Mapping[str, Any]) -> ScanConfig:
    """Build a ``ScanConfig`` from a parsed YAML mapping."""

    known = {item.name for item in fields(ScanConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        expected = _FIELD_TYPES[key]
        # bool is an int subclass; reject it for numeric settings
        if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
            raise ConfigError(f"Invalid type for {key}: {type(value).__name__}")
        if key in ("include", "exclude"):
            value = (value,) if isinstance(value, str) else tuple(str(item) for item in value)
        elif key == "weights":
            value = {str(name): weight for name, weight in value.items()}
        values[key] = value
    return ScanConfig(**values)


def load_config(path: Optional[Path] = None, root: Optional[Path] = None) -> ScanConfig:
    """Load configuration from ``path``, or from ``root/.codepulse.yaml`` if present.

    An explicit ``path`` that does not exist is an error; a missing default
    file falls back to the built-in defaults.
    """

    if path is None:
        if root is None:
            return ScanConfig()
        path = Path(root) / CONFIG_FILENAME
        if not path.exists():
            return ScanConfig()
    elif not Path(path).exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = read_yaml_file(Path(path))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config at {path} is not a mapping")
    logger.debug("Loaded configuration from %s", path)
    return config_from_mapping(data)
