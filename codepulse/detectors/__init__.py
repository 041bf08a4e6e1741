"""Detector registry for the scanner."""

from __future__ import annotations

from typing import List, Optional

from codepulse.config import ScanConfig

from .base import Detector, DetectorOutput, FileContext
from .dynamic_eval import DynamicEvalDetector
from .nested_loops import NestedLoopDetector
from .secrets import SecretDetector
from .size import SizeClassifier


def default_detectors(config: Optional[ScanConfig] = None) -> List[Detector]:
    """Return the ordered detector set configured from ``config``."""

    config = config or ScanConfig()
    return [
        SizeClassifier(config.god_file_lines, config.near_empty_lines),
        SecretDetector(match_mode=config.secret_match_mode),
        NestedLoopDetector(),
        DynamicEvalDetector(),
    ]


__all__ = [
    "Detector",
    "DetectorOutput",
    "FileContext",
    "DynamicEvalDetector",
    "NestedLoopDetector",
    "SecretDetector",
    "SizeClassifier",
    "default_detectors",
]
