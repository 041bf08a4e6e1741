"""Detector protocol and the inputs/outputs shared by all detectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Protocol, Tuple

from codepulse.category import Category
from codepulse.models import FileRecord, PerformanceFinding, SecurityFinding


@dataclass(frozen=True)
class FileContext:
    """Metadata handed to every detector alongside the file text."""

    record: FileRecord
    relative_path: str


@dataclass(frozen=True)
class DetectorOutput:
    """Findings and size categories produced by one detector for one file."""

    security: Tuple[SecurityFinding, ...] = ()
    performance: Tuple[PerformanceFinding, ...] = ()
    categories: FrozenSet[Category] = frozenset()


EMPTY_OUTPUT = DetectorOutput()


class Detector(Protocol):
    """Protocol implemented by all detectors.

    Detectors must be pure: the same text and context always yield the same
    output, and no state is kept between calls.
    """

    name: str

    def detect(self, text: str, context: FileContext) -> DetectorOutput:
        """Analyze ``text`` and return the findings for this file."""
