"""Textual heuristic for C-style loops nested inside another loop body."""

from __future__ import annotations

import re

from codepulse.models import PerformanceFinding

from .base import EMPTY_OUTPUT, DetectorOutput, FileContext

# Only scans up to the first closing brace of the outer body.
NESTED_LOOP_PATTERN = re.compile(r"for\s*\(.*?\)\s*\{[^}]*for\s*\(")
NESTED_LOOPS = "Nested Loops"


class NestedLoopDetector:
    """Count ``for (...) { ... for (`` sequences in a file."""

    name = "nested_loops"

    def detect(self, text: str, context: FileContext) -> DetectorOutput:
        count = len(NESTED_LOOP_PATTERN.findall(text))
        if not count:
            return EMPTY_OUTPUT
        finding = PerformanceFinding(file=context.relative_path, count=count, type=NESTED_LOOPS)
        return DetectorOutput(performance=(finding,))
