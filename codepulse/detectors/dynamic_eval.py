"""Flag dynamic code evaluation calls."""

from __future__ import annotations

import re

from codepulse.models import PerformanceFinding

from .base import EMPTY_OUTPUT, DetectorOutput, FileContext

EVAL_PATTERN = re.compile(r"\beval\s*\(")
EVAL_USAGE = "eval() usage"


class DynamicEvalDetector:
    name = "dynamic_eval"

    def detect(self, text: str, context: FileContext) -> DetectorOutput:
        if not EVAL_PATTERN.search(text):
            return EMPTY_OUTPUT
        finding = PerformanceFinding(file=context.relative_path, count=1, type=EVAL_USAGE)
        return DetectorOutput(performance=(finding,))
