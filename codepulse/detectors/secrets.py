"""Detect hardcoded secrets and credentials in raw source text."""

from __future__ import annotations

import re
from typing import List, Pattern, Sequence

from codepulse.models import SecurityFinding

from .base import DetectorOutput, FileContext

KEY_ASSIGNMENT_PATTERN = re.compile(
    r"(?:API_KEY|APIKEY|api_key|SECRET|PASSWORD|PASSWD|TOKEN|ACCESS_KEY)"
    r"\s*[:=]\s*['\"`][a-zA-Z0-9_\-/+]{8,}['\"`]"
)
JWT_PATTERN = re.compile(r"eyJ[a-zA-Z0-9]{10,}")
VENDOR_KEY_PATTERN = re.compile(r"(?:sk-|pk-)[a-zA-Z0-9]{20,}")

SECRET_PATTERNS: Sequence[Pattern[str]] = (
    KEY_ASSIGNMENT_PATTERN,
    JWT_PATTERN,
    VENDOR_KEY_PATTERN,
)

PREVIEW_LENGTH = 40
ELLIPSIS = "…"


def preview(match: str) -> str:
    """Shorten a matched secret for display so the full value is never reported."""

    return match[:PREVIEW_LENGTH] + ELLIPSIS


class SecretDetector:
    """Flag likely secrets.

    In ``first`` mode each pattern yields at most one finding built from its
    first match; in ``all`` mode every non-overlapping match is reported.
    """

    name = "secrets"

    def __init__(self, match_mode: str = "first", patterns: Sequence[Pattern[str]] = SECRET_PATTERNS) -> None:
        self._match_mode = match_mode
        self._patterns = tuple(patterns)

    def detect(self, text: str, context: FileContext) -> DetectorOutput:
        findings: List[SecurityFinding] = []
        for pattern in self._patterns:
            if self._match_mode == "all":
                matches = [match.group(0) for match in pattern.finditer(text)]
            else:
                first = pattern.search(text)
                matches = [first.group(0)] if first else []
            for match in matches:
                findings.append(SecurityFinding(file=context.relative_path, match=preview(match)))
        return DetectorOutput(security=tuple(findings))
