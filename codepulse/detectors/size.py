"""Classify files as god files or near-empty stubs by line count."""

from __future__ import annotations

from codepulse.category import Category

from .base import DetectorOutput, FileContext

GOD_FILE_LINES = 500
NEAR_EMPTY_LINES = 5


class SizeClassifier:
    """Flag files above the god-file threshold or with a handful of lines.

    Both bounds are exclusive: a file with exactly ``god_file_lines`` lines is
    not a god file, and a file with zero lines is never near-empty.
    """

    name = "size"

    def __init__(self, god_file_lines: int = GOD_FILE_LINES, near_empty_lines: int = NEAR_EMPTY_LINES) -> None:
        self._god_file_lines = god_file_lines
        self._near_empty_lines = near_empty_lines

    def detect(self, text: str, context: FileContext) -> DetectorOutput:
        lines = context.record.line_count
        categories = set()
        if lines > self._god_file_lines:
            categories.add(Category.GOD_FILE)
        if 0 < lines < self._near_empty_lines:
            categories.add(Category.NEAR_EMPTY)
        return DetectorOutput(categories=frozenset(categories))
