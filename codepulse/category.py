"""Issue categories and their default score deductions."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Enumerate the report categories that carry a score deduction."""

    SECURITY = "security"
    GOD_FILE = "god_file"
    PERFORMANCE = "performance"
    NEAR_EMPTY = "near_empty"
    SCAN_ERROR = "scan_error"

    @property
    def default_weight(self) -> int:
        """Return the points deducted per issue of this category."""

        weights = {
            Category.SECURITY: 15,
            Category.GOD_FILE: 5,
            Category.PERFORMANCE: 8,
            Category.NEAR_EMPTY: 2,
            Category.SCAN_ERROR: 0,
        }
        return weights[self]

    @property
    def label(self) -> str:
        labels = {
            Category.SECURITY: "Secrets",
            Category.GOD_FILE: "God files",
            Category.PERFORMANCE: "Performance",
            Category.NEAR_EMPTY: "Near-empty",
            Category.SCAN_ERROR: "Scan errors",
        }
        return labels[self]
