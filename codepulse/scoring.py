"""Turn accumulated findings into a bounded health score and a report."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .category import Category
from .config import ScanConfig
from .models import AnalysisReport, ScanAccumulator

MAX_SCORE = 100
MIN_SCORE = 0


def compute_deductions(state: ScanAccumulator, config: ScanConfig) -> int:
    """Linear penalty: every issue costs its category weight, without caps."""

    counts = state.counts()
    return sum(config.weight(category) * counts[category] for category in Category)


def clamp_score(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def health_score(state: ScanAccumulator, config: ScanConfig) -> int:
    return clamp_score(MAX_SCORE - compute_deductions(state, config))


def build_report(
    state: ScanAccumulator,
    config: ScanConfig,
    *,
    workspace_name: str,
    total_files: int,
    run_id: str = "",
    completed_at: Optional[datetime] = None,
) -> AnalysisReport:
    """Freeze the accumulated state into an ``AnalysisReport``."""

    completed_at = completed_at or datetime.now()
    return AnalysisReport(
        health_score=health_score(state, config),
        workspace_name=workspace_name,
        god_files=tuple(state.god_files),
        security_issues=tuple(state.security_issues),
        performance_issues=tuple(state.performance_issues),
        unused_files=tuple(state.unused_files),
        all_files=tuple(state.all_files),
        scan_errors=tuple(state.scan_errors),
        total_files=total_files,
        total_lines=state.total_lines,
        last_scanned=completed_at.strftime("%H:%M:%S"),
        run_id=run_id,
    )
