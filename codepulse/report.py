"""Human-readable rendering of an ``AnalysisReport``."""

from __future__ import annotations

from typing import List, Tuple

from .category import Category
from .models import AnalysisReport

HEALTHY_SCORE = 80
WARNING_SCORE = 50


def health_status(score: int) -> str:
    """Map a health score onto the HEALTHY / WARNING / CRITICAL bands."""

    if score >= HEALTHY_SCORE:
        return "HEALTHY"
    if score >= WARNING_SCORE:
        return "WARNING"
    return "CRITICAL"


def category_rows(report: AnalysisReport) -> List[Tuple[str, int]]:
    """Return category/count pairs ordered for reporting."""

    counts = {
        Category.SECURITY: len(report.security_issues),
        Category.GOD_FILE: len(report.god_files),
        Category.PERFORMANCE: len(report.performance_issues),
        Category.NEAR_EMPTY: len(report.unused_files),
        Category.SCAN_ERROR: len(report.scan_errors),
    }
    return [(category.label, counts[category]) for category in Category]


def top_findings(report: AnalysisReport, limit: int = 5) -> List[str]:
    """Return one-line descriptions, secrets first, then performance, then errors."""

    lines: List[str] = []
    for finding in report.security_issues:
        lines.append(f"[SECRET] {finding.file} -> {finding.match}")
    for finding in report.performance_issues:
        lines.append(f"[PERF] {finding.file} -> {finding.type} x{finding.count}")
    for finding in report.scan_errors:
        lines.append(f"[ERROR] {finding.file} ({finding.stage}) -> {finding.message}")
    return lines[:limit]


def format_summary_table(report: AnalysisReport, max_findings: int = 5) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append(f"CodePulse Summary: {report.workspace_name}")
    lines.append("=" * 40)
    header = f"{'Category':<12} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for label, count in category_rows(report):
        lines.append(f"{label:<12} | {count:>5}")
    lines.append("-" * len(header))
    lines.append(f"Health    : {report.health_score}/100 ({health_status(report.health_score)})")
    lines.append(f"Files     : {report.total_files}")
    lines.append(f"Lines     : {report.total_lines}")
    lines.append(f"Scanned at: {report.last_scanned}")

    findings = top_findings(report, max_findings)
    if findings:
        lines.append("")
        lines.append("Top Findings")
        lines.append("-" * 40)
        lines.extend(findings)
    return "\n".join(lines)
