"""Core data structures produced by a scan."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Tuple

from .category import Category


@dataclass(frozen=True)
class FileRecord:
    """Describe one scanned file. ``path`` is always the absolute identifier."""

    name: str
    path: str
    line_count: int
    byte_size: int
    extension: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "path": self.path,
            "lines": self.line_count,
            "size": self.byte_size,
            "ext": self.extension,
        }


@dataclass(frozen=True)
class SecurityFinding:
    """A likely hardcoded secret. ``line`` is not resolved and stays 0."""

    file: str
    match: str
    line: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {"file": self.file, "line": self.line, "match": self.match}


@dataclass(frozen=True)
class PerformanceFinding:
    """A performance anti-pattern found in one file."""

    file: str
    count: int
    type: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class ScanErrorFinding:
    """A file that could not be fully analyzed."""

    file: str
    stage: str
    message: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass
class ScanAccumulator:
    """Mutable per-run state filled by the scan loop."""

    all_files: List[FileRecord] = field(default_factory=list)
    god_files: List[FileRecord] = field(default_factory=list)
    unused_files: List[FileRecord] = field(default_factory=list)
    security_issues: List[SecurityFinding] = field(default_factory=list)
    performance_issues: List[PerformanceFinding] = field(default_factory=list)
    scan_errors: List[ScanErrorFinding] = field(default_factory=list)
    total_lines: int = 0

    def add_file(self, record: FileRecord) -> None:
        self.all_files.append(record)
        self.total_lines += record.line_count

    def classify(self, record: FileRecord, categories: frozenset) -> None:
        if Category.GOD_FILE in categories:
            self.god_files.append(record)
        if Category.NEAR_EMPTY in categories:
            self.unused_files.append(record)

    def add_scan_error(self, finding: ScanErrorFinding) -> None:
        self.scan_errors.append(finding)

    def counts(self) -> Dict[Category, int]:
        """Return the number of issues per scored category."""

        return {
            Category.SECURITY: len(self.security_issues),
            Category.GOD_FILE: len(self.god_files),
            Category.PERFORMANCE: len(self.performance_issues),
            Category.NEAR_EMPTY: len(self.unused_files),
            Category.SCAN_ERROR: len(self.scan_errors),
        }


@dataclass(frozen=True)
class AnalysisReport:
    """Immutable result of one complete scan run.

    ``total_files`` counts every discovered file, including those that could
    not be read; ``all_files`` only holds the files that were read, so the
    difference equals the read-stage entries in ``scan_errors``.
    """

    health_score: int
    workspace_name: str
    god_files: Tuple[FileRecord, ...]
    security_issues: Tuple[SecurityFinding, ...]
    performance_issues: Tuple[PerformanceFinding, ...]
    unused_files: Tuple[FileRecord, ...]
    all_files: Tuple[FileRecord, ...]
    scan_errors: Tuple[ScanErrorFinding, ...]
    total_files: int
    total_lines: int
    last_scanned: str
    run_id: str = ""
    circular_deps: int = 0
    scan_progress: int = 100

    @property
    def unused_exports(self) -> int:
        return len(self.unused_files)

    def exit_code(self, fail_under: int = 0) -> int:
        if self.security_issues:
            return 2
        if self.health_score < fail_under:
            return 1
        return 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "healthScore": self.health_score,
            "workspaceName": self.workspace_name,
            "godFiles": [record.to_dict() for record in self.god_files],
            "securityIssues": [finding.to_dict() for finding in self.security_issues],
            "performanceIssues": [finding.to_dict() for finding in self.performance_issues],
            "unusedFiles": [record.to_dict() for record in self.unused_files],
            "allFiles": [record.to_dict() for record in self.all_files],
            "scanErrors": [finding.to_dict() for finding in self.scan_errors],
            "totalFiles": self.total_files,
            "totalLines": self.total_lines,
            "unusedExports": self.unused_exports,
            "circularDeps": self.circular_deps,
            "scanProgress": self.scan_progress,
            "lastScanned": self.last_scanned,
        }
