"""Scan loop: visit every file, run the detectors, score and publish the report."""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import ScanConfig
from .detectors import Detector, DetectorOutput, FileContext, default_detectors
from .errors import DetectorError, DiscoveryError, FileReadError, ScanError, ScanTimeoutError
from .events import EventKind, ReportChannel, ScanEvent
from .models import AnalysisReport, FileRecord, ScanAccumulator, ScanErrorFinding
from .scoring import build_report
from .workspace import FileContent, FilesystemWorkspace, Workspace

logger = logging.getLogger(__name__)

# Per-file progress fills 0..85; the remainder is reported once scoring is done.
FILE_PHASE_SHARE = 85
COMPLETE = 100


def progress_percent(completed: int, total: int, share: int = FILE_PHASE_SHARE) -> int:
    """Return ``completed / total * share`` rounded half up."""

    return (2 * completed * share + total) // (2 * total)


class ScanEngine:
    """Run scans of one workspace and publish their events on a channel.

    Calls to :meth:`run_scan` are serialized: a call made while another scan
    is active waits for it to finish and then runs as a new, independent run.
    """

    def __init__(
        self,
        workspace: Workspace,
        config: Optional[ScanConfig] = None,
        channel: Optional[ReportChannel] = None,
        detectors: Optional[Sequence[Detector]] = None,
    ) -> None:
        self.workspace = workspace
        self.config = config or ScanConfig()
        self.channel = channel or ReportChannel()
        self.detectors: List[Detector] = list(detectors) if detectors is not None else default_detectors(self.config)
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    async def run_scan(self) -> Optional[AnalysisReport]:
        """Scan the workspace once. Returns the report, or ``None`` if the scan failed."""

        async with self._run_lock():
            run_id = uuid.uuid4().hex[:12]
            self._emit(ScanEvent(EventKind.SCAN_STARTED, run_id))
            logger.info("Scan %s started for workspace %s", run_id, self.workspace.name)
            try:
                if self.config.scan_timeout:
                    report = await asyncio.wait_for(self._execute(run_id), self.config.scan_timeout)
                else:
                    report = await self._execute(run_id)
            except asyncio.TimeoutError:
                error = ScanTimeoutError(f"Scan exceeded {self.config.scan_timeout}s")
                self._fail(run_id, error)
                return None
            except ScanError as error:
                self._fail(run_id, error)
                return None
            except Exception as exc:  # pylint: disable=broad-except
                self._fail(run_id, ScanError(f"Unexpected error: {exc}"), exc)
                return None

            self._emit(ScanEvent(EventKind.PROGRESS, run_id, value=COMPLETE))
            self._emit(ScanEvent(EventKind.RESULT, run_id, report=report))
            logger.info(
                "Scan %s finished: %d files, health score %d",
                run_id,
                report.total_files,
                report.health_score,
            )
            return report

    async def _execute(self, run_id: str) -> AnalysisReport:
        identifiers = await self._discover()
        state = ScanAccumulator()
        total = len(identifiers)
        for completed, identifier in enumerate(identifiers, start=1):
            await self._scan_file(identifier, state)
            self._emit(ScanEvent(EventKind.PROGRESS, run_id, value=progress_percent(completed, total)))
        return build_report(
            state,
            self.config,
            workspace_name=self.workspace.name,
            total_files=total,
            run_id=run_id,
        )

    async def _discover(self) -> List[str]:
        try:
            identifiers = await asyncio.to_thread(
                self.workspace.find_files, self.config.include, self.config.exclude
            )
        except Exception as exc:  # pylint: disable=broad-except
            raise DiscoveryError(f"File discovery failed: {exc}") from exc
        logger.debug("Discovered %d files", len(identifiers))
        return list(identifiers)

    async def _read(self, identifier: str) -> FileContent:
        pending = asyncio.to_thread(self.workspace.read_file, identifier)
        try:
            if self.config.file_timeout:
                return await asyncio.wait_for(pending, self.config.file_timeout)
            return await pending
        except asyncio.TimeoutError as exc:
            raise FileReadError(f"Timed out reading {identifier} after {self.config.file_timeout}s") from exc
        except Exception as exc:  # pylint: disable=broad-except
            raise FileReadError(f"Cannot read {identifier}: {exc}") from exc

    def _run_lock(self) -> asyncio.Lock:
        # A lock is tied to the loop it first waits on; keep one per loop.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def _relative_path(self, identifier: str) -> str:
        # Without a display path no finding can be attributed, so this is never isolated.
        try:
            return self.workspace.relative_path(identifier)
        except Exception as exc:  # pylint: disable=broad-except
            raise FileReadError(f"Cannot resolve a workspace path for {identifier}: {exc}") from exc

    async def _load(self, identifier: str) -> Tuple[FileRecord, str]:
        content = await self._read(identifier)
        try:
            name = self.workspace.basename(identifier)
            extension = self.workspace.extension(identifier)
        except Exception as exc:  # pylint: disable=broad-except
            raise FileReadError(f"Cannot describe {identifier}: {exc}") from exc
        return FileRecord(
            name=name,
            path=identifier,
            line_count=content.line_count,
            byte_size=len(content.text),
            extension=extension,
        ), content.text

    async def _scan_file(self, identifier: str, state: ScanAccumulator) -> None:
        relative = self._relative_path(identifier)
        isolate = self.config.isolate_file_errors
        try:
            record, text = await self._load(identifier)
        except FileReadError as error:
            if not isolate:
                raise
            logger.warning("Skipping %s: %s", relative, error)
            state.add_scan_error(ScanErrorFinding(file=relative, stage="read", message=str(error)))
            return

        state.add_file(record)
        context = FileContext(record=record, relative_path=relative)
        logger.debug("Scanning %s (%d lines)", relative, record.line_count)

        for detector in self.detectors:
            try:
                output = detector.detect(text, context)
                self._merge(record, output, state)
            except Exception as exc:  # pylint: disable=broad-except
                error = DetectorError(f"Detector {detector.name} failed on {relative}: {exc}")
                if not isolate:
                    raise error from exc
                logger.warning("%s", error)
                state.add_scan_error(
                    ScanErrorFinding(file=relative, stage=f"detector:{detector.name}", message=str(error))
                )

    @staticmethod
    def _merge(record: FileRecord, output: DetectorOutput, state: ScanAccumulator) -> None:
        # Validate before touching state so a bad result never half-applies.
        if not isinstance(output, DetectorOutput):
            raise TypeError(f"expected DetectorOutput, got {type(output).__name__}")
        state.classify(record, output.categories)
        state.security_issues.extend(output.security)
        state.performance_issues.extend(output.performance)

    def _fail(self, run_id: str, error: ScanError, cause: Optional[BaseException] = None) -> None:
        logger.error("Scan %s failed: %s", run_id, error, exc_info=cause or error)
        self._emit(ScanEvent(EventKind.FAILED, run_id, message=f"Analysis failed: {error}"))

    def _emit(self, event: ScanEvent) -> None:
        self.channel.emit(event)


def scan_path(
    path: str | Path,
    config: Optional[ScanConfig] = None,
    channel: Optional[ReportChannel] = None,
) -> Optional[AnalysisReport]:
    """Synchronously scan a directory tree."""

    engine = ScanEngine(FilesystemWorkspace(path), config=config, channel=channel)
    return asyncio.run(engine.run_scan())
