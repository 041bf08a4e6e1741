"""Shared test fixtures for CodePulse tests."""

from __future__ import annotations

import asyncio
import time
from typing import Dict, List, Sequence, Union

import pytest

from codepulse.config import ScanConfig
from codepulse.engine import ScanEngine
from codepulse.events import ReportChannel, ScanEvent
from codepulse.utils import count_lines
from codepulse.workspace import FileContent

ROOT = "/workspace/demo"


class SlowRead:
    """File content that takes ``delay`` seconds to read."""

    def __init__(self, text: str, delay: float) -> None:
        self.text = text
        self.delay = delay


class MemoryWorkspace:
    """In-memory workspace keyed by relative path, in insertion order."""

    def __init__(self, files: Dict[str, Union[str, Exception, SlowRead]], name: str = "demo") -> None:
        self.name = name
        self._files = dict(files)
        self.discovery_error: Exception | None = None

    def find_files(self, include: Sequence[str], exclude: Sequence[str]) -> List[str]:
        if self.discovery_error is not None:
            raise self.discovery_error
        return [f"{ROOT}/{relative}" for relative in self._files]

    def read_file(self, identifier: str) -> FileContent:
        entry = self._files[self.relative_path(identifier)]
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, SlowRead):
            time.sleep(entry.delay)
            entry = entry.text
        return FileContent(text=entry, line_count=count_lines(entry))

    def basename(self, identifier: str) -> str:
        return identifier.rsplit("/", 1)[-1]

    def extension(self, identifier: str) -> str:
        name = self.basename(identifier)
        return name.rsplit(".", 1)[-1].lower() if "." in name else ""

    def relative_path(self, identifier: str) -> str:
        return identifier[len(ROOT) + 1:]


class ScanRun:
    """Outcome of one engine run: the returned report and every emitted event."""

    def __init__(self, report, events: List[ScanEvent]) -> None:
        self.report = report
        self.events = events

    @property
    def kinds(self) -> List[str]:
        return [event.kind.value for event in self.events]

    @property
    def progress(self) -> List[int]:
        return [event.value for event in self.events if event.kind.value == "progress"]


@pytest.fixture
def run_scan():
    """Return a helper that scans an in-memory file mapping."""

    def _run(files, config: ScanConfig | None = None, detectors=None, workspace=None) -> ScanRun:
        events: List[ScanEvent] = []
        channel = ReportChannel()
        channel.subscribe(events.append)
        engine = ScanEngine(
            workspace or MemoryWorkspace(files),
            config=config,
            channel=channel,
            detectors=detectors,
        )
        report = asyncio.run(engine.run_scan())
        return ScanRun(report, events)

    return _run


@pytest.fixture
def make_workspace():
    return MemoryWorkspace


@pytest.fixture
def slow_read():
    return SlowRead
