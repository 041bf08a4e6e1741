"""Command-line entry point for the CodePulse scanner."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import SECRET_MATCH_MODES, ScanConfig, load_config
from .engine import ScanEngine
from .errors import ConfigError
from .events import EventKind, ReportChannel, ScanEvent
from .logging_setup import configure_logging
from .models import AnalysisReport
from .report import format_summary_table
from .workspace import FilesystemWorkspace

logger = logging.getLogger(__name__)

SCAN_FAILED_EXIT_CODE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codepulse",
        description="Scan a source tree for secrets, performance smells and oversized files.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Workspace root to scan (defaults to the current directory).",
    )
    parser.add_argument(
        "--config",
        "-c",
        dest="config_path",
        default=None,
        help="YAML configuration file (defaults to .codepulse.yaml in the workspace root).",
    )
    parser.add_argument(
        "--format",
        choices=["json"],
        default="json",
        help="Report format for file output (defaults to json).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the structured report (e.g., artifacts/codepulse.json).",
    )
    parser.add_argument(
        "--fail-under",
        type=int,
        default=None,
        help="Exit with status 1 when the health score is below this value.",
    )
    parser.add_argument(
        "--secret-mode",
        choices=list(SECRET_MATCH_MODES),
        default=None,
        help="Report only the first match per secret pattern, or every match.",
    )
    parser.add_argument(
        "--no-isolate",
        dest="isolate_file_errors",
        action="store_const",
        const=False,
        default=None,
        help="Abort the whole scan on the first unreadable file or detector fault.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    return parser


class ConsoleListener:
    """Log progress and remember the failure message of a run."""

    def __init__(self) -> None:
        self.failure: Optional[str] = None

    def __call__(self, event: ScanEvent) -> None:
        if event.kind is EventKind.PROGRESS:
            logger.info("Scan progress: %d%%", event.value)
        elif event.kind is EventKind.FAILED:
            self.failure = event.message


def resolve_config(args: argparse.Namespace) -> ScanConfig:
    config_path = Path(args.config_path) if args.config_path else None
    config = load_config(config_path, root=Path(args.path))
    return config.with_overrides(
        fail_under=args.fail_under,
        secret_match_mode=args.secret_mode,
        isolate_file_errors=args.isolate_file_errors,
    )


def run_scan(path: str, config: ScanConfig, listener: ConsoleListener) -> Optional[AnalysisReport]:
    channel = ReportChannel()
    channel.subscribe(listener)
    engine = ScanEngine(FilesystemWorkspace(path), config=config, channel=channel)
    return asyncio.run(engine.run_scan())


def write_output(report: AnalysisReport, output_path: str | None, report_format: str) -> None:
    summary = format_summary_table(report)
    print(summary)

    if report_format == "json":
        payload = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
        if output_path:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(payload, encoding="utf-8")
            print(f"\nReport written to {output_path}")
        else:
            print("\nJSON Report")
            print(payload)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = resolve_config(args)
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return SCAN_FAILED_EXIT_CODE

    listener = ConsoleListener()
    report = run_scan(args.path, config, listener)
    if report is None:
        print(listener.failure or "Analysis failed", file=sys.stderr)
        return SCAN_FAILED_EXIT_CODE

    write_output(report, args.output_path, args.format)
    return report.exit_code(config.fail_under)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
