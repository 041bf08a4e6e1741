"""Exception hierarchy raised by the scanner."""

from __future__ import annotations


class CodePulseError(Exception):
    """Base class for every error raised by the package."""


class ConfigError(CodePulseError):
    """The scan configuration could not be loaded or is invalid."""


class ScanError(CodePulseError):
    """A scan could not produce a report."""


class DiscoveryError(ScanError):
    """The workspace could not enumerate candidate files."""


class FileReadError(ScanError):
    """A single file could not be retrieved or decoded."""


class DetectorError(ScanError):
    """A detector raised while analyzing a file."""


class ScanTimeoutError(ScanError):
    """The whole scan exceeded its configured time budget."""
