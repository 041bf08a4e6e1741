"""Host collaborators that enumerate and read the files to scan."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, Sequence

from .utils import count_lines, iter_code_files, read_text_file


@dataclass(frozen=True)
class FileContent:
    text: str
    line_count: int


class Workspace(Protocol):
    """Protocol implemented by file sources the engine can scan."""

    name: str

    def find_files(self, include: Sequence[str], exclude: Sequence[str]) -> List[str]:
        """Return ordered absolute identifiers of the files to scan."""

    def read_file(self, identifier: str) -> FileContent:
        """Return the full text and line count of ``identifier``."""

    def basename(self, identifier: str) -> str:
        ...

    def extension(self, identifier: str) -> str:
        ...

    def relative_path(self, identifier: str) -> str:
        """Return the workspace-relative display path of ``identifier``."""


class FilesystemWorkspace:
    """Scan a directory tree on the local filesystem."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()
        self.name = self.root.name or str(self.root)

    def find_files(self, include: Sequence[str], exclude: Sequence[str]) -> List[str]:
        if not self.root.is_dir():
            raise NotADirectoryError(f"Workspace root is not a directory: {self.root}")
        return [str(path) for path in iter_code_files(self.root, include, exclude)]

    def read_file(self, identifier: str) -> FileContent:
        text = read_text_file(Path(identifier))
        return FileContent(text=text, line_count=count_lines(text))

    def basename(self, identifier: str) -> str:
        return Path(identifier).name

    def extension(self, identifier: str) -> str:
        return Path(identifier).suffix.lstrip(".").lower()

    def relative_path(self, identifier: str) -> str:
        path = Path(identifier)
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()
