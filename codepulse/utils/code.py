"""Source code helper utilities."""

from __future__ import annotations

import re
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List


def _matches_any(value: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch(value, pattern) for pattern in patterns)


def iter_code_files(root: Path, include: Iterable[str], exclude: Iterable[str] = ()) -> List[Path]:
    """Return code files beneath ``root`` sorted by their relative POSIX path.

    ``include`` patterns are matched against the file name, ``exclude``
    patterns against every directory between ``root`` and the file.
    """

    include = tuple(include)
    exclude = tuple(exclude)
    matched: List[Path] = []
    for path in Path(root).rglob("*"):
        if not path.is_file():
            continue
        relative = path.relative_to(root)
        if any(_matches_any(part, exclude) for part in relative.parts[:-1]):
            continue
        if _matches_any(path.name, include):
            matched.append(path)
    return sorted(matched, key=lambda item: item.relative_to(root).as_posix())


LINE_BREAK = re.compile(r"\r\n|\r|\n")


def count_lines(text: str) -> int:
    """Count lines the way editors display them, without a phantom last line.

    Only CR, LF and CRLF end a line; form feeds and Unicode separators are
    ordinary characters.
    """

    if not text:
        return 0
    breaks = len(LINE_BREAK.findall(text))
    return breaks if LINE_BREAK.search(text[-1:]) else breaks + 1
