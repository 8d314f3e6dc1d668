"""Resolve configured include patterns into concrete source files."""

from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Set

from .logging import get_logger
from .models import SourceFile

_DIRECTORY_SUFFIX = ".ts"


class SourceLocator:
    """Expands include patterns (files, directories or globs) into source files."""

    def __init__(self) -> None:
        self.logger = get_logger("source_locator")

    def locate(self, root: Path, patterns: Iterable[str]) -> List[SourceFile]:
        """Return source files for `patterns`, in pattern order, each file once."""
        root = Path(root)
        seen: Set[Path] = set()
        files: List[SourceFile] = []
        for pattern in patterns:
            matches = list(self._expand(root, pattern))
            if not matches:
                self.logger.debug("Pattern %r matched no source files", pattern)
            for path in matches:
                key = path.resolve()
                if key in seen:
                    continue
                seen.add(key)
                files.append(SourceFile.from_path(path, root))
        self.logger.debug("Located %d source files", len(files))
        return files

    def _expand(self, root: Path, pattern: str) -> Iterator[Path]:
        candidate = root / pattern
        if candidate.is_dir():
            expression = os.path.join(glob.escape(pattern), "**", f"*{_DIRECTORY_SUFFIX}")
            for match in _glob(root, expression):
                if (root / match).is_file():
                    yield root / match
        elif candidate.is_file():
            yield candidate
        else:
            for match in _glob(root, pattern):
                path = root / match
                if path.is_file():
                    yield path


def _glob(root: Path, expression: str) -> List[str]:
    return sorted(glob.glob(expression, root_dir=root, recursive=True))


__all__ = ["SourceLocator"]
