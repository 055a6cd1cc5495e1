"""
Local directory document source.

Layout:
    docs/
        globals.md          - global functions
        classes.md          - any other .md file, at any depth, is a class file
        classes/player.md
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List

from .base import Document, DocumentRole, DocumentSource, DocumentSourceError, role_for_path

logger = logging.getLogger(__name__)


class LocalDocumentSource(DocumentSource):
    """Read documentation files from a directory tree."""

    def __init__(self, root: Path, pattern: str = "*.md"):
        """Initialize local source.

        Args:
            root: Documentation directory
            pattern: Glob pattern for documentation files
        """
        self.root = Path(root)
        self.pattern = pattern

    def describe(self) -> str:
        return str(self.root)

    def _ordered_files(self) -> List[Path]:
        files = sorted(
            f for f in self.root.rglob(self.pattern)
            if f.is_file() and not f.name.startswith("~$")
        )
        # Globals first, then class files in path order
        globals_files = [f for f in files if role_for_path(f.name) is DocumentRole.GLOBALS]
        class_files = [f for f in files if f not in globals_files]
        return globals_files + class_files

    def documents(self) -> Iterator[Document]:
        if not self.root.is_dir():
            raise DocumentSourceError(f"Documentation directory not found: {self.root}")

        files = self._ordered_files()
        if not files:
            raise DocumentSourceError(f"No {self.pattern} files found in {self.root}")

        for path in files:
            relative = path.relative_to(self.root).as_posix()
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise DocumentSourceError(f"Failed to read {path}: {exc}") from exc

            logger.debug(f"Read {relative} ({len(text)} chars)")
            yield Document(role_for_path(relative), relative, text)
