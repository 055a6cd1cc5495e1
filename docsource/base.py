"""
Document source contract.

A source yields ``Document(role, path, text)`` records in a stable order.
The role tells the parser which mode to use; the path is for diagnostics
only and is never parsed.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, Iterator, List, NamedTuple


class DocumentSourceError(RuntimeError):
    """Raised when document text cannot be obtained."""
    pass


class DocumentRole(str, Enum):
    GLOBALS = "globals"
    CLASSES = "classes"


class Document(NamedTuple):
    role: DocumentRole
    path: str
    text: str


def coerce_role(value) -> DocumentRole:
    """Accept a DocumentRole, its value ("globals") or its name ("GLOBALS")."""
    if isinstance(value, DocumentRole):
        return value
    text = str(value).strip().lower()
    for role in DocumentRole:
        if text == role.value:
            return role
    raise ValueError(f"Invalid document role '{value}'. Must be one of: {[r.value for r in DocumentRole]}")


def role_for_path(path: str) -> DocumentRole:
    """Pick the parsing role from a file name.

    Example:
        >>> role_for_path("docs/globals.md")
        <DocumentRole.GLOBALS: 'globals'>
        >>> role_for_path("docs/classes/player.md")
        <DocumentRole.CLASSES: 'classes'>
    """
    stem = PurePosixPath(str(path).replace("\\", "/")).stem
    if stem.lower() == DocumentRole.GLOBALS.value:
        return DocumentRole.GLOBALS
    return DocumentRole.CLASSES


class DocumentSource:
    """Base class for document sources."""

    def documents(self) -> Iterator[Document]:
        raise NotImplementedError

    def describe(self) -> str:
        """Short human-readable origin, stored with the built catalog."""
        return type(self).__name__

    def load_all(self) -> List[Document]:
        """Fetch every document up front.

        Raises:
            DocumentSourceError: If any document cannot be read
        """
        return list(self.documents())


class StaticDocumentSource(DocumentSource):
    """In-memory source over an existing sequence of documents."""

    def __init__(self, documents: Iterable[Document], name: str = "memory"):
        self._documents = [Document(coerce_role(role), path, text) for role, path, text in documents]
        self.name = name

    def documents(self) -> Iterator[Document]:
        yield from self._documents

    def describe(self) -> str:
        return self.name
