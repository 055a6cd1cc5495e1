"""
Document sources for the API catalog.

Components:
- base: Document record, roles, source contract and in-memory source
- local: Documentation directory on disk
- remote: Documentation files fetched over HTTP
"""

from .base import (
    Document,
    DocumentRole,
    DocumentSource,
    DocumentSourceError,
    StaticDocumentSource,
    coerce_role,
    role_for_path,
)
from .local import LocalDocumentSource
from .remote import HttpDocumentSource

__all__ = [
    "Document",
    "DocumentRole",
    "DocumentSource",
    "DocumentSourceError",
    "StaticDocumentSource",
    "coerce_role",
    "role_for_path",
    "LocalDocumentSource",
    "HttpDocumentSource",
]
