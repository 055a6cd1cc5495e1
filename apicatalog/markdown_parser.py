"""
Markdown API parser.

Turns API documentation markdown into catalog descriptors with a
line-oriented state machine. Two modes, chosen by the document role:

Class documents:
    # Player                    - opens a class
    Represents a player entity.
    ## GetHealth                - opens a method of the current class
    Returns the player's current health.
    Parameters:                 - parameter list follows
    - index (number) - slot index
    Returns: number             - return type
    Properties:                 - property list of the current class
    - name (string) - display name

Globals documents:
    ## Sleep                    - opens a global function
    (same body syntax as a method)

Anything that does not fit is absorbed as description text or ignored;
no single line can abort a run.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from docsource import Document, DocumentRole, DocumentSource, coerce_role

from .models import ApiCatalog, ClassDescriptor, FunctionDescriptor, MethodDescriptor
from .parameter_parser import parse_parameter, parse_property

logger = logging.getLogger(__name__)

CLASS_PREFIX = "# "
MEMBER_PREFIX = "## "
LIST_ITEM_PREFIX = "- "
PARAMETERS_MARKER = "parameters:"
PROPERTIES_MARKER = "properties:"
RETURNS_MARKER = "returns:"


class ApiCatalogError(RuntimeError):
    """Base exception for hard catalog build failures."""
    pass


class NoDocumentsError(ApiCatalogError):
    """Raised when a parse run is given no documents at all."""
    pass


class ParserState(Enum):
    SEEKING_CLASS = "seeking_class"
    IN_CLASS_DESCRIPTION = "in_class_description"
    IN_METHOD_DESCRIPTION = "in_method_description"
    IN_PARAMETERS = "in_parameters"
    IN_RETURNS = "in_returns"
    IN_PROPERTIES = "in_properties"


DESCRIPTION_STATES = (ParserState.IN_CLASS_DESCRIPTION, ParserState.IN_METHOD_DESCRIPTION)


@dataclass
class DocumentResult:
    """Descriptors parsed from one document, in source order."""
    role: DocumentRole
    path: Optional[str] = None
    functions: List[FunctionDescriptor] = field(default_factory=list)
    classes: List[ClassDescriptor] = field(default_factory=list)
    skipped_lines: int = 0

    def merge_into(self, catalog: ApiCatalog) -> None:
        for function in self.functions:
            catalog.merge_global(function.name, function)
        for cls in self.classes:
            catalog.merge_class(cls.name, cls)


class _DocumentParser:
    """State for a single document. Never shared between documents."""

    def __init__(self, role: DocumentRole, path: Optional[str] = None):
        self.role = role
        self.result = DocumentResult(role=role, path=path)
        self.state = ParserState.SEEKING_CLASS
        self.current_class: Optional[ClassDescriptor] = None
        self.current_method: Optional[MethodDescriptor] = None
        self.buffer: List[str] = []

    @property
    def _where(self) -> str:
        return self.result.path or "<document>"

    def feed(self, raw_line: str) -> None:
        line = raw_line.strip()
        lowered = line.lower()

        if line.startswith(CLASS_PREFIX):
            self._open_class(line[len(CLASS_PREFIX):].strip())
        elif line.startswith(MEMBER_PREFIX):
            self._open_method(line[len(MEMBER_PREFIX):].strip())
        elif lowered == PARAMETERS_MARKER:
            self._enter_section(ParserState.IN_PARAMETERS)
        elif lowered == PROPERTIES_MARKER:
            self._enter_section(ParserState.IN_PROPERTIES)
        elif lowered.startswith(RETURNS_MARKER):
            self._enter_section(ParserState.IN_RETURNS)
            if self.current_method is not None:
                self.current_method.return_type = line[len(RETURNS_MARKER):].strip()
        elif line.startswith(LIST_ITEM_PREFIX) and self.state is ParserState.IN_PARAMETERS:
            self._add_parameter(line)
        elif line.startswith(LIST_ITEM_PREFIX) and self.state is ParserState.IN_PROPERTIES:
            self._add_property(line)
        elif line and self.state in DESCRIPTION_STATES:
            self.buffer.append(line + "\n")

    def finish(self) -> DocumentResult:
        self._commit_method()
        self._commit_class()
        return self.result

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _open_class(self, name: str) -> None:
        self._commit_method()
        self._commit_class()

        if self.role is DocumentRole.GLOBALS:
            # Title heading of a globals document; its prose is not kept
            self.state = ParserState.SEEKING_CLASS
        else:
            self.current_class = ClassDescriptor(name=name)
            self.state = ParserState.IN_CLASS_DESCRIPTION
        self.buffer = []

    def _open_method(self, name: str) -> None:
        self._commit_method()
        self.current_method = MethodDescriptor(name=name)
        self.state = ParserState.IN_METHOD_DESCRIPTION
        self.buffer = []

    def _enter_section(self, state: ParserState) -> None:
        self._flush_description()
        self.state = state

    def _flush_description(self) -> None:
        if self.state is ParserState.IN_METHOD_DESCRIPTION and self.current_method is not None:
            self.current_method.description = "".join(self.buffer).strip()
        self.buffer = []

    def _add_parameter(self, line: str) -> None:
        param = parse_parameter(line)
        if param is None or self.current_method is None:
            logger.debug(f"{self._where}: skipped parameter line {line!r}")
            self.result.skipped_lines += 1
            return
        self.current_method.parameters.append(param)

    def _add_property(self, line: str) -> None:
        prop = parse_property(line)
        if prop is None or self.current_class is None:
            logger.debug(f"{self._where}: skipped property line {line!r}")
            self.result.skipped_lines += 1
            return
        self.current_class.properties.append(prop)

    def _commit_method(self) -> None:
        method = self.current_method
        if method is None:
            return

        self._flush_description()
        self.current_method = None

        if self.role is DocumentRole.GLOBALS:
            self.result.functions.append(method)
        elif self.current_class is not None:
            self.current_class.methods.append(method)
        else:
            logger.debug(f"{self._where}: dropped method '{method.name}' outside of any class")

    def _commit_class(self) -> None:
        if self.current_class is not None:
            self.result.classes.append(self.current_class)
            self.current_class = None


def parse_document(text: str, role, path: Optional[str] = None) -> DocumentResult:
    """Parse one markdown document.

    Pure function of its input: all parser state lives for this call only.

    Args:
        text: Markdown content
        role: DocumentRole (or "globals" / "classes")
        path: Document path, used in log messages only

    Returns:
        DocumentResult with functions (globals mode) or classes (class mode)

    Example:
        >>> result = parse_document("## Sleep\\nPauses execution.\\nReturns: nil", "globals")
        >>> result.functions[0].return_type
        'nil'
    """
    parser = _DocumentParser(coerce_role(role), path)
    # Only "\n" ends a line; feed() strips any trailing "\r"
    for line in text.split("\n"):
        parser.feed(line)
    return parser.finish()


def _coerce_document(item) -> Document:
    if isinstance(item, Document):
        return Document(coerce_role(item.role), item.path, item.text)
    role, path, text = item
    return Document(coerce_role(role), path, text)


def parse_all(documents: Sequence[Document], max_workers: Optional[int] = None) -> List[DocumentResult]:
    """Parse documents independently, keeping document order in the output."""
    if max_workers and max_workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(lambda d: parse_document(d.text, d.role, d.path), documents))
    return [parse_document(d.text, d.role, d.path) for d in documents]


def parse(documents: Iterable, max_workers: Optional[int] = None) -> ApiCatalog:
    """Build a fresh catalog from a sequence of documents.

    Args:
        documents: Document records or (role, path, text) tuples
        max_workers: Parse documents on a thread pool of this size

    Returns:
        New ApiCatalog, merged in document order (last write wins)

    Raises:
        NoDocumentsError: If there are no documents
        DocumentSourceError: If the documents iterable fails while reading
    """
    docs = [_coerce_document(item) for item in documents]
    if not docs:
        raise NoDocumentsError("No documentation documents to parse")

    catalog = ApiCatalog()
    for result in parse_all(docs, max_workers):
        result.merge_into(catalog)
        logger.debug(
            f"{result.path or '<document>'}: {len(result.functions)} functions, "
            f"{len(result.classes)} classes, {result.skipped_lines} skipped lines"
        )

    logger.info(
        f"Parsed {len(docs)} documents: {len(catalog.globals)} globals, "
        f"{len(catalog.classes)} classes, {catalog.method_count()} methods"
    )
    return catalog


def parse_source(source: DocumentSource, max_workers: Optional[int] = None) -> ApiCatalog:
    """Fetch every document from a source, then parse them.

    Raises:
        DocumentSourceError: If the source cannot supply its documents
        NoDocumentsError: If the source is empty
    """
    return parse(source.load_all(), max_workers=max_workers)
