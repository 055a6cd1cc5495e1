"""
API catalog for scripting API documentation.

This module provides functionality for:
- Parsing globals and class documentation markdown
- Parsing parameter and property list items
- Merging descriptors into a name-keyed catalog
- Building, saving and querying the catalog

Markdown format:
    # ClassName                   - class block (class documents)
    ## MemberName                 - method, or global function
    Free text description.
    Parameters:
    - name (type) - description   - "(optional)" marks optional
    Returns: type

Usage:
    from apicatalog import CatalogBuilder, parse
    from docsource import LocalDocumentSource

    # Build catalog from a docs directory
    builder = CatalogBuilder(Path("output/api_catalog"))
    result = builder.build(LocalDocumentSource(Path("docs")))

    # Query
    player = builder.get_class("Player")
    names = builder.search("Get", kind="method")
"""

from .models import (
    ApiCatalog,
    ClassDescriptor,
    FrozenCatalogError,
    FunctionDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
)
from .parameter_parser import parse_parameter, parse_property
from .markdown_parser import (
    ApiCatalogError,
    DocumentResult,
    NoDocumentsError,
    ParserState,
    parse,
    parse_document,
    parse_source,
)
from .builder import BuildResult, CatalogBuilder

__all__ = [
    "ApiCatalog",
    "ClassDescriptor",
    "FrozenCatalogError",
    "FunctionDescriptor",
    "MethodDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "parse_parameter",
    "parse_property",
    "ApiCatalogError",
    "DocumentResult",
    "NoDocumentsError",
    "ParserState",
    "parse",
    "parse_document",
    "parse_source",
    "BuildResult",
    "CatalogBuilder",
]

__version__ = "1.0.0"
