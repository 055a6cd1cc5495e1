"""
Catalog builder for API documentation.

Runs one build cycle (fetch documents, parse, publish) and keeps the
current catalog generation:
- The new catalog replaces the old one only after the whole run succeeded
- catalog.json is written next to the previous one and swapped in atomically
- Hard failures are returned as a BuildResult, the previous catalog stays
- Published catalogs are frozen and never change afterwards
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from docsource import DocumentSource, DocumentSourceError

from .markdown_parser import ApiCatalogError, parse
from .models import ApiCatalog, ClassDescriptor, FunctionDescriptor

logger = logging.getLogger(__name__)

CATALOG_VERSION = "1.0"


@dataclass
class BuildResult:
    """Outcome of one build run."""
    catalog: Optional[ApiCatalog] = None
    error: Optional[Exception] = None
    stats: Dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.catalog is not None


class CatalogBuilder:
    """Builds, publishes and queries the API catalog."""

    def __init__(self, catalog_dir: Optional[Path] = None, max_workers: Optional[int] = None):
        """Initialize catalog builder.

        Args:
            catalog_dir: Directory for catalog.json (None keeps the catalog in memory only)
            max_workers: Thread pool size for parsing documents
        """
        self.catalog_dir = Path(catalog_dir) if catalog_dir is not None else None
        self.catalog_file = self.catalog_dir / "catalog.json" if self.catalog_dir else None
        self.max_workers = max_workers

        self._lock = threading.Lock()
        self._catalog: Optional[ApiCatalog] = None
        self.generation = 0

    @property
    def catalog(self) -> Optional[ApiCatalog]:
        """Current published catalog, or None before the first build.

        Published catalogs are frozen: merge/update raise FrozenCatalogError.
        """
        return self._catalog

    def build(self, source: DocumentSource) -> BuildResult:
        """Run a full build from a document source.

        Each call starts from an empty catalog, so a failed run can simply
        be retried.

        Args:
            source: Document source to read

        Returns:
            BuildResult; on failure ``error`` is set and the current
            catalog is left unchanged

        Example:
            >>> builder = CatalogBuilder(Path("output/api_catalog"))
            >>> result = builder.build(LocalDocumentSource(Path("docs")))
            >>> result.stats["classes_count"]
            12
        """
        logger.info(f"Building API catalog from {source.describe()}")

        try:
            documents = source.load_all()
            catalog = parse(documents, max_workers=self.max_workers)
        except (DocumentSourceError, ApiCatalogError) as exc:
            logger.error(f"Catalog build failed: {exc}")
            return BuildResult(error=exc)

        stats = self._build_stats(catalog, len(documents), source)

        # Save first so the published generation always matches catalog.json
        if self.catalog_file is not None:
            try:
                self._save_catalog(catalog, stats)
            except OSError as exc:
                logger.error(f"Failed to save catalog to {self.catalog_file}: {exc}")
                return BuildResult(error=exc)

        catalog.freeze()
        self._publish(catalog)

        return BuildResult(catalog=catalog, stats=stats)

    def _publish(self, catalog: ApiCatalog) -> None:
        with self._lock:
            self._catalog = catalog
            self.generation += 1
        logger.debug(f"Published catalog generation {self.generation}")

    def _build_stats(self, catalog: ApiCatalog, documents_count: int, source: DocumentSource) -> Dict:
        return {
            "source": source.describe(),
            "documents_count": documents_count,
            "globals_count": len(catalog.globals),
            "classes_count": len(catalog.classes),
            "methods_count": catalog.method_count(),
            "properties_count": sum(len(c.properties) for c in catalog.classes.values()),
            "timestamp": datetime.now().isoformat(),
        }

    def _save_catalog(self, catalog: ApiCatalog, stats: Dict) -> None:
        """Write catalog.json through a temporary file."""
        self.catalog_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "version": CATALOG_VERSION,
            "created_at": datetime.now().isoformat(),
            "source": stats.get("source"),
            "stats": stats,
            **catalog.to_dict(),
        }

        tmp_file = self.catalog_dir / (self.catalog_file.name + ".tmp")
        try:
            tmp_file.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
            os.replace(tmp_file, self.catalog_file)
        finally:
            tmp_file.unlink(missing_ok=True)
        logger.info(f"Saved catalog to {self.catalog_file}")

    def load(self) -> ApiCatalog:
        """Load catalog.json and publish it as the current catalog.

        Raises:
            FileNotFoundError: If no catalog file exists
        """
        if self.catalog_file is None or not self.catalog_file.exists():
            raise FileNotFoundError("Catalog not found. Build catalog first.")

        data = json.loads(self.catalog_file.read_text(encoding='utf-8'))
        catalog = ApiCatalog.from_dict(data)
        catalog.freeze()
        self._publish(catalog)
        return catalog

    def _require_catalog(self) -> ApiCatalog:
        catalog = self._catalog
        if catalog is None:
            raise ApiCatalogError("Catalog not built yet. Build or load the catalog first.")
        return catalog

    def get_global(self, name: str) -> FunctionDescriptor:
        """Get a global function by name.

        Raises:
            KeyError: If the function is not in the catalog
        """
        function = self._require_catalog().get_global(name)
        if function is None:
            raise KeyError(f"Global '{name}' not found in catalog")
        return function

    def get_class(self, name: str) -> ClassDescriptor:
        """Get a class by name.

        Raises:
            KeyError: If the class is not in the catalog
        """
        cls = self._require_catalog().get_class(name)
        if cls is None:
            raise KeyError(f"Class '{name}' not found in catalog")
        return cls

    def search(self, prefix: str = "", kind: Optional[str] = None) -> List[str]:
        """Search names by prefix in the current catalog (empty before the first build)."""
        catalog = self._catalog
        if catalog is None:
            return []
        return catalog.search(prefix, kind=kind)
