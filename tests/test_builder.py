"""Tests for catalog building, publishing and persistence."""

import json
from unittest.mock import patch

import pytest

from apicatalog import (
    ApiCatalog,
    ApiCatalogError,
    CatalogBuilder,
    ClassDescriptor,
    FrozenCatalogError,
    NoDocumentsError,
)
from docsource import DocumentSourceError, LocalDocumentSource, StaticDocumentSource


class FailingSource(StaticDocumentSource):
    def documents(self):
        raise DocumentSourceError("network down")


@pytest.fixture
def builder(tmp_path):
    return CatalogBuilder(tmp_path / "catalog")


class TestBuild:
    def test_build_from_directory(self, builder, docs_dir):
        result = builder.build(LocalDocumentSource(docs_dir))

        assert result.succeeded
        assert result.stats["documents_count"] == 3
        assert result.stats["globals_count"] == 1
        assert result.stats["classes_count"] == 2
        assert result.stats["methods_count"] == 2
        assert builder.catalog is result.catalog
        assert builder.generation == 1

    def test_writes_catalog_json(self, builder, docs_dir):
        builder.build(LocalDocumentSource(docs_dir))

        data = json.loads(builder.catalog_file.read_text(encoding="utf-8"))
        assert data["version"] == "1.0"
        assert data["source"] == str(docs_dir)
        assert data["globals"]["Sleep"]["returnType"] == "nil"
        assert data["classes"]["Player"]["methods"][0]["name"] == "GetHealth"
        assert not (builder.catalog_dir / "catalog.json.tmp").exists()

    def test_in_memory_only(self, docs_dir):
        builder = CatalogBuilder()
        result = builder.build(LocalDocumentSource(docs_dir))
        assert result.succeeded
        assert builder.catalog_file is None

    def test_each_build_is_fresh(self, builder):
        builder.build(StaticDocumentSource([("classes", "a.md", "# A\n## run\n")]))
        builder.build(StaticDocumentSource([("classes", "b.md", "# B\n## run\n")]))

        assert list(builder.catalog.classes) == ["B"]
        assert builder.generation == 2

    def test_parallel_build(self, docs_dir, tmp_path):
        sequential = CatalogBuilder().build(LocalDocumentSource(docs_dir))
        threaded = CatalogBuilder(max_workers=3).build(LocalDocumentSource(docs_dir))
        assert sequential.catalog == threaded.catalog


class TestFailures:
    def test_source_failure_keeps_previous_catalog(self, builder, docs_dir):
        first = builder.build(LocalDocumentSource(docs_dir))

        result = builder.build(FailingSource([]))

        assert not result.succeeded
        assert isinstance(result.error, DocumentSourceError)
        assert result.catalog is None
        assert builder.catalog is first.catalog
        assert builder.generation == 1

    def test_empty_source(self, builder):
        result = builder.build(StaticDocumentSource([]))
        assert isinstance(result.error, NoDocumentsError)
        assert builder.catalog is None
        assert not builder.catalog_file.exists()

    def test_retry_after_failure(self, builder, docs_dir):
        assert not builder.build(FailingSource([])).succeeded
        assert builder.build(LocalDocumentSource(docs_dir)).succeeded

    def test_unwritable_catalog_dir(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        builder = CatalogBuilder(blocker / "catalog")

        result = builder.build(StaticDocumentSource([("classes", "a.md", "# A\n## run\n")]))

        assert not result.succeeded
        assert isinstance(result.error, OSError)
        assert builder.catalog is None
        assert builder.generation == 0

    def test_failed_replace_keeps_previous_generation(self, builder, docs_dir):
        first = builder.build(LocalDocumentSource(docs_dir))
        saved = builder.catalog_file.read_text(encoding="utf-8")

        with patch("apicatalog.builder.os.replace", side_effect=OSError("disk full")):
            result = builder.build(StaticDocumentSource([("classes", "a.md", "# A\n")]))

        assert not result.succeeded
        assert builder.catalog is first.catalog
        assert builder.generation == 1
        assert builder.catalog_file.read_text(encoding="utf-8") == saved
        assert not (builder.catalog_dir / "catalog.json.tmp").exists()


class TestFrozenPublish:
    def test_published_catalog_is_frozen(self, builder, docs_dir):
        catalog = builder.build(LocalDocumentSource(docs_dir)).catalog

        assert catalog.frozen
        with pytest.raises(FrozenCatalogError):
            catalog.merge("Extra", ClassDescriptor(name="Extra"))
        with pytest.raises(FrozenCatalogError):
            catalog.update(ApiCatalog())
        assert "Extra" not in builder.catalog.classes

    def test_loaded_catalog_is_frozen(self, builder, docs_dir):
        builder.build(LocalDocumentSource(docs_dir))
        assert CatalogBuilder(builder.catalog_dir).load().frozen


class TestQueries:
    def test_lookups(self, builder, docs_dir):
        builder.build(LocalDocumentSource(docs_dir))

        assert builder.get_global("Sleep").parameters[0].name == "ms"
        assert builder.get_class("Vector").methods[0].name == "Length"
        with pytest.raises(KeyError):
            builder.get_class("Missing")
        with pytest.raises(KeyError):
            builder.get_global("Missing")

    def test_search(self, builder, docs_dir):
        assert builder.search("Get") == []
        builder.build(LocalDocumentSource(docs_dir))
        assert builder.search("Get") == ["Player.GetHealth"]

    def test_lookup_before_build(self, builder):
        with pytest.raises(ApiCatalogError):
            builder.get_class("Player")

    def test_load_saved_catalog(self, builder, docs_dir, tmp_path):
        built = builder.build(LocalDocumentSource(docs_dir)).catalog

        reloaded = CatalogBuilder(builder.catalog_dir)
        assert reloaded.load() == built
        assert reloaded.get_class("Player").methods[0].return_type == "number"

    def test_load_missing(self, builder):
        with pytest.raises(FileNotFoundError):
            builder.load()
