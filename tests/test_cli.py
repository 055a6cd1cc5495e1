"""Tests for the build-api-catalog command."""

from apicatalog.cli import main
from apicatalog.config import DEFAULT_FILES, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.files == DEFAULT_FILES
        assert settings.docs_dir is None
        assert settings.workers == 1

    def test_from_environment(self, tmp_path):
        settings = Settings.from_env({
            "API_DOCS_BASE_URL": "https://docs.example/api",
            "API_DOCS_FILES": "globals.md, classes/player.md,",
            "API_DOCS_TIMEOUT": "2.5",
            "API_DOCS_DIR": str(tmp_path),
            "API_CATALOG_WORKERS": "4",
            "LOG_LEVEL": "debug",
        })
        assert settings.base_url == "https://docs.example/api"
        assert settings.files == ("globals.md", "classes/player.md")
        assert settings.timeout == 2.5
        assert settings.docs_dir == tmp_path
        assert settings.workers == 4
        assert settings.log_level == "DEBUG"


class TestMain:
    def test_build_from_docs_dir(self, docs_dir, tmp_path, capsys):
        catalog_dir = tmp_path / "out"
        code = main(["--docs-dir", str(docs_dir), "--catalog-dir", str(catalog_dir), "--query", "Get"])

        assert code == 0
        assert (catalog_dir / "catalog.json").exists()
        output = capsys.readouterr().out
        assert "CATALOG BUILD COMPLETE" in output
        assert "Player.GetHealth" in output

    def test_unwritable_catalog_dir_fails(self, docs_dir, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        code = main(["--docs-dir", str(docs_dir), "--catalog-dir", str(blocker / "out")])

        assert code == 1
        assert "Error" in capsys.readouterr().out

    def test_missing_docs_dir_fails(self, tmp_path, capsys):
        code = main(["--docs-dir", str(tmp_path / "missing"), "--catalog-dir", str(tmp_path / "out")])

        assert code == 1
        assert "Error" in capsys.readouterr().out
        assert not (tmp_path / "out" / "catalog.json").exists()
