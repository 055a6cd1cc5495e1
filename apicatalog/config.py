"""
Configuration for the API catalog builder.

Values come from environment variables, optionally loaded from a .env
file in the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/Nixer1337/nixware-cs2-docs/main/docs"
DEFAULT_FILES = ("globals.md", "classes.md")
DEFAULT_TIMEOUT = 30.0
DEFAULT_CATALOG_DIR = Path("output") / "api_catalog"


def _split_list(value: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    files: Tuple[str, ...] = DEFAULT_FILES
    timeout: float = DEFAULT_TIMEOUT
    docs_dir: Optional[Path] = None
    catalog_dir: Path = DEFAULT_CATALOG_DIR
    workers: int = 1
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> Settings:
        """Read settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        docs_dir = env.get("API_DOCS_DIR", "").strip()

        return cls(
            base_url=env.get("API_DOCS_BASE_URL", DEFAULT_BASE_URL),
            files=_split_list(env.get("API_DOCS_FILES", "")) or DEFAULT_FILES,
            timeout=float(env.get("API_DOCS_TIMEOUT", DEFAULT_TIMEOUT)),
            docs_dir=Path(docs_dir) if docs_dir else None,
            catalog_dir=Path(env.get("API_CATALOG_DIR", str(DEFAULT_CATALOG_DIR))),
            workers=max(1, int(env.get("API_CATALOG_WORKERS", "1"))),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
