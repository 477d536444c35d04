"""Centralised settings for wikilinks.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("WIKILINKS_WORKSPACE", Path.home() / ".wikilinks_data")
        )
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the default SQLite database file."""
        return self.workspace_dir / "wikilinks.db"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    # ------------------------------------------------------------------
    # Dump decoding
    # ------------------------------------------------------------------
    read_chunk_size: int = field(
        default_factory=lambda: int(os.environ.get("READ_CHUNK_SIZE", "65536"))
    )
    max_links_per_page: int = field(
        default_factory=lambda: int(os.environ.get("MAX_LINKS_PER_PAGE", "15"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    progress_every: int = field(
        default_factory=lambda: int(os.environ.get("PROGRESS_EVERY", "10000"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "WARNING")
    )

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton, import this everywhere:
#   from wikilinks.config import settings
settings = Settings()
