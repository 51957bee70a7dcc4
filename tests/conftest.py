"""
Shared test fixtures for the drawer search test suite.

Provides temporary database and settings files that use real file I/O
(no mocking of the filesystem), plus a registry seeded with the
built-in providers.
"""

import sqlite3

import pytest
import toml

from drawer.search.matching import Candidate
from drawer.search.providers import default_definitions
from drawer.search.registry import ProviderRegistry


@pytest.fixture
def tmp_db(tmp_path):
    """Create a real SQLite database with RecentsService-compatible schema."""
    db_path = tmp_path / "recents.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute("""
        CREATE TABLE IF NOT EXISTS item_stats (
            item_id TEXT PRIMARY KEY,
            launch_count INTEGER DEFAULT 0,
            last_launch INTEGER,
            created_at INTEGER
        )
    """)
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {"max_results": 3, "show_recent_apps": True, "max_recent_apps": 2},
        "web_search": {"engine": "duckduckgo"},
        "providers": {"youtube": {"enabled": False}},
        "prefixes": {"web": ["s", "?"], "files": ["f", "م"]},
        "recents": {"db_path": str(tmp_path / "recents.db")},
    }
    settings_path.write_text(toml.dumps(data), encoding="utf-8")
    return settings_path


@pytest.fixture
def registry():
    """Registry with web (s), contacts (c), youtube (y) and files (f)."""
    return ProviderRegistry(default_definitions())


@pytest.fixture
def apps():
    """Installed apps in a fixed, deliberately unsorted order."""
    names = [
        "Bitmap Converter",
        "Calculator",
        "Google Maps",
        "MapMyRun",
        "Maps",
        "Call of Duty",
        "Settings",
    ]
    return [Candidate(item_id=f"app.{n.lower().replace(' ', '')}", name=n) for n in names]
