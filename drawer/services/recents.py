"""
Recents Service - Track launched items and rank them by frecency.

Supplies the "recent items" list shown when the search field is empty.
Uses a Firefox-style frecency algorithm:
  frecency_score = launch_count * recency_weight

Where recency_weight depends on how recently the item was launched:
  - < 4 days: 100x multiplier
  - < 14 days: 70x multiplier
  - < 31 days: 50x multiplier
  - < 90 days: 30x multiplier
  - 90+ days: 10x multiplier
"""

import sqlite3
import time
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

DEFAULT_DB_PATH = Path.home() / ".local" / "share" / "drawer" / "recents.db"


class RecentsService:
    """
    Persist item launches and rank items by frecency.

    Methods:
        record_launch(item_id): Record a launch
        get_top_items(limit): Top N items by frecency score
        get_recent_ids(limit): Top N item ids, for the empty-query list
    """

    def __init__(self, db_path: Optional[Path] = None,
                 clock: Callable[[], float] = time.time):
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock

        # Persistent connection with WAL mode for better concurrency
        self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._init_database()
        logger.debug(f"RecentsService initialized with db at {self.db_path}")

    def _init_database(self):
        """Create database schema if it doesn't exist."""
        cursor = self._conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS item_stats (
                item_id TEXT PRIMARY KEY,
                launch_count INTEGER DEFAULT 0,
                last_launch INTEGER,
                created_at INTEGER
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_frecency
            ON item_stats(last_launch DESC, launch_count DESC)
        """)

        self._conn.commit()

    def record_launch(self, item_id: str) -> bool:
        """
        Record a launch of an item.

        Args:
            item_id: Stable identifier of the launched item

        Returns:
            True if the launch was stored, False on a database error
        """
        now = int(self._clock())

        try:
            self._conn.execute("""
                INSERT INTO item_stats (item_id, launch_count, last_launch, created_at)
                VALUES (?, 1, ?, ?)
                ON CONFLICT(item_id) DO UPDATE SET
                    launch_count = launch_count + 1,
                    last_launch = excluded.last_launch
            """, (item_id, now, now))
            self._conn.commit()
        except sqlite3.Error:
            logger.exception(f"Failed to record launch for {item_id}")
            return False

        logger.debug(f"Recorded launch for {item_id}")
        return True

    def get_top_items(self, limit: Optional[int] = 5, min_launches: int = 1) -> list[tuple[str, float, int, int]]:
        """
        Get items ranked by frecency score.

        Args:
            limit: Maximum number of items to return (None for all)
            min_launches: Minimum launch count to include an item

        Returns:
            List of tuples: (item_id, frecency_score, launch_count, last_launch)
            Sorted by frecency_score descending
        """
        cursor = self._conn.execute("""
            SELECT item_id, launch_count, last_launch
            FROM item_stats
            WHERE launch_count >= ?
            ORDER BY last_launch DESC, launch_count DESC
        """, (min_launches,))

        results = []
        for item_id, launch_count, last_launch in cursor.fetchall():
            score = self._calculate_frecency(launch_count, last_launch)
            results.append((item_id, score, launch_count, last_launch))

        # Stable sort keeps most recent first among equal scores
        results.sort(key=lambda x: x[1], reverse=True)

        return results[:limit]

    def get_recent_ids(self, limit: Optional[int] = 5) -> list[str]:
        return [item_id for item_id, *_ in self.get_top_items(limit)]

    def get_item_stats(self, item_id: str) -> tuple[int, int, int] | None:
        """
        Get statistics for a single item.

        Returns:
            Tuple of (launch_count, last_launch, created_at) or None if not found
        """
        cursor = self._conn.execute("""
            SELECT launch_count, last_launch, created_at
            FROM item_stats
            WHERE item_id = ?
        """, (item_id,))

        row = cursor.fetchone()
        return row if row else None

    def _calculate_frecency(self, launch_count: int, last_launch: int) -> float:
        age_days = (self._clock() - last_launch) / (24 * 3600)

        if age_days < 4:
            recency_weight = 100
        elif age_days < 14:
            recency_weight = 70
        elif age_days < 31:
            recency_weight = 50
        elif age_days < 90:
            recency_weight = 30
        else:
            recency_weight = 10

        return launch_count * recency_weight

    def get_total_launches(self) -> int:
        cursor = self._conn.execute("SELECT SUM(launch_count) FROM item_stats")
        result = cursor.fetchone()
        return result[0] if result[0] else 0

    def clear_stats(self, item_id: str | None = None) -> bool:
        """
        Clear usage statistics.

        Args:
            item_id: If provided, clear only this item's stats.
                     If None, clear all stats.

        Returns:
            True on success, False on a database error
        """
        try:
            if item_id:
                self._conn.execute("DELETE FROM item_stats WHERE item_id = ?", (item_id,))
            else:
                self._conn.execute("DELETE FROM item_stats")
            self._conn.commit()
        except sqlite3.Error:
            logger.exception(f"Failed to clear stats for {item_id or 'all items'}")
            return False

        return True

    def close(self) -> None:
        self._conn.close()
