"""
Tests for the RecentsService frecency ranking.

Uses a real SQLite database in a temp directory and a fake clock.
"""

import sqlite3

from drawer.services.recents import RecentsService

DAY = 24 * 3600
NOW = 1_700_000_000


class FakeClock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


def _make_service(db_path, clock=None):
    return RecentsService(db_path, clock=clock or FakeClock())


class TestRecordLaunch:

    def test_first_launch_creates_row(self, tmp_db):
        svc = _make_service(tmp_db)
        assert svc.record_launch("app.maps") is True
        count, last, created = svc.get_item_stats("app.maps")
        assert count == 1
        assert last == NOW
        assert created == NOW

    def test_repeat_launch_increments(self, tmp_db):
        clock = FakeClock()
        svc = _make_service(tmp_db, clock)
        svc.record_launch("app.maps")
        clock.now += 60
        svc.record_launch("app.maps")
        count, last, created = svc.get_item_stats("app.maps")
        assert count == 2
        assert last == NOW + 60
        assert created == NOW

    def test_total_launches(self, tmp_db):
        svc = _make_service(tmp_db)
        assert svc.get_total_launches() == 0
        svc.record_launch("a")
        svc.record_launch("a")
        svc.record_launch("b")
        assert svc.get_total_launches() == 3

    def test_persists_across_instances(self, tmp_db):
        svc = _make_service(tmp_db)
        svc.record_launch("app.maps")
        svc.close()
        assert _make_service(tmp_db).get_item_stats("app.maps")[0] == 1


class TestFrecency:

    def test_recency_weights(self, tmp_db):
        svc = _make_service(tmp_db)
        assert svc._calculate_frecency(1, NOW - 1 * DAY) == 100
        assert svc._calculate_frecency(1, NOW - 10 * DAY) == 70
        assert svc._calculate_frecency(1, NOW - 20 * DAY) == 50
        assert svc._calculate_frecency(1, NOW - 60 * DAY) == 30
        assert svc._calculate_frecency(1, NOW - 200 * DAY) == 10

    def test_recent_beats_frequent_but_old(self, tmp_db):
        clock = FakeClock(NOW - 100 * DAY)
        svc = _make_service(tmp_db, clock)
        for _ in range(5):
            svc.record_launch("old.frequent")  # 5 * 10 = 50
        clock.now = NOW
        svc.record_launch("new.once")  # 1 * 100 = 100

        top = svc.get_top_items(limit=2)
        assert [item_id for item_id, *_ in top] == ["new.once", "old.frequent"]
        assert top[0][1] == 100
        assert top[1][1] == 50

    def test_min_launches_filter(self, tmp_db):
        svc = _make_service(tmp_db)
        svc.record_launch("once")
        svc.record_launch("twice")
        svc.record_launch("twice")
        assert [i for i, *_ in svc.get_top_items(min_launches=2)] == ["twice"]

    def test_recent_ids_limit(self, tmp_db):
        svc = _make_service(tmp_db)
        for item_id in ["a", "b", "c"]:
            svc.record_launch(item_id)
        assert len(svc.get_recent_ids(limit=2)) == 2

    def test_recent_ids_without_limit(self, tmp_db):
        svc = _make_service(tmp_db)
        for i in range(8):
            svc.record_launch(f"item{i}")
        assert len(svc.get_recent_ids(limit=None)) == 8


class TestClearStats:

    def test_clear_single_item(self, tmp_db):
        svc = _make_service(tmp_db)
        svc.record_launch("a")
        svc.record_launch("b")
        assert svc.clear_stats("a") is True
        assert svc.get_item_stats("a") is None
        assert svc.get_item_stats("b") is not None

    def test_clear_all(self, tmp_db):
        svc = _make_service(tmp_db)
        svc.record_launch("a")
        svc.record_launch("b")
        svc.clear_stats()
        assert svc.get_total_launches() == 0

    def test_creates_schema_in_fresh_file(self, tmp_path):
        svc = _make_service(tmp_path / "nested" / "fresh.db")
        svc.record_launch("a")
        conn = sqlite3.connect(str(tmp_path / "nested" / "fresh.db"))
        rows = conn.execute("SELECT item_id FROM item_stats").fetchall()
        conn.close()
        assert rows == [("a",)]
