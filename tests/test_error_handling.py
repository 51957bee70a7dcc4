"""
Tests for error handling across services and the search core.

Verifies graceful degradation when things go wrong:
- Closed database connection
- Unknown prefixes and provider ids
- Malformed queries
"""

from drawer.search.matching import rank
from drawer.search.registry import ProviderRegistry
from drawer.search.router import parse_query
from drawer.search.session import SearchSession
from drawer.services.recents import RecentsService


class TestRecentsErrorHandling:
    """Test RecentsService handles database errors gracefully."""

    def test_record_launch_survives_closed_connection(self, tmp_db):
        svc = RecentsService(tmp_db)
        svc.close()
        # Should not raise; logs exception internally
        assert svc.record_launch("app.maps") is False

    def test_clear_stats_survives_closed_connection(self, tmp_db):
        svc = RecentsService(tmp_db)
        svc.record_launch("app.maps")
        svc.close()
        assert svc.clear_stats("app.maps") is False

    def test_get_item_stats_returns_none_for_missing(self, tmp_db):
        assert RecentsService(tmp_db).get_item_stats("nonexistent") is None


class TestAbsenceIsNotAnError:

    def test_empty_registry(self):
        registry = ProviderRegistry()
        assert registry.find_by_prefix("s") is None
        assert registry.find_by_id("web") is None
        assert registry.all_prefixes() == frozenset()
        assert parse_query("s cats", registry).provider is None

    def test_unknown_provider_implementation(self, registry, apps):
        # Registry knows "web" but the session has no implementation for it
        session = SearchSession(registry, candidates=apps)
        outcome = session.search("s cats")
        assert outcome.provider_id == "web"
        assert outcome.results == []


class TestMalformedQueries:

    def test_whitespace_query_ranks_everything(self, apps):
        assert rank("\t \n", apps) == apps

    def test_unicode_query(self, apps):
        assert rank("地图", apps) == []

    def test_prefix_only_input_with_trailing_newline(self, registry):
        parsed = parse_query("s\n", registry)
        assert parsed.provider is None
        assert parsed.pending is True
