"""Tests for document storage and repository keys."""

import pytest

from grid_scout.repositories.analytics_repository import lol_repository, valorant_repository
from grid_scout.repositories.document_store import DuckDBDocumentStore, InMemoryDocumentStore


class TestInMemoryDocumentStore:
    def test_get_missing(self):
        assert InMemoryDocumentStore().get_json("nope") is None

    def test_put_then_get(self):
        store = InMemoryDocumentStore()
        store.put_json("a", {"x": [1, 2]})
        assert store.get_json("a") == {"x": [1, 2]}

    def test_returned_documents_are_copies(self):
        """Mutating a returned document does not change the stored one."""
        store = InMemoryDocumentStore({"a": {"x": 1}})
        store.get_json("a")["x"] = 2
        assert store.get_json("a") == {"x": 1}


class TestDuckDBDocumentStore:
    @pytest.fixture
    def store(self, tmp_path):
        return DuckDBDocumentStore(tmp_path / "nested" / "store.duckdb")

    def test_put_then_get(self, store):
        store.put_json("converted/series_1.json", {"teams": [], "games": []})
        assert store.get_json("converted/series_1.json") == {"teams": [], "games": []}
        assert store.get_json("converted/series_2.json") is None

    def test_put_replaces(self, store):
        """Writing the same key twice keeps the latest document."""
        store.put_json("k", {"v": 1})
        store.put_json("k", {"v": 2})
        assert store.get_json("k") == {"v": 2}

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "store.duckdb"
        DuckDBDocumentStore(path).put_json("k", {"v": 1})
        assert DuckDBDocumentStore(path).get_json("k") == {"v": 1}


class TestAnalyticsRepository:
    def test_keys_per_game(self):
        """Valorant documents are kept apart from League of Legends ones."""
        store = InMemoryDocumentStore()
        lol = lol_repository(store)
        val = valorant_repository(store)
        lol.put_converted("1", {"game": "lol"})
        val.put_converted("1", {"game": "val"})
        lol.put_analytics("1", {"seriesId": "1"})

        assert sorted(store.keys()) == [
            "analytics/series_1.json",
            "converted/series_1.json",
            "val/converted/series_1.json",
        ]
        assert lol.get_converted("1") == {"game": "lol"}
        assert val.get_converted("1") == {"game": "val"}
        assert val.get_analytics("1") is None
