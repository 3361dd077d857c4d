"""Storage keys for converted series and their analytics bundles."""

from typing import Optional

from grid_scout.repositories.document_store import DocumentStore


class AnalyticsRepository:
    """Reads and writes series documents under a game-specific key prefix.

    League of Legends documents live at the store root; Valorant documents
    are prefixed with ``val/``.
    """

    def __init__(self, store: DocumentStore, prefix: str = ""):
        self._store = store
        self._prefix = prefix

    def converted_key(self, series_id: str) -> str:
        return f"{self._prefix}converted/series_{series_id}.json"

    def analytics_key(self, series_id: str) -> str:
        return f"{self._prefix}analytics/series_{series_id}.json"

    def get_converted(self, series_id: str) -> Optional[dict]:
        return self._store.get_json(self.converted_key(series_id))

    def put_converted(self, series_id: str, document: dict) -> None:
        self._store.put_json(self.converted_key(series_id), document)

    def get_analytics(self, series_id: str) -> Optional[dict]:
        return self._store.get_json(self.analytics_key(series_id))

    def put_analytics(self, series_id: str, document: dict) -> None:
        self._store.put_json(self.analytics_key(series_id), document)


def lol_repository(store: DocumentStore) -> AnalyticsRepository:
    return AnalyticsRepository(store)


def valorant_repository(store: DocumentStore) -> AnalyticsRepository:
    return AnalyticsRepository(store, prefix="val/")
