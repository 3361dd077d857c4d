"""Key-value JSON document storage."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

import duckdb

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Get/put of JSON documents by string key."""

    def get_json(self, key: str) -> Optional[dict]: ...

    def put_json(self, key: str, document: dict) -> None: ...


class InMemoryDocumentStore:
    """Dict-backed store, used by tests and one-off scripts."""

    def __init__(self, documents: Optional[dict[str, dict]] = None):
        self._documents: dict[str, str] = {}
        for key, document in (documents or {}).items():
            self.put_json(key, document)

    def get_json(self, key: str) -> Optional[dict]:
        body = self._documents.get(key)
        return json.loads(body) if body is not None else None

    def put_json(self, key: str, document: dict) -> None:
        # Stored serialized so callers never share mutable state with the store
        self._documents[key] = json.dumps(document)

    def keys(self) -> list[str]:
        return list(self._documents)


class DuckDBDocumentStore:
    """Documents persisted in a DuckDB table (one row per key)."""

    def __init__(self, database_path: str | Path):
        self._db_path = Path(database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with duckdb.connect(str(self._db_path)) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    key VARCHAR PRIMARY KEY,
                    body VARCHAR NOT NULL,
                    updated_at TIMESTAMP
                )
                """
            )
        logger.info(f"DuckDBDocumentStore: using {self._db_path}")

    def get_json(self, key: str) -> Optional[dict]:
        # Read-only connection per query - no locks held between calls
        with duckdb.connect(str(self._db_path), read_only=True) as conn:
            row = conn.execute("SELECT body FROM documents WHERE key = ?", [key]).fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    def put_json(self, key: str, document: dict) -> None:
        with duckdb.connect(str(self._db_path)) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO documents (key, body, updated_at) VALUES (?, ?, ?)",
                [key, json.dumps(document), datetime.now(timezone.utc).replace(tzinfo=None)],
            )
