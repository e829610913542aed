"""
DuckDB history store for doc-assist-ai.

Keeps the append-only list of completed translations and an event log.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict
from pathlib import Path
from typing import Any

import duckdb

from doc_assist_ai.models import Highlight, HistoryItem, LocationInfo, OfficialDocInfo


class HistoryStore:
    """DuckDB database wrapper for translation history."""

    _SCHEMA = """
    CREATE SEQUENCE IF NOT EXISTS history_seq START 1;

    -- Completed translations, append-only
    CREATE TABLE IF NOT EXISTS history (
        id VARCHAR PRIMARY KEY,
        seq BIGINT NOT NULL,
        timestamp BIGINT NOT NULL,
        file_name VARCHAR NOT NULL,
        target_language VARCHAR NOT NULL,
        text TEXT,
        summary TEXT,
        action_items JSON,
        location JSON,
        official_info JSON,
        highlights JSON,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE SEQUENCE IF NOT EXISTS event_log_id_seq START 1;

    -- Session events for audit trail
    CREATE TABLE IF NOT EXISTS event_log (
        id INTEGER PRIMARY KEY,
        run_id VARCHAR NOT NULL,
        stage VARCHAR NOT NULL,
        level VARCHAR NOT NULL,
        message TEXT NOT NULL,
        context JSON,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_history_seq ON history(seq);
    CREATE INDEX IF NOT EXISTS idx_event_lookup ON event_log(run_id, stage, level);
    """

    def __init__(self, db_path: Path | str):
        """Initialize database connection."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: duckdb.DuckDBPyConnection | None = None
        self._run_id = str(uuid.uuid4())

    @property
    def conn(self) -> duckdb.DuckDBPyConnection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = duckdb.connect(str(self.db_path))
            self._conn.execute(self._SCHEMA)
        return self._conn

    @property
    def run_id(self) -> str:
        """Get current run ID."""
        return self._run_id

    def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ==================== History ====================

    def add(self, item: HistoryItem) -> str:
        """Append a history item."""
        self.conn.execute(
            """
            INSERT INTO history
            (id, seq, timestamp, file_name, target_language, text, summary,
             action_items, location, official_info, highlights)
            VALUES (?, nextval('history_seq'), ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                item.id,
                item.timestamp,
                item.file_name,
                item.target_language,
                item.text,
                item.summary,
                json.dumps(item.action_items),
                json.dumps(asdict(item.location)) if item.location else None,
                json.dumps(asdict(item.official_info)) if item.official_info else None,
                json.dumps(item.to_dict()["highlights"]),
            ],
        )
        return item.id

    def get(self, item_id: str) -> HistoryItem | None:
        """Get a history item by ID."""
        row = self.conn.execute(
            f"SELECT {self._COLUMNS} FROM history WHERE id = ?", [item_id]
        ).fetchone()
        return self._row_to_item(row) if row else None

    def list(self, limit: int = 50) -> list[HistoryItem]:
        """List history items, newest first."""
        rows = self.conn.execute(
            f"SELECT {self._COLUMNS} FROM history ORDER BY seq DESC LIMIT ?", [limit]
        ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def update_highlights(self, item_id: str, highlights: list[Highlight]) -> None:
        """Replace the highlights of a history item."""
        payload = [{**asdict(h), "category": h.category.value} for h in highlights]
        self.conn.execute(
            "UPDATE history SET highlights = ? WHERE id = ?",
            [json.dumps(payload), item_id],
        )

    def count(self) -> int:
        """Number of stored history items."""
        result = self.conn.execute("SELECT COUNT(*) FROM history").fetchone()
        return result[0] if result else 0

    _COLUMNS = (
        "id, timestamp, file_name, target_language, text, summary, "
        "action_items, location, official_info, highlights"
    )

    def _row_to_item(self, row: tuple) -> HistoryItem:
        """Convert database row to HistoryItem."""
        location = json.loads(row[7]) if row[7] else None
        official = json.loads(row[8]) if row[8] else None
        highlights = json.loads(row[9]) if row[9] else []
        return HistoryItem(
            id=row[0],
            timestamp=row[1],
            file_name=row[2],
            target_language=row[3],
            text=row[4] or "",
            summary=row[5] or "",
            action_items=json.loads(row[6]) if row[6] else [],
            location=LocationInfo.from_dict(location) if location else None,
            official_info=OfficialDocInfo.from_dict(official) if official else None,
            highlights=[Highlight.from_dict(h) for h in highlights],
        )

    # ==================== Logging ====================

    def log(
        self,
        level: str,
        stage: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Insert a log entry."""
        context_json = json.dumps(context) if context else None
        self.conn.execute(
            """
            INSERT INTO event_log (id, run_id, stage, level, message, context)
            VALUES (nextval('event_log_id_seq'), ?, ?, ?, ?, ?)
            """,
            [self._run_id, stage, level, message, context_json],
        )

    def get_logs(
        self,
        level: str | None = None,
        stage: str | None = None,
        limit: int = 100,
    ) -> list[dict]:
        """Newest audit entries first, optionally filtered by level and stage."""
        filters = {"level": level, "stage": stage}
        conditions = [f"{column} = ?" for column, value in filters.items() if value]
        params: list[Any] = [value for value in filters.values() if value]
        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        rows = self.conn.execute(
            f"""
            SELECT run_id, stage, level, message, context, created_at
            FROM event_log
            {where_clause}
            ORDER BY id DESC
            LIMIT ?
            """,
            [*params, limit],
        ).fetchall()
        return [self._row_to_log(row) for row in rows]

    def _row_to_log(self, row: tuple) -> dict[str, Any]:
        run_id, stage, level, message, context, created_at = row
        return {
            "run_id": run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "context": json.loads(context) if context else None,
            "created_at": created_at,
        }
