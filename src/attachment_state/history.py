"""Interaction History Store - append-only per-entity log."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from attachment_state.models import InteractionRecord
from attachment_state.queries import (
    build_clear_interactions,
    build_entity_count_query,
    build_entity_history_query,
    build_entity_ids_query,
    build_insert_interaction,
)


class InteractionHistoryStore:
    """Ordered interaction records, one sequence per entity.

    The store does no aggregation; callers analyze what query() returns.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        # check_same_thread off: the engine serializes access with its own lock
        self.db = sqlite3.connect(db_path, check_same_thread=False)
        self.db.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path) as f:
            schema = f.read()
        self.db.executescript(schema)
        self.db.commit()

    def close(self) -> None:
        """Close database connection."""
        self.db.close()

    def __enter__(self) -> InteractionHistoryStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def append(self, entity_id: str, record: InteractionRecord) -> None:
        """Append a record to the entity's sequence.

        Args:
            entity_id: Which entity the record belongs to
            record: The interaction to store
        """
        self.db.execute(
            build_insert_interaction(),
            {
                "entity_id": entity_id,
                "dialogue_text": record.dialogue_text,
                "user_response": record.user_response,
                "timestamp": record.timestamp,
                "attachment_level": record.attachment_level_at_time,
            },
        )
        self.db.commit()

    def query(self, entity_id: str) -> list[InteractionRecord]:
        """Return the entity's full history, oldest first (empty if unseen)."""
        rows = self.db.execute(
            build_entity_history_query(), {"entity_id": entity_id}
        ).fetchall()

        return [
            InteractionRecord(
                entity_id=row["entity_id"],
                dialogue_text=row["dialogue_text"],
                user_response=row["user_response"],
                timestamp=row["timestamp"],
                attachment_level_at_time=row["attachment_level"],
            )
            for row in rows
        ]

    def count(self, entity_id: str) -> int:
        row = self.db.execute(
            build_entity_count_query(), {"entity_id": entity_id}
        ).fetchone()
        return row["n"]

    def entity_ids(self) -> list[str]:
        """List every entity with at least one record."""
        rows = self.db.execute(build_entity_ids_query()).fetchall()
        return [row["entity_id"] for row in rows]

    def clear(self) -> None:
        """Drop all records (full session teardown)."""
        self.db.execute(build_clear_interactions())
        self.db.commit()
