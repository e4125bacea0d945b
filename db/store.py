"""Per-user entity store backed by a single SQLite table of JSON documents."""

import json
import time
from typing import List, Optional

CATEGORIES = "categories"
TRANSACTIONS = "transactions"
GOALS = "goals"
LIMITS = "limits"

ENTITY_KINDS = (CATEGORIES, TRANSACTIONS, GOALS, LIMITS)


class EntityStore:
    """Generic keyed collection accessor.

    Documents are plain dicts carrying an "id" key. The store knows nothing
    about their contents; uniqueness and reference rules belong to the
    services built on top of it.

    Args:
        db_manager: Database manager instance for database operations.
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def list(self, user_id: str, kind: str) -> List[dict]:
        """Get every document of a kind for a user.

        Returns:
            List of documents in insertion order.
        """
        _check_kind(kind)
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT data FROM entities WHERE user_id = ? AND kind = ? ORDER BY seq",
                (user_id, kind),
            )
            return [json.loads(row[0]) for row in cursor.fetchall()]

    def get(self, user_id: str, kind: str, entity_id: str) -> Optional[dict]:
        """Get a single document by id.

        Returns:
            The document if found, None otherwise.
        """
        _check_kind(kind)
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT data FROM entities WHERE user_id = ? AND kind = ? AND entity_id = ?",
                (user_id, kind, entity_id),
            )
            row = cursor.fetchone()
            return json.loads(row[0]) if row else None

    def upsert(self, user_id: str, kind: str, document: dict) -> dict:
        """Insert a document if its id is unseen, else replace it in place.

        Args:
            user_id: Owner of the document.
            kind: Entity kind (one of ENTITY_KINDS).
            document: JSON-serializable dict with an "id" key.

        Returns:
            The stored document.
        """
        _check_kind(kind)
        entity_id = document["id"]
        with self.db_manager.connect() as conn:
            self._touch_collection(conn, user_id, kind)
            conn.execute(
                """
                INSERT INTO entities (user_id, kind, entity_id, data)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (user_id, kind, entity_id)
                DO UPDATE SET data = excluded.data, updated_at = CURRENT_TIMESTAMP
                """,
                (user_id, kind, entity_id, json.dumps(document, ensure_ascii=False)),
            )
            conn.commit()
        return document

    def delete(self, user_id: str, kind: str, entity_id: str) -> bool:
        """Delete a document by id.

        Returns:
            True if a document was deleted, False if not found.
        """
        _check_kind(kind)
        with self.db_manager.connect() as conn:
            self._touch_collection(conn, user_id, kind)
            cursor = conn.execute(
                "DELETE FROM entities WHERE user_id = ? AND kind = ? AND entity_id = ?",
                (user_id, kind, entity_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def has_collection(self, user_id: str, kind: str) -> bool:
        """Check whether the user's collection of this kind was ever written."""
        _check_kind(kind)
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT 1 FROM collections WHERE user_id = ? AND kind = ?",
                (user_id, kind),
            )
            return cursor.fetchone() is not None

    def next_id(self, user_id: str, kind: str) -> str:
        """Generate a fresh id: the current time in milliseconds.

        Bumped by one until it no longer collides with an existing id.
        """
        candidate = int(time.time() * 1000)
        while self.get(user_id, kind, str(candidate)) is not None:
            candidate += 1
        return str(candidate)

    @staticmethod
    def _touch_collection(conn, user_id: str, kind: str) -> None:
        conn.execute(
            "INSERT OR IGNORE INTO collections (user_id, kind) VALUES (?, ?)",
            (user_id, kind),
        )


def _check_kind(kind: str) -> None:
    if kind not in ENTITY_KINDS:
        raise ValueError(f"Unknown entity kind: {kind}")
