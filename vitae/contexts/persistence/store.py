"""
Persistent SQLite table store.

Provides the table-style backend the HTTP handlers and the template catalog talk
to: resume snapshots, template reference data, AI suggestions and their feedback.
JSON-valued columns are stored as text and decoded on the way out.
"""

import json
import os
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from dotenv import load_dotenv

from vitae.contexts.persistence.logger import _log_debug, _log_error
from vitae.utils.timestamp import now_exact

load_dotenv()
DB_PATH = Path(os.getenv("VITAE_DB_PATH", "outs/vitae.db"))

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS resumes (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        template_id TEXT,
        content TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS resume_templates (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT,
        thumbnail_url TEXT,
        content TEXT NOT NULL,
        is_premium INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ai_suggestions (
        id TEXT PRIMARY KEY,
        content TEXT NOT NULL,
        category TEXT NOT NULL,
        context TEXT,
        rating INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ai_suggestions_feedback (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        suggestion_id TEXT NOT NULL,
        feedback INTEGER NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_resumes_user ON resumes(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_suggestions_category ON ai_suggestions(category)",
    "CREATE INDEX IF NOT EXISTS idx_feedback_suggestion ON ai_suggestions_feedback(suggestion_id)",
)

# Columns holding JSON text
JSON_COLUMNS = {"content"}


class PersistenceError(Exception):
    """
    Raised when a store operation fails.

    Attributes:
        message: Error description
        table: Table involved in the failed operation
        original_error: The underlying sqlite3 error
    """

    def __init__(self, message: str, table: str = None, original_error: Exception = None):
        self.message = message
        self.table = table
        self.original_error = original_error

        parts = [message]
        if table:
            parts.append(f"Table: {table}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


def _decode_row(row: sqlite3.Row) -> Dict[str, Any]:
    """Convert a row to a dict, decoding JSON columns."""
    record = dict(row)
    for column in JSON_COLUMNS & record.keys():
        if record[column] is not None:
            record[column] = json.loads(record[column])
    if "is_premium" in record:
        record["is_premium"] = bool(record["is_premium"])
    return record


class ResumeStore:
    """
    SQLite store for resumes, templates, suggestions and suggestion feedback.

    Each call opens its own connection, so one store can be shared by request
    handlers running on different threads. Inserts are single statements with no
    idempotency key: inserting the same payload twice creates two rows.
    """

    tables = ("resumes", "resume_templates", "ai_suggestions", "ai_suggestions_feedback")

    def __init__(self, db_path: Path = None):
        """
        Open (and create if needed) the store at db_path.

        Args:
            db_path: SQLite file path (default: VITAE_DB_PATH env var)

        Raises:
            PersistenceError: If the file or its directory cannot be created
        """
        self.db_path = Path(db_path) if db_path is not None else DB_PATH
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError("Could not open database", original_error=e) from e

        with self._connection() as conn:
            for statement in SCHEMA:
                conn.execute(statement)

    @contextmanager
    def _connection(self, table: str = None) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and always closes."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise PersistenceError("Could not open database", table, e) from e

        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            _log_error(f"Database error on {table or 'schema'}: {e}")
            raise PersistenceError("Database operation failed", table, e) from e
        finally:
            conn.close()

    def query(self, sql: str, params: tuple = (), table: str = None) -> List[Dict[str, Any]]:
        """
        Execute SQL query and return results as list of dicts.

        Args:
            sql: SQL query string
            params: Query parameters (for parameterized queries)
            table: Table name for error reporting

        Returns:
            List of dicts with column names as keys (JSON columns decoded)
        """
        with self._connection(table) as conn:
            cursor = conn.execute(sql, params)
            return [_decode_row(row) for row in cursor.fetchall()]

    def _insert(self, table: str, row: Dict[str, Any]) -> None:
        """Insert one row, encoding JSON columns."""
        values = {
            key: json.dumps(value) if key in JSON_COLUMNS else value for key, value in row.items()
        }
        columns = ", ".join(values)
        placeholders = ", ".join("?" * len(values))

        with self._connection(table) as conn:
            conn.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                tuple(values.values()),
            )
        _log_debug(f"Inserted row into {table}")

    # --- resumes ---

    def insert_resume(
        self,
        title: str,
        user_id: str,
        content: Dict[str, Any],
        template_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Insert a resume snapshot.

        Args:
            title: Resume title
            user_id: Owner identifier (real or anonymous)
            content: Snapshot envelope (stored as JSON)
            template_id: Template used for the snapshot, if any

        Returns:
            The inserted row
        """
        timestamp = now_exact()
        row = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "title": title,
            "template_id": template_id,
            "content": content,
            "created_at": timestamp,
            "updated_at": timestamp,
        }
        self._insert("resumes", row)
        return row

    def get_resume(self, resume_id: str) -> Optional[Dict[str, Any]]:
        rows = self.query("SELECT * FROM resumes WHERE id = ?", (resume_id,), "resumes")
        return rows[0] if rows else None

    def list_resumes(self, user_id: str = None) -> List[Dict[str, Any]]:
        """List resumes (optionally for one user), newest first."""
        if user_id is None:
            return self.query("SELECT * FROM resumes ORDER BY created_at DESC", table="resumes")
        return self.query(
            "SELECT * FROM resumes WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
            "resumes",
        )

    # --- resume_templates ---

    def upsert_template(self, template: Dict[str, Any]) -> None:
        """
        Insert or replace a template row.

        Args:
            template: Dict with id, name, description, thumbnail_url, content, is_premium
                      (created_at/updated_at default to now)
        """
        timestamp = now_exact()
        values = (
            template["id"],
            template["name"],
            template.get("description", ""),
            template.get("thumbnail_url", ""),
            json.dumps(template["content"]),
            int(bool(template.get("is_premium", False))),
            template.get("created_at") or timestamp,
            template.get("updated_at") or timestamp,
        )
        with self._connection("resume_templates") as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO resume_templates (
                    id, name, description, thumbnail_url, content, is_premium,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                values,
            )

    def list_templates(self) -> List[Dict[str, Any]]:
        """All templates, newest first."""
        return self.query(
            "SELECT * FROM resume_templates ORDER BY created_at DESC", table="resume_templates"
        )

    def get_template(self, template_id: str) -> Optional[Dict[str, Any]]:
        rows = self.query(
            "SELECT * FROM resume_templates WHERE id = ?", (template_id,), "resume_templates"
        )
        return rows[0] if rows else None

    # --- ai_suggestions ---

    def insert_suggestion(
        self, content: str, category: str, context: Optional[str] = None
    ) -> Dict[str, Any]:
        """Insert a generated suggestion with a zero rating and return the row."""
        row = {
            "id": str(uuid.uuid4()),
            "content": content,
            "category": category,
            "context": context,
            "rating": 0,
            "created_at": now_exact(),
        }
        self._insert("ai_suggestions", row)
        return row

    def list_suggestions(self, category: str = None) -> List[Dict[str, Any]]:
        if category is None:
            return self.query(
                "SELECT * FROM ai_suggestions ORDER BY created_at DESC", table="ai_suggestions"
            )
        return self.query(
            "SELECT * FROM ai_suggestions WHERE category = ? ORDER BY created_at DESC",
            (category,),
            "ai_suggestions",
        )

    # --- ai_suggestions_feedback ---

    def insert_feedback(self, suggestion_id: str, feedback: int) -> Dict[str, Any]:
        """
        Record a signed rating adjustment for a suggestion.

        The suggestion id is not checked against ai_suggestions.
        """
        row = {"suggestion_id": suggestion_id, "feedback": feedback, "created_at": now_exact()}
        with self._connection("ai_suggestions_feedback") as conn:
            cursor = conn.execute(
                """
                INSERT INTO ai_suggestions_feedback (suggestion_id, feedback, created_at)
                VALUES (?, ?, ?)
                """,
                tuple(row.values()),
            )
            row["id"] = cursor.lastrowid
        return row

    def suggestion_rating(self, suggestion_id: str) -> int:
        """Sum of all feedback recorded against a suggestion id."""
        rows = self.query(
            "SELECT COALESCE(SUM(feedback), 0) AS rating FROM ai_suggestions_feedback "
            "WHERE suggestion_id = ?",
            (suggestion_id,),
            "ai_suggestions_feedback",
        )
        return rows[0]["rating"]
