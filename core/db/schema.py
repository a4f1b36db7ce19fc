"""
Schema helpers. Works on both Postgres and SQLite (ids are generated in Python).
"""
from __future__ import annotations

from core.db.base import get_conn

# Child tables first so TRUNCATE/DELETE order is safe.
TABLES = [
    "transcripts",
    "video_sessions",
    "wellness_recommendations",
    "lifestyle_questionnaires",
    "sessions",
    "users",
]


def init_db() -> None:
    """Create all tables if they don't exist."""
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS users(
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            user_type TEXT NOT NULL,
            email_verified INTEGER NOT NULL DEFAULT 0,
            email_verification_token TEXT UNIQUE,
            email_verification_expiry TEXT,
            password_reset_token TEXT UNIQUE,
            password_reset_expiry TEXT,
            created_at TEXT NOT NULL
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS sessions(
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            created_at TEXT NOT NULL,
            expires_at TEXT NOT NULL
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS lifestyle_questionnaires(
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            responses TEXT NOT NULL,
            submitted_at TEXT NOT NULL
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS wellness_recommendations(
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            questionnaire_id TEXT NOT NULL,
            recommendations TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS video_sessions(
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            video_url TEXT,
            sign_language_results TEXT,
            facial_expression_results TEXT,
            translation_results TEXT,
            created_at TEXT NOT NULL
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS transcripts(
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            video_session_id TEXT NOT NULL,
            content TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
        """
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_sessions_user ON sessions(user_id)")

    conn.commit()
    conn.close()


def clear_all() -> None:
    """Delete every row from every table (tests and local resets)."""
    conn = get_conn()
    cur = conn.cursor()
    for table in TABLES:
        cur.execute(f"DELETE FROM {table}")
    conn.commit()
    conn.close()


__all__ = ["TABLES", "init_db", "clear_all"]
