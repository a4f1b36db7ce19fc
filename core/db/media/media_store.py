"""
Video session and transcript store.
"""
from __future__ import annotations

import json
import uuid
from typing import Dict, List, Optional

from core.db.base import get_conn, utcnow

_RESULT_COLUMNS = ("sign_language_results", "facial_expression_results", "translation_results")


def _loads(value):
    return json.loads(value) if value else None


def _video_session_from_row(row: Dict) -> Dict:
    return {
        "id": row["id"],
        "userId": row["user_id"],
        "videoUrl": row["video_url"],
        "signLanguageResults": _loads(row["sign_language_results"]),
        "facialExpressionResults": _loads(row["facial_expression_results"]),
        "translationResults": _loads(row["translation_results"]),
        "createdAt": row["created_at"],
    }


def _transcript_from_row(row: Dict) -> Dict:
    return {
        "id": row["id"],
        "userId": row["user_id"],
        "videoSessionId": row["video_session_id"],
        "content": row["content"],
        "createdAt": row["created_at"],
    }


def create_video_session(*, user_id: str, video_url: str) -> Dict:
    session_id = uuid.uuid4().hex
    now = utcnow().isoformat()
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO video_sessions (id, user_id, video_url, created_at)
        VALUES (?, ?, ?, ?)
        """,
        (session_id, user_id, video_url, now),
    )
    conn.commit()
    conn.close()
    return get_video_session(session_id)


def get_video_session(session_id: str) -> Optional[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"SELECT id, user_id, video_url, {', '.join(_RESULT_COLUMNS)}, created_at FROM video_sessions WHERE id = ?",
        (session_id,),
    )
    row = cur.fetchone()
    conn.close()
    return _video_session_from_row(row) if row else None


def get_video_sessions_for_user(user_id: str) -> List[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        SELECT id, user_id, video_url, {', '.join(_RESULT_COLUMNS)}, created_at
        FROM video_sessions
        WHERE user_id = ?
        ORDER BY created_at DESC
        """,
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [_video_session_from_row(r) for r in rows]


def save_video_results(
    session_id: str,
    *,
    sign_language_results,
    facial_expression_results,
    translation_results,
) -> None:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE video_sessions
        SET sign_language_results = ?, facial_expression_results = ?, translation_results = ?
        WHERE id = ?
        """,
        (
            json.dumps(sign_language_results),
            json.dumps(facial_expression_results),
            json.dumps(translation_results),
            session_id,
        ),
    )
    conn.commit()
    conn.close()


def create_transcript(*, user_id: str, video_session_id: str, content: str) -> Dict:
    row = {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "video_session_id": video_session_id,
        "content": content,
        "created_at": utcnow().isoformat(),
    }
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO transcripts (id, user_id, video_session_id, content, created_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (row["id"], user_id, video_session_id, content, row["created_at"]),
    )
    conn.commit()
    conn.close()
    return _transcript_from_row(row)


def get_transcript(transcript_id: str) -> Optional[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "SELECT id, user_id, video_session_id, content, created_at FROM transcripts WHERE id = ?",
        (transcript_id,),
    )
    row = cur.fetchone()
    conn.close()
    return _transcript_from_row(row) if row else None


def get_transcripts_for_user(user_id: str) -> List[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT id, user_id, video_session_id, content, created_at
        FROM transcripts
        WHERE user_id = ?
        ORDER BY created_at DESC
        """,
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [_transcript_from_row(r) for r in rows]


__all__ = [
    "create_video_session",
    "get_video_session",
    "get_video_sessions_for_user",
    "save_video_results",
    "create_transcript",
    "get_transcript",
    "get_transcripts_for_user",
]
