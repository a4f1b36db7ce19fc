"""
Questionnaire and recommendation store.
"""
from __future__ import annotations

import json
import uuid
from typing import Dict, List

from core.db.base import get_conn, utcnow


def _questionnaire_from_row(row: Dict) -> Dict:
    return {
        "id": row["id"],
        "userId": row["user_id"],
        "responses": json.loads(row["responses"]),
        "submittedAt": row["submitted_at"],
    }


def _recommendation_from_row(row: Dict) -> Dict:
    return {
        "id": row["id"],
        "userId": row["user_id"],
        "questionnaireId": row["questionnaire_id"],
        "recommendations": row["recommendations"],
        "createdAt": row["created_at"],
    }


def create_lifestyle_questionnaire(*, user_id: str, responses: Dict) -> Dict:
    row = {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "responses": json.dumps(responses),
        "submitted_at": utcnow().isoformat(),
    }
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO lifestyle_questionnaires (id, user_id, responses, submitted_at)
        VALUES (?, ?, ?, ?)
        """,
        (row["id"], row["user_id"], row["responses"], row["submitted_at"]),
    )
    conn.commit()
    conn.close()
    return _questionnaire_from_row(row)


def get_lifestyle_questionnaires_for_user(user_id: str) -> List[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT id, user_id, responses, submitted_at
        FROM lifestyle_questionnaires
        WHERE user_id = ?
        ORDER BY submitted_at DESC
        """,
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [_questionnaire_from_row(r) for r in rows]


def create_wellness_recommendation(*, user_id: str, questionnaire_id: str, recommendations: str) -> Dict:
    row = {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "questionnaire_id": questionnaire_id,
        "recommendations": recommendations,
        "created_at": utcnow().isoformat(),
    }
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO wellness_recommendations (id, user_id, questionnaire_id, recommendations, created_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (row["id"], user_id, questionnaire_id, recommendations, row["created_at"]),
    )
    conn.commit()
    conn.close()
    return _recommendation_from_row(row)


def get_wellness_recommendations_for_user(user_id: str) -> List[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT id, user_id, questionnaire_id, recommendations, created_at
        FROM wellness_recommendations
        WHERE user_id = ?
        ORDER BY created_at DESC
        """,
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [_recommendation_from_row(r) for r in rows]


__all__ = [
    "create_lifestyle_questionnaire",
    "get_lifestyle_questionnaires_for_user",
    "create_wellness_recommendation",
    "get_wellness_recommendations_for_user",
]
