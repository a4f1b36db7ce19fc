"""
Lifestyle questionnaires and the wellness recommendations generated from them.

Both tables are owned by a user (by id) and are append-only.
"""
from core.db.wellness.wellness_store import (
    create_lifestyle_questionnaire,
    create_wellness_recommendation,
    get_lifestyle_questionnaires_for_user,
    get_wellness_recommendations_for_user,
)

__all__ = [
    "create_lifestyle_questionnaire",
    "create_wellness_recommendation",
    "get_lifestyle_questionnaires_for_user",
    "get_wellness_recommendations_for_user",
]
