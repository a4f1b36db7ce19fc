import logging

from fastapi import APIRouter, Depends

from app.auth_utils import require_verified_user
from app.dependencies import get_wellness_advisor
from app.integrations import WellnessAdvisor
from app.schemas import LifestyleSubmitRequest
from core.database import (
    create_lifestyle_questionnaire,
    create_wellness_recommendation,
    get_lifestyle_questionnaires_for_user,
    get_wellness_recommendations_for_user,
)

log = logging.getLogger("wellness")

router = APIRouter(prefix="/api", tags=["wellness"])


@router.post("/lifestyle/submit")
def submit_lifestyle(
    body: LifestyleSubmitRequest,
    user: dict = Depends(require_verified_user),
    advisor: WellnessAdvisor = Depends(get_wellness_advisor),
):
    questionnaire = create_lifestyle_questionnaire(user_id=user["id"], responses=body.responses)
    text = advisor.generate(body.responses)
    recommendation = create_wellness_recommendation(
        user_id=user["id"],
        questionnaire_id=questionnaire["id"],
        recommendations=text,
    )
    log.info("Questionnaire %s stored for user id=%s (ai=%s)", questionnaire["id"], user["id"], advisor.is_available())
    return {
        "questionnaire": questionnaire,
        "recommendations": recommendation["recommendations"],
        "message": "Recommendations generated successfully",
    }


@router.get("/lifestyle/history")
def lifestyle_history(user: dict = Depends(require_verified_user)):
    return get_lifestyle_questionnaires_for_user(user["id"])


@router.get("/wellness/history")
def wellness_history(user: dict = Depends(require_verified_user)):
    return get_wellness_recommendations_for_user(user["id"])
