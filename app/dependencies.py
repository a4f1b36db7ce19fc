"""Shared dependencies: collaborators built at startup, current user."""
from fastapi import Request

from app.auth_service import AuthService
from app.integrations import ExpressionAnalyzer, Translator, WellnessAdvisor


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_wellness_advisor(request: Request) -> WellnessAdvisor:
    return request.app.state.wellness_advisor


def get_translator(request: Request) -> Translator:
    return request.app.state.translator


def get_expression_analyzer(request: Request) -> ExpressionAnalyzer:
    return request.app.state.expression_analyzer
