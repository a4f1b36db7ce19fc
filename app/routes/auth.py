from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.auth_service import AuthService
from app.auth_utils import SESSION_COOKIE_NAME, clear_session_cookie, set_session_cookie
from app.dependencies import get_auth_service
from app.schemas import EmailRequest, LoginRequest, ResetPasswordRequest, SignupRequest, TokenRequest
from app.security import enforce_rate_limit

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup")
def signup(body: SignupRequest, request: Request, auth: AuthService = Depends(get_auth_service)):
    enforce_rate_limit(request, "signup")
    return auth.signup(body.email, body.password, body.user_type)


@router.post("/login")
def login(body: LoginRequest, request: Request, auth: AuthService = Depends(get_auth_service)):
    enforce_rate_limit(request, "login")
    user, session_id = auth.login(body.email, body.password)
    response = JSONResponse({"user": user, "message": "Login successful"})
    set_session_cookie(response, session_id)
    return response


@router.post("/logout")
def logout(request: Request, auth: AuthService = Depends(get_auth_service)):
    result = auth.logout(request.cookies.get(SESSION_COOKIE_NAME))
    response = JSONResponse(result)
    clear_session_cookie(response)
    return response


@router.post("/verify-email")
def verify_email(body: TokenRequest, auth: AuthService = Depends(get_auth_service)):
    return auth.verify_email(body.token)


@router.post("/resend-verification")
def resend_verification(body: EmailRequest, request: Request, auth: AuthService = Depends(get_auth_service)):
    enforce_rate_limit(request, "verify_resend")
    return auth.resend_verification(body.email)


@router.post("/request-password-reset")
def request_password_reset(body: EmailRequest, request: Request, auth: AuthService = Depends(get_auth_service)):
    enforce_rate_limit(request, "pwdreset")
    return auth.request_password_reset(body.email)


@router.post("/reset-password")
def reset_password(body: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    return auth.reset_password(body.token, body.new_password)
