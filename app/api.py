import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.auth_service import AuthService
from app.email_utils import EmailNotifier
from app.integrations import ExpressionAnalyzer, Translator, WellnessAdvisor
from app.routes import auth, media, users, wellness
from app.security import SECURITY_HEADERS
from core.database import init_db
from core.errors import AppError

# Ensure .env values are loaded even if uvicorn is launched without `dotenv run`.
load_dotenv(override=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    app.state.auth_service = AuthService(EmailNotifier.from_env())
    app.state.wellness_advisor = WellnessAdvisor.from_env()
    app.state.translator = Translator.from_env()
    app.state.expression_analyzer = ExpressionAnalyzer()
    yield


app = FastAPI(title="EmpaAI", lifespan=lifespan)


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(wellness.router)
app.include_router(media.router)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    # Runs in ServerErrorMiddleware, outside add_security_headers.
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=SECURITY_HEADERS,
    )


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.get("/health")
def health():
    return {"status": "healthy"}
