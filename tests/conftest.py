import os
import tempfile

import pytest

# Point the store at a throwaway SQLite file before any app module is imported.
_DB_DIR = tempfile.mkdtemp(prefix="empaai-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
for _var in ("SMTP_HOST", "SMTP_USER", "SMTP_PASS", "OPENAI_API_KEY", "LIBRETRANSLATE_API_KEY", "COOKIE_SECURE"):
    os.environ.pop(_var, None)
os.environ["PUBLIC_BASE_URL"] = "http://localhost:5000"

from fastapi.testclient import TestClient  # noqa: E402

import app.api as api_module  # noqa: E402
from app import dependencies  # noqa: E402
from app.auth_service import AuthService  # noqa: E402
from app.integrations import ExpressionAnalyzer, Translator, WellnessAdvisor  # noqa: E402
from app.security import reset_rate_limits  # noqa: E402
from core.db.schema import clear_all, init_db  # noqa: E402


class RecordingNotifier:
    """Stands in for EmailNotifier; keeps every (kind, email, token) it was asked to send."""

    def __init__(self, result=True):
        self.sent = []
        self.result = result

    def send_verification_email(self, email, token):
        self.sent.append(("verify", email, token))
        return self.result

    def send_password_reset_email(self, email, token):
        self.sent.append(("reset", email, token))
        return self.result

    def last_token(self, kind):
        for sent_kind, _, token in reversed(self.sent):
            if sent_kind == kind:
                return token
        return None


@pytest.fixture(autouse=True)
def _clean_db():
    init_db()
    clear_all()
    reset_rate_limits()
    yield
    clear_all()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def auth_service(notifier):
    return AuthService(notifier)


@pytest.fixture
def client(auth_service):
    app = api_module.app
    app.dependency_overrides[dependencies.get_auth_service] = lambda: auth_service
    app.dependency_overrides[dependencies.get_wellness_advisor] = lambda: WellnessAdvisor(None)
    app.dependency_overrides[dependencies.get_translator] = lambda: Translator(None)
    app.dependency_overrides[dependencies.get_expression_analyzer] = lambda: ExpressionAnalyzer()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def verified_client(client, auth_service, notifier):
    """A client logged in as a verified 'disabled' user."""
    auth_service.signup("a@x.com", "secret1", "disabled")
    auth_service.verify_email(notifier.last_token("verify"))
    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert resp.status_code == 200
    return client
