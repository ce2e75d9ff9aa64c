from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from clario.ai.schemas import ClauseAnalysisResult, ClauseCheckResult
from clario.config import Settings
from clario.models import SubscriptionPlan, User, utcnow
from clario.services.ai_service import AIServiceError, get_ai_service
from main import create_app

PASSWORD = "correct-horse-battery"


class FakeAIService:
    """Stands in for the provider-backed gateway; records calls, never touches the network."""

    def __init__(self):
        self.calls = []
        self.fail = False

    def _record(self, operation, *args):
        self.calls.append((operation, args))
        if self.fail:
            raise AIServiceError(f"{operation} failed")

    async def chat(self, message, context=None):
        self._record("chat", message, context)
        return f"Answer to: {message}"

    async def analyze_clauses(self, document_text):
        self._record("analyze_clauses", document_text)
        return ClauseAnalysisResult.model_validate({
            "clauses": [{
                "clause": "The contractor shall indemnify the client.",
                "type": "indemnification",
                "riskLevel": "High",
                "status": "non-standard",
                "analysis": "One-sided indemnity.",
                "recommendations": ["Make the indemnity mutual"],
            }],
            "overallRisk": "65%",
            "summary": "Indemnity is unbalanced.",
        })

    async def simplify(self, document_text):
        self._record("simplify", document_text)
        return document_text[: len(document_text) // 2]

    async def check_standard_clauses(self, document_text):
        self._record("check_standard_clauses", document_text)
        return ClauseCheckResult.model_validate({
            "standardClauses": [
                {"name": "Termination", "present": True, "text": "Either party may terminate.", "riskLevel": "low"},
                {"name": "Governing law", "present": False, "riskLevel": "medium", "recommendation": "Add one"},
            ],
            "missingClauses": ["Governing law"],
            "nonStandardClauses": [],
            "overallRisk": 30,
        })

    async def generate_document(self, doc_type, parameters=None):
        self._record("generate_document", doc_type, parameters)
        return f"{doc_type.upper()} AGREEMENT"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite:///:memory:",
        secret_key="test-secret-key-0123456789",
        upload_dir=str(tmp_path / "uploads"),
        max_file_size=1024 * 1024,
        openai_api_key=None,
    )


@pytest.fixture
def fake_ai():
    return FakeAIService()


@pytest.fixture
def app(settings, fake_ai):
    application = create_app(settings)
    application.dependency_overrides[get_ai_service] = lambda: fake_ai
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


def register_and_login(client, email, first_name="Ada", last_name="Lovelace"):
    r = client.post("/api/auth/register", json={
        "email": email,
        "password": PASSWORD,
        "first_name": first_name,
        "last_name": last_name,
    })
    assert r.status_code == 201, r.text
    r = client.post("/api/auth/login", data={"username": email, "password": PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


def set_plan(db, email, plan):
    user = db.query(User).filter(User.email == email).one()
    user.subscription_plan = plan
    db.commit()


@pytest.fixture
def auth_headers(client):
    return register_and_login(client, "ada@example.com")


@pytest.fixture
def other_headers(client):
    return register_and_login(client, "grace@example.com", "Grace", "Hopper")


@pytest.fixture
def pro_headers(client, db):
    headers = register_and_login(client, "pro@example.com", "Pat", "Pro")
    set_plan(db, "pro@example.com", SubscriptionPlan.PRO)
    return headers


def iso_in(**delta):
    """ISO timestamp offset from now, e.g. iso_in(days=3) or iso_in(hours=-1)."""
    return (utcnow() + timedelta(**delta)).isoformat()


def make_deadline(client, headers, **overrides):
    payload = {
        "title": "File annual return",
        "due_date": iso_in(days=10),
        "category": "tax-compliance",
        "priority": "medium",
    }
    payload.update(overrides)
    r = client.post("/api/deadlines/", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]["deadline"]


def make_document(client, headers, **overrides):
    payload = {
        "title": "Master Services Agreement",
        "type": "contract",
        "content": "This is a test document.",
    }
    payload.update(overrides)
    r = client.post("/api/documents/", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]["document"]
