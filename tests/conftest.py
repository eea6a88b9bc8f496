import os

# Doit être défini avant l'import de app.core.config
os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_backend
from app.main import app
from app.services.backend_service import BackendService

BACKEND_URL = "http://backend.test"

class FakeUpstream:
    """Backend simulé : enregistre chaque requête reçue et répond via `handler`."""

    def __init__(self):
        self.calls = []
        self.handler = lambda request: httpx.Response(200, json={"success": True})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)

def me_response(role="member", plan="free"):
    user = {"_id": "u1", "name": "Ada Lovelace", "email": "ada@example.com", "role": role}
    if plan is not None:
        user["subscription"] = {"plan": plan, "status": "active"}
    return httpx.Response(200, json={"success": True, "data": user})

@pytest.fixture
def upstream():
    return FakeUpstream()

@pytest.fixture
def client(upstream):
    backend = BackendService(BACKEND_URL, transport=httpx.MockTransport(upstream))
    app.dependency_overrides[get_backend] = lambda: backend
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
