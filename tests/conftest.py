"""Pytest configuration and fixtures."""
import os

# Settings are read at import time
os.environ.setdefault("APPWRITE_ENDPOINT", "https://appwrite.test/v1")
os.environ.setdefault("APPWRITE_PROJECT", "catalog-test")
os.environ.setdefault("APPWRITE_DATABASE_ID", "catalog-db")
os.environ.setdefault("APPWRITE_TABLE_ID", "products")
os.environ.setdefault("EDITORS_TEAM_ID", "editors")
os.environ.setdefault("VIEWERS_TEAM_ID", "viewers")
os.environ.setdefault("APP_URL", "http://testserver")
os.environ.setdefault("GATEWAY_CHECK_ON_STARTUP", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from typing import Optional

import pytest
from fastapi import Cookie
from fastapi.testclient import TestClient

from catalog_admin.dependencies import get_gateway
from catalog_admin.main import app
from catalog_admin.middleware.csrf import CSRFProtectionMiddleware
from catalog_admin.middleware.rate_limit import rate_limiter
from catalog_admin.settings import settings
from tests.fakes import FakeGateway

EDITORS = "editors"
VIEWERS = "viewers"


def product_doc(doc_id: str, name: str, price: float, **extra) -> dict:
    """A product document as the backend returns it."""
    doc = {
        "$id": doc_id,
        "$createdAt": "2024-05-01T10:00:00.000+00:00",
        "$updatedAt": "2024-05-01T10:00:00.000+00:00",
        "$permissions": [],
        "$databaseId": "catalog-db",
        "$collectionId": "products",
        "name": name,
        "price": price,
        "description": None,
        "category": None,
        "inStock": True,
    }
    doc.update(extra)
    return doc


def post_form(client: TestClient, url: str, data: Optional[dict] = None, **kwargs):
    """POST a form with a valid CSRF token, as the rendered pages do."""
    token = CSRFProtectionMiddleware.generate_token()
    client.cookies.delete("csrf_token")
    client.cookies.set("csrf_token", token)
    return client.post(url, data={**(data or {}), "csrf_token": token}, **kwargs)


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def documents():
    return [
        product_doc("abc", "Widget", 9.99, description="A useful widget", category="Tools"),
        product_doc("def", "Gadget", 24.5, inStock=False),
    ]


@pytest.fixture
def gateway(documents):
    """Fake gateway with two products and no session."""
    return FakeGateway(documents=documents)


@pytest.fixture
def client(gateway):
    """Test client whose gateway handle is the fake, bound to the session cookie."""
    def override_get_gateway(
        session_secret: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
    ):
        gateway.session_secret = session_secret
        return gateway

    app.dependency_overrides[get_gateway] = override_get_gateway
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _sign_in(client: TestClient, gateway: FakeGateway, teams: list, name: str) -> None:
    gateway.account = {"$id": f"user-{name}", "name": name.title(), "email": f"{name}@example.com"}
    gateway.teams = teams
    client.cookies.set(settings.SESSION_COOKIE_NAME, f"{name}-secret")


@pytest.fixture
def editor_client(client, gateway):
    """Client signed in as a member of the editors team."""
    _sign_in(client, gateway, [EDITORS], "editor")
    return client


@pytest.fixture
def viewer_client(client, gateway):
    """Client signed in as a member of the viewers team."""
    _sign_in(client, gateway, [VIEWERS], "viewer")
    return client
