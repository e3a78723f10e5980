"""End-to-end tests of the tag routes over an in-memory SQLite database."""

from __future__ import annotations

import jwt
import pytest
from fastapi.testclient import TestClient

from infrastructure.models.post_orm import PostORM
from infrastructure.models.tag_orm import TagORM
from main import app
from utils.config import JWT_ALGORITHM, JWT_SECRET
from utils.dependencies import get_db


def _auth(role: str = None) -> dict:
    claims = {"sub": f"{role or 'visitor'}-1", "name": "Test User"}
    if role:
        claims["realm_access"] = {"roles": [role]}
    token = jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


ADMIN = _auth("administrator")
COLLABORATOR = _auth("collaborator")
VISITOR = _auth()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(session_factory):
    db = session_factory()
    db.add_all(
        [
            TagORM(name="Bug", slug="bug", color="FF0000", is_public=True),
            TagORM(name="Internal", slug="internal", color="000000", is_public=False),
            PostORM(number=1, title="Dark mode please"),
        ]
    )
    db.commit()
    db.close()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_tags_hides_private_tags_from_anonymous(client, seeded):
    assert [t["slug"] for t in client.get("/tags").json()] == ["bug"]
    assert [t["slug"] for t in client.get("/tags", headers=COLLABORATOR).json()] == [
        "bug",
        "internal",
    ]


def test_create_tag(client):
    response = client.post(
        "/tags", json={"name": "Feature Request", "color": "ff00aa"}, headers=ADMIN
    )

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "feature-request"
    assert body["color"] == "ff00aa"


def test_create_tag_ignores_slug_in_body(client, seeded):
    response = client.post(
        "/tags", json={"slug": "bug", "name": "Bug", "color": "ff00aa"}, headers=ADMIN
    )

    assert response.status_code == 400
    assert response.json()["failures"] == {"name": ["This tag name is already in use."]}


def test_create_tag_reports_every_invalid_field(client):
    response = client.post("/tags", json={"name": "", "color": "zz"}, headers=ADMIN)

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "INVALID_FIELDS"
    assert body["failures"] == {
        "name": ["Name is required."],
        "color": ["Color must be exactly 6 characters."],
    }


def test_create_tag_with_whitespace_only_name_is_rejected(client):
    response = client.post(
        "/tags", json={"name": "   ", "color": "ff00aa"}, headers=ADMIN
    )

    assert response.status_code == 400
    assert response.json()["failures"] == {"name": ["Name is required."]}
    assert client.get("/tags", headers=ADMIN).json() == []


def test_edit_tag_to_whitespace_only_name_is_rejected(client, seeded):
    response = client.put(
        "/tags/bug", json={"name": " \t ", "color": "00FF00"}, headers=ADMIN
    )

    assert response.status_code == 400
    assert response.json()["failures"] == {"name": ["Name is required."]}


@pytest.mark.parametrize("headers", [{}, VISITOR, COLLABORATOR])
def test_create_tag_requires_administrator(client, headers):
    response = client.post(
        "/tags", json={"name": "Bug", "color": "ff00aa"}, headers=headers
    )

    assert response.status_code == 403


def test_invalid_token_is_unauthorized(client):
    response = client.post(
        "/tags",
        json={"name": "Bug", "color": "ff00aa"},
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401


def test_edit_tag_keeping_its_name(client, seeded):
    response = client.put(
        "/tags/bug",
        json={"name": "Bug", "color": "00FF00", "is_public": True},
        headers=ADMIN,
    )

    assert response.status_code == 200
    assert response.json()["color"] == "00FF00"


def test_edit_tag_renames_slug(client, seeded):
    response = client.put(
        "/tags/bug", json={"name": "Defect", "color": "00FF00"}, headers=ADMIN
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "defect"
    assert client.put(
        "/tags/bug", json={"name": "Bug", "color": "00FF00"}, headers=ADMIN
    ).status_code == 404


def test_edit_tag_onto_existing_name_is_rejected(client, seeded):
    response = client.put(
        "/tags/bug", json={"name": "internal", "color": "00FF00"}, headers=ADMIN
    )

    assert response.status_code == 400
    assert response.json()["failures"]["name"] == ["This tag name is already in use."]


def test_delete_tag(client, seeded):
    assert client.delete("/tags/bug", headers=ADMIN).status_code == 204
    assert client.delete("/tags/bug", headers=ADMIN).status_code == 404


def test_delete_tag_requires_administrator(client, seeded):
    assert client.delete("/tags/bug", headers=COLLABORATOR).status_code == 403


def test_assign_and_unassign_tag(client, seeded, session_factory):
    assert client.post("/posts/1/tags/bug", headers=COLLABORATOR).status_code == 200
    assert client.post("/posts/1/tags/bug", headers=COLLABORATOR).status_code == 200

    db = session_factory()
    post = db.query(PostORM).filter(PostORM.number == 1).one()
    assert [tag.slug for tag in post.tags] == ["bug"]
    db.close()

    assert client.delete("/posts/1/tags/bug", headers=ADMIN).status_code == 200

    db = session_factory()
    post = db.query(PostORM).filter(PostORM.number == 1).one()
    assert post.tags == []
    db.close()


@pytest.mark.parametrize("path", ["/posts/99/tags/bug", "/posts/1/tags/ghost"])
def test_assign_missing_target_is_not_found(client, seeded, path):
    assert client.post(path, headers=COLLABORATOR).status_code == 404


def test_assign_requires_collaborator(client, seeded):
    assert client.post("/posts/1/tags/bug", headers=VISITOR).status_code == 403
    assert client.post("/posts/1/tags/bug").status_code == 403


def test_health_reports_unreachable_database(client):
    class BrokenSession:
        def execute(self, statement):
            raise RuntimeError("connection refused")

    app.dependency_overrides[get_db] = lambda: BrokenSession()

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["detail"] == "Database unavailable"
