from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import select

from conftest import auth_headers
from portfolio.core.exceptions import BadRequestError, NotFoundError
from portfolio.db.models.comments import Comment
from portfolio.db.models.reactions import Reaction
from portfolio.db.repositories.comments import CommentRepository
from portfolio.db.repositories.projects import ProjectRepository
from portfolio.db.repositories.reactions import ReactionRepository
from portfolio.features.projects.schemas import ProjectCreateIn, ProjectUpdateIn
from portfolio.features.projects.services import ProjectService


@pytest.fixture
def svc(session):
    return ProjectService(ProjectRepository(session), CommentRepository(session), ReactionRepository(session))


# -----------------------------
# Service
# -----------------------------
def test_create_and_get_round_trip(svc):
    created = svc.create(ProjectCreateIn(title="T", description="D", image_url="https://x/i.png"))

    fetched = svc.get(created.id)

    assert (fetched.title, fetched.description, fetched.image_url) == ("T", "D", "https://x/i.png")
    assert fetched.more_url is None
    assert fetched.deployment_url is None


def test_create_requires_mandatory_fields(svc):
    with pytest.raises(BadRequestError):
        svc.create(ProjectCreateIn(title="T", description="D"))


def test_list_newest_first(svc):
    a = svc.create(ProjectCreateIn(title="A", description="D", image_url="i"))
    b = svc.create(ProjectCreateIn(title="B", description="D", image_url="i"))

    assert [p.id for p in svc.list()] == [b.id, a.id]


def test_update_only_touches_given_fields(svc, project):
    updated = svc.update(project.id, ProjectUpdateIn(deployment_url="https://deploy"))

    assert updated.deployment_url == "https://deploy"
    assert updated.title == "Portfolio"
    assert updated.updated_at is not None


def test_update_cannot_empty_required_field(svc, project):
    with pytest.raises(BadRequestError):
        svc.update(project.id, ProjectUpdateIn(title=""))


def test_get_and_delete_missing_leaves_store_untouched(svc, session, project, alice):
    CommentRepository(session).create(content="c", user_id=alice.id, project_id=project.id)
    ReactionRepository(session).create(user_id=alice.id, project_id=project.id)

    with pytest.raises(NotFoundError):
        svc.get("nope")
    with pytest.raises(NotFoundError):
        svc.delete("nope")

    assert [p.id for p in svc.list()] == [project.id]
    assert len(session.exec(select(Comment)).all()) == 1
    assert len(session.exec(select(Reaction)).all()) == 1


def test_delete_removes_comments_and_reactions(svc, session, project, alice, bob):
    root = CommentRepository(session).create(content="c", user_id=alice.id, project_id=project.id)
    CommentRepository(session).create(content="r", user_id=bob.id, project_id=project.id, parent_id=root.id)
    ReactionRepository(session).create(user_id=alice.id, project_id=project.id)

    svc.delete(project.id)

    with pytest.raises(NotFoundError):
        svc.get(project.id)
    assert session.exec(select(Comment)).all() == []
    assert session.exec(select(Reaction)).all() == []


# -----------------------------
# API
# -----------------------------
def test_admin_crud_round_trip(client, admin):
    headers = auth_headers(admin)

    created = client.post(
        "/api/v1/projects",
        json={"title": "T", "description": "D", "imageUrl": "https://x/i.png"},
        headers=headers,
    )
    assert created.status_code == 201
    project_id = created.json()["id"]

    fetched = client.get(f"/api/v1/projects/{project_id}").json()
    assert fetched["title"] == "T"
    assert fetched["imageUrl"] == "https://x/i.png"
    assert fetched["moreUrl"] is None

    updated = client.put(f"/api/v1/projects/{project_id}", json={"moreUrl": "https://more"}, headers=headers)
    assert updated.json()["moreUrl"] == "https://more"

    first = client.delete(f"/api/v1/projects/{project_id}", headers=headers)
    second = client.delete(f"/api/v1/projects/{project_id}", headers=headers)
    assert first.json() == {"message": "Project deleted"}
    assert second.status_code == 404
    assert client.get(f"/api/v1/projects/{project_id}").status_code == 404


def test_writes_require_admin(client, project, alice):
    create = client.post(
        "/api/v1/projects",
        json={"title": "T", "description": "D", "imageUrl": "i"},
        headers=auth_headers(alice),
    )
    delete = client.delete(f"/api/v1/projects/{project.id}", headers=auth_headers(alice))
    anonymous = client.delete(f"/api/v1/projects/{project.id}")

    assert create.status_code == 403
    assert delete.status_code == 403
    assert anonymous.status_code == 401
    assert client.get(f"/api/v1/projects/{project.id}").status_code == 200


def test_missing_fields_is_400(client, admin):
    res = client.post("/api/v1/projects", json={"title": "T"}, headers=auth_headers(admin))

    assert res.status_code == 400
    assert "error" in res.json()


def test_list_is_public(client, project):
    res = client.get("/api/v1/projects")

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [project.id]


def test_delete_cascade_with_replies_older_than_parent(svc, session, project, alice, bob):
    repo = CommentRepository(session)
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    root = repo.create(content="c", user_id=alice.id, project_id=project.id, created_at=stamp)
    repo.create(
        content="r", user_id=bob.id, project_id=project.id, parent_id=root.id,
        created_at=stamp - timedelta(minutes=5),
    )

    svc.delete(project.id)

    assert session.exec(select(Comment)).all() == []
