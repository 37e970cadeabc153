from datetime import datetime, timedelta, timezone

import pytest

from conftest import auth_headers, make_user
from portfolio.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from portfolio.db.models.comments import Comment
from portfolio.db.models.projects import Project
from portfolio.db.repositories.comments import CommentRepository
from portfolio.db.repositories.projects import ProjectRepository
from portfolio.db.repositories.users import UserRepository
from portfolio.features.comments.schemas import CommentCreateIn, CommentDeleteIn, CommentUpdateIn
from portfolio.features.comments.services import CommentService


@pytest.fixture
def svc(session):
    return CommentService(
        comment_repo=CommentRepository(session),
        project_repo=ProjectRepository(session),
        user_repo=UserRepository(session),
    )


# -----------------------------
# Service
# -----------------------------
def test_create_returns_input_and_is_listed(svc, project, alice):
    created = svc.create(project.id, CommentCreateIn(content="Super projet", user_id=alice.id))

    assert created.content == "Super projet"
    assert created.user_id == alice.id
    assert created.parent_id is None
    assert created.user.pseudo == "alice"
    assert [c.id for c in svc.list(project.id)] == [created.id]


@pytest.mark.parametrize("content, user_id", [(None, "u1"), ("", "u1"), ("hello", None), ("hello", "")])
def test_create_requires_content_and_user(svc, project, alice, content, user_id):
    with pytest.raises(BadRequestError):
        svc.create(project.id, CommentCreateIn(content=content, user_id=user_id))


def test_create_on_missing_project(svc, alice):
    with pytest.raises(NotFoundError):
        svc.create("nope", CommentCreateIn(content="hello", user_id=alice.id))


def test_create_with_unknown_user(svc, project):
    with pytest.raises(NotFoundError):
        svc.create(project.id, CommentCreateIn(content="hello", user_id="ghost"))


def test_reply_must_target_same_project(svc, session, project, alice):
    other = Project(title="Autre", description="D", image_url="https://x/z.png")
    session.add(other)
    session.commit()
    foreign = svc.create(other.id, CommentCreateIn(content="ailleurs", user_id=alice.id))

    with pytest.raises(BadRequestError):
        svc.create(project.id, CommentCreateIn(content="réponse", user_id=alice.id, parent_id=foreign.id))
    with pytest.raises(BadRequestError):
        svc.create(project.id, CommentCreateIn(content="réponse", user_id=alice.id, parent_id="missing"))


def test_list_newest_first_with_direct_replies(svc, project, alice, bob):
    first = svc.create(project.id, CommentCreateIn(content="premier", user_id=alice.id))
    second = svc.create(project.id, CommentCreateIn(content="second", user_id=bob.id))
    reply = svc.create(project.id, CommentCreateIn(content="merci", user_id=bob.id, parent_id=first.id))

    listed = svc.list(project.id)

    assert [c.id for c in listed] == [reply.id, second.id, first.id]
    by_id = {c.id: c for c in listed}
    assert [r.id for r in by_id[first.id].replies] == [reply.id]
    assert by_id[first.id].replies[0].user.pseudo == "bob"
    assert by_id[second.id].replies == []


def test_list_threaded_nests_to_any_depth(svc, project, alice, bob):
    root = svc.create(project.id, CommentCreateIn(content="racine", user_id=alice.id))
    child = svc.create(project.id, CommentCreateIn(content="enfant", user_id=bob.id, parent_id=root.id))
    grandchild = svc.create(project.id, CommentCreateIn(content="petit-enfant", user_id=alice.id, parent_id=child.id))

    thread = svc.list(project.id, threaded=True)

    assert [c.id for c in thread] == [root.id]
    assert thread[0].replies[0].id == child.id
    assert thread[0].replies[0].replies[0].id == grandchild.id


def test_list_missing_project(svc):
    with pytest.raises(NotFoundError):
        svc.list("nope")


def test_update_by_owner(svc, project, alice):
    created = svc.create(project.id, CommentCreateIn(content="v1", user_id=alice.id))

    updated = svc.update(project.id, CommentUpdateIn(comment_id=created.id, content="v2", user_id=alice.id))

    assert updated.content == "v2"
    assert updated.user.pseudo == "alice"


def test_update_by_non_owner_is_forbidden_and_leaves_content(svc, session, project, alice, admin):
    created = svc.create(project.id, CommentCreateIn(content="original", user_id=alice.id))

    for intruder in ("u2", admin.id):
        with pytest.raises(ForbiddenError):
            svc.update(project.id, CommentUpdateIn(comment_id=created.id, content="piraté", user_id=intruder))

    session.expire_all()
    assert session.get(Comment, created.id).content == "original"


def test_update_validation_and_missing(svc, project, alice):
    with pytest.raises(BadRequestError):
        svc.update(project.id, CommentUpdateIn(comment_id="x", content="", user_id=alice.id))
    with pytest.raises(NotFoundError):
        svc.update(project.id, CommentUpdateIn(comment_id="x", content="v2", user_id=alice.id))


def test_delete_by_owner_removes_replies(svc, session, project, alice, bob):
    root = svc.create(project.id, CommentCreateIn(content="racine", user_id=alice.id))
    reply = svc.create(project.id, CommentCreateIn(content="réponse", user_id=bob.id, parent_id=root.id))
    kept = svc.create(project.id, CommentCreateIn(content="autre", user_id=bob.id))

    deleted = svc.delete(project.id, CommentDeleteIn(comment_id=root.id, user_id=alice.id), is_admin=False)

    assert deleted == 2
    assert session.get(Comment, reply.id) is None
    assert [c.id for c in svc.list(project.id)] == [kept.id]


def test_delete_permissions(svc, project, alice, bob):
    created = svc.create(project.id, CommentCreateIn(content="hello", user_id=alice.id))

    with pytest.raises(ForbiddenError):
        svc.delete(project.id, CommentDeleteIn(comment_id=created.id, user_id=bob.id), is_admin=False)

    assert svc.delete(project.id, CommentDeleteIn(comment_id=created.id, user_id=bob.id), is_admin=True) == 1

    with pytest.raises(NotFoundError):
        svc.delete(project.id, CommentDeleteIn(comment_id=created.id, user_id=alice.id), is_admin=False)


# -----------------------------
# API
# -----------------------------
def test_post_comment_scenario(client, project, alice):
    res = client.post(
        f"/api/v1/projects/{project.id}/comments",
        json={"content": "nice!", "userId": "u1"},
        headers=auth_headers(alice),
    )

    assert res.status_code == 201
    body = res.json()
    assert body["id"]
    assert body["content"] == "nice!"
    assert body["userId"] == "u1"
    assert body["projectId"] == project.id
    assert body["parentId"] is None
    assert body["user"] == {"pseudo": "alice"}


def test_post_comment_requires_session(client, project):
    res = client.post(f"/api/v1/projects/{project.id}/comments", json={"content": "nice!", "userId": "u1"})

    assert res.status_code == 401
    assert "error" in res.json()


def test_post_comment_for_someone_else_is_forbidden(client, project, alice, bob):
    res = client.post(
        f"/api/v1/projects/{project.id}/comments",
        json={"content": "nice!", "userId": bob.id},
        headers=auth_headers(alice),
    )

    assert res.status_code == 403


def test_post_comment_missing_content(client, project, alice):
    res = client.post(
        f"/api/v1/projects/{project.id}/comments",
        json={"userId": alice.id},
        headers=auth_headers(alice),
    )

    assert res.status_code == 400
    assert res.json()["error"]


def test_get_comments_unknown_project(client):
    res = client.get("/api/v1/projects/missing/comments")

    assert res.status_code == 404
    assert res.json() == {"error": "Project not found."}


def test_put_comment_by_non_owner(client, project, alice, bob):
    created = client.post(
        f"/api/v1/projects/{project.id}/comments",
        json={"content": "v1"},
        headers=auth_headers(alice),
    ).json()

    res = client.put(
        f"/api/v1/projects/{project.id}/comments",
        json={"commentId": created["id"], "content": "v2"},
        headers=auth_headers(bob),
    )

    assert res.status_code == 403
    listed = client.get(f"/api/v1/projects/{project.id}/comments").json()
    assert listed[0]["content"] == "v1"


def test_delete_ignores_client_admin_flag(client, session, project, alice, bob):
    created = client.post(
        f"/api/v1/projects/{project.id}/comments",
        json={"content": "hello"},
        headers=auth_headers(alice),
    ).json()

    res = client.request(
        "DELETE",
        f"/api/v1/projects/{project.id}/comments",
        json={"commentId": created["id"], "userId": bob.id, "isAdmin": True},
        headers=auth_headers(bob),
    )
    assert res.status_code == 403

    admin = make_user(session, "a9", "moderator", role="admin")
    res = client.request(
        "DELETE",
        f"/api/v1/projects/{project.id}/comments",
        json={"commentId": created["id"]},
        headers=auth_headers(admin),
    )
    assert res.status_code == 200
    assert client.get(f"/api/v1/projects/{project.id}/comments").json() == []


def test_delete_cascade_ignores_timestamps(svc, session, project, alice, bob):
    # réponse horodatée avant son parent : seul l'ordre par profondeur respecte la FK
    repo = CommentRepository(session)
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    root = repo.create(content="racine", user_id=alice.id, project_id=project.id, created_at=stamp)
    reply = repo.create(
        content="réponse", user_id=bob.id, project_id=project.id, parent_id=root.id,
        created_at=stamp - timedelta(minutes=5),
    )
    repo.create(
        content="sous-réponse", user_id=alice.id, project_id=project.id, parent_id=reply.id,
        created_at=stamp,
    )

    deleted = svc.delete(project.id, CommentDeleteIn(comment_id=root.id, user_id=alice.id), is_admin=False)

    assert deleted == 3
    assert svc.list(project.id) == []
