"""Tests for comment endpoints."""

from fastapi import status
from sqlalchemy import func, select

from townhall.models import Comment


def _post(client, headers, body, slug="hello-world"):
    return client.post("/api/comments", json={"post_slug": slug, "body": body}, headers=headers)


def test_create_comment(client, auth_token, test_user) -> None:
    response = _post(client, auth_token, "Nice post!")

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["post_slug"] == "hello-world"
    assert data["body"] == "Nice post!"
    assert data["vote_count"] == 0
    assert data["user"] == {
        "id": test_user.id,
        "username": "octocat",
        "avatar_url": "https://avatars.example.com/octocat.png",
    }
    assert "created_at" in data


def test_script_is_stripped_before_storing(client, auth_token, db_session) -> None:
    response = _post(client, auth_token, "<script>x</script>Hello")

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["body"] == "Hello"
    stored = db_session.scalars(select(Comment)).one()
    assert stored.body == "Hello"


def test_whitespace_comment_is_rejected(client, auth_token, db_session) -> None:
    response = _post(client, auth_token, "   \n ")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert db_session.scalar(select(func.count(Comment.id))) == 0


def test_creating_requires_authentication(client) -> None:
    response = _post(client, {}, "hi")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_list_is_oldest_first_with_scores(client, auth_token, other_auth_token) -> None:
    first = _post(client, auth_token, "first").json()
    second = _post(client, other_auth_token, "second").json()
    _post(client, auth_token, "elsewhere", slug="other-post")
    client.post(
        "/api/votes",
        json={"target_type": "comment", "target_id": second["id"], "value": 1},
        headers=auth_token,
    )

    response = client.get("/api/comments", params={"slug": "hello-world"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [comment["id"] for comment in data] == [first["id"], second["id"]]
    assert [comment["vote_count"] for comment in data] == [0, 1]
    assert data[1]["user"]["username"] == "hubot"


def test_list_for_unknown_post_is_empty(client) -> None:
    response = client.get("/api/comments", params={"slug": "no-comments-yet"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_author_can_delete(client, auth_token) -> None:
    comment = _post(client, auth_token, "oops").json()

    response = client.delete(f"/api/comments/{comment['id']}", headers=auth_token)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/comments", params={"slug": "hello-world"}).json() == []


def test_deleting_someone_elses_comment_is_not_found(client, auth_token, other_auth_token) -> None:
    comment = _post(client, auth_token, "mine").json()

    response = client.delete(f"/api/comments/{comment['id']}", headers=other_auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    listed = client.get("/api/comments", params={"slug": "hello-world"}).json()
    assert [item["id"] for item in listed] == [comment["id"]]


def test_deleting_unknown_comment_is_not_found(client, auth_token) -> None:
    response = client.delete("/api/comments/999999", headers=auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Comment not found"}


def test_deleting_id_out_of_range_is_unprocessable(client, auth_token) -> None:
    response = client.delete(f"/api/comments/{2**64}", headers=auth_token)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
