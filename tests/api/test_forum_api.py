"""Tests for forum endpoints."""

from fastapi import status
from sqlalchemy import func, select

from townhall.models import Reply, Thread
from townhall.services.pagination import MAX_PAGE


def test_list_categories(client, categories) -> None:
    response = client.get("/api/forum/categories")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {"id": 1, "name": "General", "slug": "general", "description": "General discussion"},
        {"id": 2, "name": "Projects", "slug": "projects", "description": "Discuss projects and ideas"},
        {"id": 3, "name": "Help", "slug": "help", "description": "Ask for help or advice"},
    ]


def test_create_thread(client, auth_token, categories) -> None:
    response = client.post(
        "/api/forum/threads",
        json={"category_slug": "projects", "title": "My project", "body": "Look at this"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["category_id"] == 2
    assert data["title"] == "My project"
    assert data["reply_count"] == 0
    assert data["user"]["username"] == "octocat"


def test_create_thread_unknown_category(client, auth_token, categories, db_session) -> None:
    response = client.post(
        "/api/forum/threads",
        json={"category_slug": "random", "title": "t", "body": "b"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert db_session.scalar(select(func.count(Thread.id))) == 0


def test_create_thread_empty_title(client, auth_token, categories) -> None:
    response = client.post(
        "/api/forum/threads",
        json={"category_slug": "general", "title": "<script></script>", "body": "b"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_thread_requires_authentication(client, categories) -> None:
    response = client.post(
        "/api/forum/threads",
        json={"category_slug": "general", "title": "t", "body": "b"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_list_threads(client, test_thread) -> None:
    response = client.get("/api/forum/threads", params={"category": "general"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 1
    assert data["page"] == 1
    assert data["per_page"] == 20
    assert [item["id"] for item in data["items"]] == [test_thread.id]


def test_list_threads_page_zero_is_first_page(client, test_thread) -> None:
    response = client.get("/api/forum/threads", params={"category": "general", "page": 0})

    data = response.json()
    assert data["page"] == 1
    assert len(data["items"]) == 1


def test_list_threads_past_the_end(client, test_thread) -> None:
    response = client.get("/api/forum/threads", params={"category": "general", "page": 5})

    assert response.json() == {"items": [], "total": 1, "page": 5, "per_page": 20}


def test_list_threads_unknown_category(client, categories) -> None:
    response = client.get("/api/forum/threads", params={"category": "nope"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_thread_with_replies(client, auth_token, other_auth_token, test_thread) -> None:
    first = client.post(
        f"/api/forum/threads/{test_thread.id}/replies",
        json={"body": "first reply"},
        headers=other_auth_token,
    )
    assert first.status_code == status.HTTP_201_CREATED
    assert first.json()["vote_count"] == 0
    client.post(
        f"/api/forum/threads/{test_thread.id}/replies",
        json={"body": "second reply"},
        headers=auth_token,
    )

    response = client.get(f"/api/forum/threads/{test_thread.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["thread"]["id"] == test_thread.id
    assert data["thread"]["reply_count"] == 2
    assert [reply["body"] for reply in data["replies"]] == ["first reply", "second reply"]
    assert data["replies"][0]["user"]["username"] == "hubot"


def test_get_missing_thread(client) -> None:
    response = client.get("/api/forum/threads/999999")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Thread not found"}


def test_reply_to_missing_thread(client, auth_token, db_session) -> None:
    response = client.post(
        "/api/forum/threads/999999/replies",
        json={"body": "anyone?"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert db_session.scalar(select(func.count(Reply.id))) == 0


def test_reply_with_empty_body(client, auth_token, test_thread) -> None:
    response = client.post(
        f"/api/forum/threads/{test_thread.id}/replies",
        json={"body": "  "},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_list_threads_huge_page_is_empty(client, test_thread) -> None:
    response = client.get("/api/forum/threads", params={"category": "general", "page": 10**18})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["items"] == []
    assert data["total"] == 1
    assert data["page"] == MAX_PAGE


def test_get_thread_id_out_of_range(client) -> None:
    response = client.get(f"/api/forum/threads/{2**64}")

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_reply_to_thread_id_out_of_range(client, auth_token) -> None:
    response = client.post(
        f"/api/forum/threads/{2**64}/replies",
        json={"body": "hello"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
