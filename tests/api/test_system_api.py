"""Tests for health and service metadata endpoints."""

from fastapi import status
from sqlalchemy.exc import OperationalError

from townhall.core.settings import settings


def test_health(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_the_service(client) -> None:
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == settings.app_name


def test_cors_preflight_for_frontend(client) -> None:
    response = client.options(
        "/api/comments",
        headers={
            "Origin": "http://localhost:1313",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"] == "http://localhost:1313"


def test_storage_error_is_a_generic_server_error(client, mocker) -> None:
    mocker.patch(
        "townhall.services.comments.list_comments",
        side_effect=OperationalError("SELECT 1", {}, Exception("disk I/O error")),
    )

    response = client.get("/api/comments", params={"slug": "hello-world"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Internal server error"}
