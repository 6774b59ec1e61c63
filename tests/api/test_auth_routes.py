from __future__ import annotations

from datetime import datetime, timedelta, timezone

from copa_litoral.core.config import get_settings
from copa_litoral.core.security import create_access_token
from tests.league_fixtures import admin_headers, login_headers, register_account


def test_register_returns_account_without_password(client) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"nombre_usuario": "lucia", "password": "secreto123", "email": "lucia@example.com"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "usuario registrado exitosamente"
    assert body["data"]["nombre_usuario"] == "lucia"
    assert body["data"]["rol"] == "jugador"
    assert body["data"]["email"] == "lucia@example.com"
    assert "password" not in body["data"]
    assert "password_hash" not in body["data"]
    assert "timestamp" in body


def test_register_duplicate_username_is_conflict(client) -> None:
    register_account(client, nombre_usuario="lucia")

    response = client.post(
        "/api/v1/auth/register",
        json={"nombre_usuario": "lucia", "password": "secreto123"},
    )

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "RESOURCE_CONFLICT"
    assert body["error"]["details"][0]["field"] == "nombre_usuario"


def test_register_with_unknown_player_is_not_found(client) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"nombre_usuario": "lucia", "password": "secreto123", "jugador_id": 404},
    )
    assert response.status_code == 404
    assert response.json()["error"]["details"][0]["field"] == "jugador_id"


def test_register_rejects_hostile_username_and_unknown_role(client) -> None:
    hostile = client.post(
        "/api/v1/auth/register",
        json={"nombre_usuario": "x' OR 1=1", "password": "secreto123"},
    )
    bad_role = client.post(
        "/api/v1/auth/register",
        json={"nombre_usuario": "lucia", "password": "secreto123", "rol": "superuser"},
    )

    assert hostile.status_code == 400
    assert hostile.json()["error"]["code"] == "VALIDATION_FAILED"
    assert hostile.json()["error"]["details"][0]["field"] == "nombre_usuario"
    assert bad_role.status_code == 400
    assert bad_role.json()["error"]["details"][0]["field"] == "rol"


def test_login_returns_bearer_token(client) -> None:
    register_account(client, nombre_usuario="lucia")

    response = client.post(
        "/api/v1/auth/login",
        json={"nombre_usuario": "lucia", "password": "secreto123"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "Bearer"
    assert data["token"].count(".") == 2
    assert data["usuario"]["nombre_usuario"] == "lucia"


def test_login_with_wrong_password_is_invalid_credentials(client) -> None:
    register_account(client, nombre_usuario="lucia")

    wrong_password = client.post(
        "/api/v1/auth/login",
        json={"nombre_usuario": "lucia", "password": "incorrecta"},
    )
    unknown_user = client.post(
        "/api/v1/auth/login",
        json={"nombre_usuario": "nadie", "password": "secreto123"},
    )

    for response in (wrong_password, unknown_user):
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_me_requires_bearer_token(client) -> None:
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_me_rejects_invalid_and_expired_tokens(client) -> None:
    account = register_account(client, nombre_usuario="lucia")
    expired = create_access_token(
        user_id=account["id"],
        role="jugador",
        jugador_id=None,
        secret=get_settings().jwt_secret,
        now_utc=datetime.now(timezone.utc) - timedelta(days=2),
    )

    garbage = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
    stale = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {expired}"})

    assert garbage.status_code == 401
    assert garbage.json()["error"]["code"] == "INVALID_TOKEN"
    assert stale.status_code == 401
    assert stale.json()["error"]["code"] == "INVALID_TOKEN"


def test_me_returns_current_account(client) -> None:
    headers = admin_headers(client)

    response = client.get("/api/v1/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["data"]["nombre_usuario"] == "admin"
    assert response.json()["data"]["rol"] == "administrador"


def test_player_token_cannot_reach_admin_routes(client) -> None:
    register_account(client, nombre_usuario="lucia")
    headers = login_headers(client, nombre_usuario="lucia")

    response = client.post("/api/v1/admin/categorias", json={"nombre": "Primera"}, headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_admin_routes_require_authentication(client) -> None:
    response = client.delete("/api/v1/admin/jugadores/1")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
