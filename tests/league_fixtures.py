from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient

DEFAULT_PASSWORD = "secreto123"


def register_account(
    client: TestClient,
    *,
    nombre_usuario: str,
    rol: str = "jugador",
    jugador_id: int | None = None,
    password: str = DEFAULT_PASSWORD,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"nombre_usuario": nombre_usuario, "password": password, "rol": rol}
    if jugador_id is not None:
        payload["jugador_id"] = jugador_id
    response = client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def login_headers(
    client: TestClient,
    *,
    nombre_usuario: str,
    password: str = DEFAULT_PASSWORD,
) -> dict[str, str]:
    response = client.post(
        "/api/v1/auth/login",
        json={"nombre_usuario": nombre_usuario, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


def admin_headers(client: TestClient, *, nombre_usuario: str = "admin") -> dict[str, str]:
    register_account(client, nombre_usuario=nombre_usuario, rol="administrador")
    return login_headers(client, nombre_usuario=nombre_usuario)


def player_headers(client: TestClient, *, nombre_usuario: str, jugador_id: int) -> dict[str, str]:
    register_account(client, nombre_usuario=nombre_usuario, jugador_id=jugador_id)
    return login_headers(client, nombre_usuario=nombre_usuario)


def create_categoria(client: TestClient, headers: dict[str, str], *, nombre: str = "Primera") -> int:
    response = client.post("/api/v1/admin/categorias", json={"nombre": nombre}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


def create_jugador(
    client: TestClient,
    headers: dict[str, str],
    *,
    nombre: str,
    apellido: str,
    categoria_id: int | None = None,
    **extra: Any,
) -> int:
    payload: dict[str, Any] = {"nombre": nombre, "apellido": apellido, **extra}
    if categoria_id is not None:
        payload["categoria_id"] = categoria_id
    response = client.post("/api/v1/admin/jugadores", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


def create_partido(
    client: TestClient,
    headers: dict[str, str],
    *,
    jugador1_id: int,
    jugador2_id: int,
    categoria_id: int | None = None,
    torneo_id: int | None = None,
    fase: str = "Fase de grupos",
) -> dict[str, Any]:
    payload: dict[str, Any] = {"jugador1_id": jugador1_id, "jugador2_id": jugador2_id, "fase": fase}
    if categoria_id is not None:
        payload["categoria_id"] = categoria_id
    if torneo_id is not None:
        payload["torneo_id"] = torneo_id
    response = client.post("/api/v1/admin/partidos", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]
