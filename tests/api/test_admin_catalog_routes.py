from __future__ import annotations

from tests.league_fixtures import admin_headers, create_categoria, create_jugador, create_partido


def test_category_crud_and_public_reads(client) -> None:
    headers = admin_headers(client)
    categoria_id = create_categoria(client, headers, nombre="Primera")

    renamed = client.put(
        f"/api/v1/admin/categorias/{categoria_id}",
        json={"nombre": "Primera A"},
        headers=headers,
    )
    listed = client.get("/api/v1/categorias")
    fetched = client.get(f"/api/v1/categorias/{categoria_id}")

    assert renamed.status_code == 200
    assert renamed.json()["data"]["nombre"] == "Primera A"
    assert [item["nombre"] for item in listed.json()["data"]] == ["Primera A"]
    assert fetched.json()["data"]["id"] == categoria_id

    deleted = client.delete(f"/api/v1/admin/categorias/{categoria_id}", headers=headers)
    missing = client.get(f"/api/v1/categorias/{categoria_id}")

    assert deleted.status_code == 200
    assert deleted.json()["data"] is None
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


def test_duplicate_category_is_conflict(client) -> None:
    headers = admin_headers(client)
    create_categoria(client, headers, nombre="Primera")

    response = client.post("/api/v1/admin/categorias", json={"nombre": "Primera"}, headers=headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "RESOURCE_CONFLICT"


def test_deleting_category_in_use_is_conflict(client) -> None:
    headers = admin_headers(client)
    categoria_id = create_categoria(client, headers)
    create_jugador(client, headers, nombre="Ana", apellido="Lopez", categoria_id=categoria_id)

    response = client.delete(f"/api/v1/admin/categorias/{categoria_id}", headers=headers)

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "RESOURCE_CONFLICT"
    assert body["path"] == f"/api/v1/admin/categorias/{categoria_id}"
    assert body["method"] == "DELETE"
    assert client.get(f"/api/v1/categorias/{categoria_id}").status_code == 200


def test_player_contact_is_hidden_unless_visible(client) -> None:
    headers = admin_headers(client)
    hidden_id = create_jugador(
        client,
        headers,
        nombre="Ana",
        apellido="Lopez",
        telefono_wsp="+54 341 555-0001",
    )
    visible_id = create_jugador(
        client,
        headers,
        nombre="Bea",
        apellido="Suarez",
        telefono_wsp="+543415550002",
        contacto_visible_en_web=True,
    )

    hidden = client.get(f"/api/v1/jugadores/{hidden_id}").json()["data"]
    visible = client.get(f"/api/v1/jugadores/{visible_id}").json()["data"]
    admin_view = client.put(
        f"/api/v1/admin/jugadores/{hidden_id}",
        json={"club": "Club <Náutico>"},
        headers=headers,
    ).json()["data"]

    assert hidden["telefono_wsp"] is None
    assert visible["telefono_wsp"] == "+543415550002"
    assert admin_view["telefono_wsp"] == "+543415550001"
    assert admin_view["club"] == "Club &lt;Náutico&gt;"
    assert admin_view["nombre"] == "Ana"


def test_player_validation_errors_name_the_field(client) -> None:
    headers = admin_headers(client)

    too_long = client.post(
        "/api/v1/admin/jugadores",
        json={"nombre": "A" * 256, "apellido": "Lopez"},
        headers=headers,
    )
    bad_phone = client.post(
        "/api/v1/admin/jugadores",
        json={"nombre": "Ana", "apellido": "Lopez", "telefono_wsp": "abc"},
        headers=headers,
    )
    unknown_field = client.post(
        "/api/v1/admin/jugadores",
        json={"nombre": "Ana", "apellido": "Lopez", "ranking": 1},
        headers=headers,
    )
    null_name = client.put(
        "/api/v1/admin/jugadores/1",
        json={"nombre": None},
        headers=headers,
    )

    assert too_long.status_code == 400
    assert too_long.json()["error"]["code"] == "VALIDATION_FAILED"
    assert too_long.json()["error"]["details"][0]["field"] == "nombre"
    assert bad_phone.json()["error"]["details"][0]["field"] == "telefono_wsp"
    assert unknown_field.status_code == 400
    assert unknown_field.json()["error"]["details"][0]["field"] == "ranking"
    assert null_name.status_code == 400
    assert null_name.json()["error"]["details"][0]["field"] == "nombre"


def test_player_with_unknown_category_is_not_found(client) -> None:
    headers = admin_headers(client)

    response = client.post(
        "/api/v1/admin/jugadores",
        json={"nombre": "Ana", "apellido": "Lopez", "categoria_id": 404},
        headers=headers,
    )

    assert response.status_code == 404
    assert response.json()["error"]["details"][0]["field"] == "categoria_id"


def test_player_list_filters(client) -> None:
    headers = admin_headers(client)
    categoria_id = create_categoria(client, headers)
    ana_id = create_jugador(client, headers, nombre="Ana", apellido="Lopez", categoria_id=categoria_id)
    create_jugador(client, headers, nombre="Bea", apellido="Suarez", estado_participacion="Inactivo")

    by_category = client.get("/api/v1/jugadores", params={"categoria_id": categoria_id})
    inactive = client.get("/api/v1/jugadores", params={"estado_participacion": "Inactivo"})

    assert [item["id"] for item in by_category.json()["data"]] == [ana_id]
    assert [item["nombre"] for item in inactive.json()["data"]] == ["Bea"]


def test_tournament_crud_and_date_validation(client) -> None:
    headers = admin_headers(client)

    inverted = client.post(
        "/api/v1/admin/torneos",
        json={"nombre": "Copa", "anio": 2026, "fecha_inicio": "2026-05-01", "fecha_fin": "2026-04-01"},
        headers=headers,
    )
    created = client.post(
        "/api/v1/admin/torneos",
        json={"nombre": "Copa Litoral", "anio": 2026, "fecha_inicio": "2026-05-01", "fecha_fin": "2026-06-30"},
        headers=headers,
    )
    torneo_id = created.json()["data"]["id"]
    bad_update = client.put(
        f"/api/v1/admin/torneos/{torneo_id}",
        json={"fecha_fin": "2026-04-01"},
        headers=headers,
    )
    closed = client.put(f"/api/v1/admin/torneos/{torneo_id}", json={"activo": False}, headers=headers)
    active = client.get("/api/v1/torneos", params={"activo": "true"})
    inactive = client.get("/api/v1/torneos", params={"activo": "false"})

    assert inverted.status_code == 400
    assert inverted.json()["error"]["code"] == "VALIDATION_FAILED"
    assert created.status_code == 201
    assert created.json()["data"]["activo"] is True
    assert bad_update.status_code == 400
    assert bad_update.json()["error"]["details"][0]["field"] == "fecha_fin"
    assert closed.json()["data"]["activo"] is False
    assert active.json()["data"] == []
    assert [item["id"] for item in inactive.json()["data"]] == [torneo_id]

    assert client.delete(f"/api/v1/admin/torneos/{torneo_id}", headers=headers).status_code == 200
    assert client.get(f"/api/v1/torneos/{torneo_id}").status_code == 404


def test_match_admin_crud(client) -> None:
    headers = admin_headers(client)
    categoria_id = create_categoria(client, headers)
    ana_id = create_jugador(client, headers, nombre="Ana", apellido="Lopez", categoria_id=categoria_id)
    bea_id = create_jugador(client, headers, nombre="Bea", apellido="Suarez", categoria_id=categoria_id)

    same_player = client.post(
        "/api/v1/admin/partidos",
        json={"jugador1_id": ana_id, "jugador2_id": ana_id, "fase": "Final"},
        headers=headers,
    )
    missing_player = client.post(
        "/api/v1/admin/partidos",
        json={"jugador1_id": ana_id, "jugador2_id": 404, "fase": "Final"},
        headers=headers,
    )
    partido = create_partido(
        client,
        headers,
        jugador1_id=ana_id,
        jugador2_id=bea_id,
        categoria_id=categoria_id,
    )
    scheduled = client.put(
        f"/api/v1/admin/partidos/{partido['id']}",
        json={"fecha_agendada": "2026-11-20", "hora_agendada": "18:30"},
        headers=headers,
    )

    assert same_player.status_code == 400
    assert same_player.json()["error"]["code"] == "VALIDATION_FAILED"
    assert missing_player.status_code == 404
    assert missing_player.json()["error"]["details"][0]["field"] == "jugador_id"
    assert partido["estado"] == "pendiente"
    assert partido["jugador1_nombre"] == "Ana Lopez"
    assert partido["categoria_nombre"] == "Primera"
    assert partido["sets"] == []
    assert scheduled.status_code == 200
    assert scheduled.json()["data"]["estado"] == "agendado"
    assert scheduled.json()["data"]["hora_agendada"] == "18:30:00"

    deleted = client.delete(f"/api/v1/admin/partidos/{partido['id']}", headers=headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/v1/partidos/{partido['id']}").status_code == 404
