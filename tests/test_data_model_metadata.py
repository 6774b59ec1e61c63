from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from copa_litoral.db.models import Base, Partido


def _names(table_name: str, kind: type) -> set[str]:
    table = Base.metadata.tables[table_name]
    return {constraint.name for constraint in table.constraints if isinstance(constraint, kind)}


def test_all_league_tables_registered() -> None:
    assert set(Base.metadata.tables) == {
        "usuarios",
        "categorias",
        "jugadores",
        "torneos",
        "partidos",
        "sets_partido",
    }


def test_critical_constraints_present() -> None:
    assert {
        "ck_partidos_estado",
        "ck_partidos_no_self_match",
        "ck_partidos_ganador_perdedor_distinct",
        "ck_partidos_resultado_sets_non_negative",
    } <= _names("partidos", CheckConstraint)
    assert "uq_sets_partido_partido_numero_set" in _names("sets_partido", UniqueConstraint)
    assert "ck_torneos_fechas_orden" in _names("torneos", CheckConstraint)
    assert "ck_usuarios_rol" in _names("usuarios", CheckConstraint)

    partido_indexes = {index.name for index in Base.metadata.tables["partidos"].indexes}
    assert {"idx_partidos_categoria_estado", "idx_partidos_jugador1_id", "idx_partidos_jugador2_id"} <= partido_indexes


def test_foreign_key_delete_rules() -> None:
    def ondelete(table_name: str, column_name: str) -> str | None:
        (foreign_key,) = Base.metadata.tables[table_name].columns[column_name].foreign_keys
        return foreign_key.ondelete

    assert ondelete("jugadores", "categoria_id") == "RESTRICT"
    assert ondelete("partidos", "jugador1_id") == "CASCADE"
    assert ondelete("partidos", "ganador_id") == "SET NULL"
    assert ondelete("sets_partido", "partido_id") == "CASCADE"
    assert ondelete("usuarios", "jugador_id") == "SET NULL"


def test_partido_uses_version_counter() -> None:
    assert Partido.__mapper__.version_id_col is Partido.__table__.c.version
