"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "categorias",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nombre", sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("nombre", name="uq_categorias_nombre"),
    )
    op.create_table(
        "torneos",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nombre", sa.String(length=255), nullable=False),
        sa.Column("anio", sa.Integer(), nullable=False),
        sa.Column("fecha_inicio", sa.Date(), nullable=True),
        sa.Column("fecha_fin", sa.Date(), nullable=True),
        sa.Column("foto_url", sa.Text(), nullable=True),
        sa.Column("frase_destacada", sa.Text(), nullable=True),
        sa.Column("activo", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint(
            "fecha_fin IS NULL OR fecha_inicio IS NULL OR fecha_fin >= fecha_inicio",
            name="ck_torneos_fechas_orden",
        ),
    )
    op.create_index("idx_torneos_activo_anio", "torneos", ["activo", "anio"])

    op.create_table(
        "jugadores",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nombre", sa.String(length=255), nullable=False),
        sa.Column("apellido", sa.String(length=255), nullable=False),
        sa.Column("telefono_wsp", sa.String(length=50), nullable=True),
        sa.Column("contacto_visible_en_web", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "categoria_id",
            sa.Integer(),
            sa.ForeignKey("categorias.id", ondelete="RESTRICT", name="fk_jugadores_categoria_id_categorias"),
            nullable=True,
        ),
        sa.Column("club", sa.String(length=255), nullable=True),
        sa.Column("estado_participacion", sa.String(length=50), nullable=False, server_default="Activo"),
        *_timestamps(),
    )
    op.create_index("idx_jugadores_categoria_id", "jugadores", ["categoria_id"])
    op.create_index("idx_jugadores_apellido_nombre", "jugadores", ["apellido", "nombre"])

    op.create_table(
        "usuarios",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nombre_usuario", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("rol", sa.String(length=50), nullable=False, server_default="jugador"),
        sa.Column(
            "jugador_id",
            sa.Integer(),
            sa.ForeignKey("jugadores.id", ondelete="SET NULL", name="fk_usuarios_jugador_id_jugadores"),
            nullable=True,
        ),
        *_timestamps(),
        sa.UniqueConstraint("nombre_usuario", name="uq_usuarios_nombre_usuario"),
        sa.UniqueConstraint("email", name="uq_usuarios_email"),
        sa.UniqueConstraint("jugador_id", name="uq_usuarios_jugador_id"),
        sa.CheckConstraint("rol IN ('administrador','jugador')", name="ck_usuarios_rol"),
    )

    op.create_table(
        "partidos",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "torneo_id",
            sa.Integer(),
            sa.ForeignKey("torneos.id", ondelete="CASCADE", name="fk_partidos_torneo_id_torneos"),
            nullable=True,
        ),
        sa.Column(
            "categoria_id",
            sa.Integer(),
            sa.ForeignKey("categorias.id", ondelete="RESTRICT", name="fk_partidos_categoria_id_categorias"),
            nullable=True,
        ),
        sa.Column(
            "jugador1_id",
            sa.Integer(),
            sa.ForeignKey("jugadores.id", ondelete="CASCADE", name="fk_partidos_jugador1_id_jugadores"),
            nullable=False,
        ),
        sa.Column(
            "jugador2_id",
            sa.Integer(),
            sa.ForeignKey("jugadores.id", ondelete="CASCADE", name="fk_partidos_jugador2_id_jugadores"),
            nullable=False,
        ),
        sa.Column("fase", sa.String(length=100), nullable=False),
        sa.Column("fecha_agendada", sa.Date(), nullable=True),
        sa.Column("hora_agendada", sa.Time(), nullable=True),
        sa.Column("propuesta_fecha_j1", sa.Date(), nullable=True),
        sa.Column("propuesta_hora_j1", sa.Time(), nullable=True),
        sa.Column("propuesta_fecha_j2", sa.Date(), nullable=True),
        sa.Column("propuesta_hora_j2", sa.Time(), nullable=True),
        sa.Column("propuesta_aceptada_j1", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("propuesta_aceptada_j2", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("estado", sa.String(length=16), nullable=False, server_default="pendiente"),
        sa.Column("resultado_sets_j1", sa.Integer(), nullable=True),
        sa.Column("resultado_sets_j2", sa.Integer(), nullable=True),
        sa.Column(
            "ganador_id",
            sa.Integer(),
            sa.ForeignKey("jugadores.id", ondelete="SET NULL", name="fk_partidos_ganador_id_jugadores"),
            nullable=True,
        ),
        sa.Column(
            "perdedor_id",
            sa.Integer(),
            sa.ForeignKey("jugadores.id", ondelete="SET NULL", name="fk_partidos_perdedor_id_jugadores"),
            nullable=True,
        ),
        sa.Column("resultado_aprobado", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        *_timestamps(),
        sa.CheckConstraint(
            "estado IN ('pendiente','agendado','finalizado','aprobado','disputado','cancelado')",
            name="ck_partidos_estado",
        ),
        sa.CheckConstraint("jugador1_id <> jugador2_id", name="ck_partidos_no_self_match"),
        sa.CheckConstraint(
            "ganador_id IS NULL OR perdedor_id IS NULL OR ganador_id <> perdedor_id",
            name="ck_partidos_ganador_perdedor_distinct",
        ),
        sa.CheckConstraint(
            "(resultado_sets_j1 IS NULL OR resultado_sets_j1 >= 0) "
            "AND (resultado_sets_j2 IS NULL OR resultado_sets_j2 >= 0)",
            name="ck_partidos_resultado_sets_non_negative",
        ),
    )
    op.create_index("idx_partidos_categoria_estado", "partidos", ["categoria_id", "estado"])
    op.create_index("idx_partidos_torneo_id", "partidos", ["torneo_id"])
    op.create_index("idx_partidos_jugador1_id", "partidos", ["jugador1_id"])
    op.create_index("idx_partidos_jugador2_id", "partidos", ["jugador2_id"])

    op.create_table(
        "sets_partido",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "partido_id",
            sa.Integer(),
            sa.ForeignKey("partidos.id", ondelete="CASCADE", name="fk_sets_partido_partido_id_partidos"),
            nullable=False,
        ),
        sa.Column("numero_set", sa.Integer(), nullable=False),
        sa.Column("score_jugador1", sa.Integer(), nullable=False),
        sa.Column("score_jugador2", sa.Integer(), nullable=False),
        sa.Column("tie_break_j1", sa.Integer(), nullable=True),
        sa.Column("tie_break_j2", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("partido_id", "numero_set", name="uq_sets_partido_partido_numero_set"),
        sa.CheckConstraint("numero_set >= 1", name="ck_sets_partido_numero_set_positive"),
        sa.CheckConstraint(
            "score_jugador1 >= 0 AND score_jugador2 >= 0",
            name="ck_sets_partido_scores_non_negative",
        ),
    )


def downgrade() -> None:
    op.drop_table("sets_partido")
    op.drop_index("idx_partidos_jugador2_id", table_name="partidos")
    op.drop_index("idx_partidos_jugador1_id", table_name="partidos")
    op.drop_index("idx_partidos_torneo_id", table_name="partidos")
    op.drop_index("idx_partidos_categoria_estado", table_name="partidos")
    op.drop_table("partidos")
    op.drop_table("usuarios")
    op.drop_index("idx_jugadores_apellido_nombre", table_name="jugadores")
    op.drop_index("idx_jugadores_categoria_id", table_name="jugadores")
    op.drop_table("jugadores")
    op.drop_index("idx_torneos_activo_anio", table_name="torneos")
    op.drop_table("torneos")
    op.drop_table("categorias")
