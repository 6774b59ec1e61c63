from __future__ import annotations

from datetime import date, time

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column

from copa_litoral.db.models.base import Base, TimestampMixin


class Partido(TimestampMixin, Base):
    __tablename__ = "partidos"
    __table_args__ = (
        CheckConstraint(
            "estado IN ('pendiente','agendado','finalizado','aprobado','disputado','cancelado')",
            name="ck_partidos_estado",
        ),
        CheckConstraint("jugador1_id <> jugador2_id", name="ck_partidos_no_self_match"),
        CheckConstraint(
            "ganador_id IS NULL OR perdedor_id IS NULL OR ganador_id <> perdedor_id",
            name="ck_partidos_ganador_perdedor_distinct",
        ),
        CheckConstraint(
            "(resultado_sets_j1 IS NULL OR resultado_sets_j1 >= 0) "
            "AND (resultado_sets_j2 IS NULL OR resultado_sets_j2 >= 0)",
            name="ck_partidos_resultado_sets_non_negative",
        ),
        Index("idx_partidos_categoria_estado", "categoria_id", "estado"),
        Index("idx_partidos_torneo_id", "torneo_id"),
        Index("idx_partidos_jugador1_id", "jugador1_id"),
        Index("idx_partidos_jugador2_id", "jugador2_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    torneo_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("torneos.id", ondelete="CASCADE"),
        nullable=True,
    )
    categoria_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categorias.id", ondelete="RESTRICT"),
        nullable=True,
    )
    jugador1_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("jugadores.id", ondelete="CASCADE"),
        nullable=False,
    )
    jugador2_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("jugadores.id", ondelete="CASCADE"),
        nullable=False,
    )
    fase: Mapped[str] = mapped_column(String(100), nullable=False)
    fecha_agendada: Mapped[date | None] = mapped_column(Date, nullable=True)
    hora_agendada: Mapped[time | None] = mapped_column(Time, nullable=True)
    propuesta_fecha_j1: Mapped[date | None] = mapped_column(Date, nullable=True)
    propuesta_hora_j1: Mapped[time | None] = mapped_column(Time, nullable=True)
    propuesta_fecha_j2: Mapped[date | None] = mapped_column(Date, nullable=True)
    propuesta_hora_j2: Mapped[time | None] = mapped_column(Time, nullable=True)
    propuesta_aceptada_j1: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    propuesta_aceptada_j2: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    estado: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="pendiente",
        server_default="pendiente",
    )
    resultado_sets_j1: Mapped[int | None] = mapped_column(Integer, nullable=True)
    resultado_sets_j2: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ganador_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("jugadores.id", ondelete="SET NULL"),
        nullable=True,
    )
    perdedor_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("jugadores.id", ondelete="SET NULL"),
        nullable=True,
    )
    resultado_aprobado: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, server_default="1")

    __mapper_args__ = {"version_id_col": version}
