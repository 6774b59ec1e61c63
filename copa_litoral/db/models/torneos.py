from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, CheckConstraint, Date, Index, Integer, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from copa_litoral.db.models.base import Base, TimestampMixin


class Torneo(TimestampMixin, Base):
    __tablename__ = "torneos"
    __table_args__ = (
        CheckConstraint(
            "fecha_fin IS NULL OR fecha_inicio IS NULL OR fecha_fin >= fecha_inicio",
            name="ck_torneos_fechas_orden",
        ),
        Index("idx_torneos_activo_anio", "activo", "anio"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    anio: Mapped[int] = mapped_column(Integer, nullable=False)
    fecha_inicio: Mapped[date | None] = mapped_column(Date, nullable=True)
    fecha_fin: Mapped[date | None] = mapped_column(Date, nullable=True)
    foto_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    frase_destacada: Mapped[str | None] = mapped_column(Text, nullable=True)
    activo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
