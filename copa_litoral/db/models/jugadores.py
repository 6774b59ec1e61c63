from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from copa_litoral.db.models.base import Base, TimestampMixin


class Jugador(TimestampMixin, Base):
    __tablename__ = "jugadores"
    __table_args__ = (
        Index("idx_jugadores_categoria_id", "categoria_id"),
        Index("idx_jugadores_apellido_nombre", "apellido", "nombre"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    apellido: Mapped[str] = mapped_column(String(255), nullable=False)
    telefono_wsp: Mapped[str | None] = mapped_column(String(50), nullable=True)
    contacto_visible_en_web: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    categoria_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categorias.id", ondelete="RESTRICT"),
        nullable=True,
    )
    club: Mapped[str | None] = mapped_column(String(255), nullable=True)
    estado_participacion: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="Activo",
        server_default="Activo",
    )
