from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from copa_litoral.db.models.base import Base, TimestampMixin


class Usuario(TimestampMixin, Base):
    __tablename__ = "usuarios"
    __table_args__ = (
        CheckConstraint("rol IN ('administrador','jugador')", name="ck_usuarios_rol"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre_usuario: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    rol: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="jugador",
        server_default="jugador",
    )
    jugador_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("jugadores.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )
