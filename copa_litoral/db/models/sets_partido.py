from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from copa_litoral.db.models.base import Base, TimestampMixin


class SetPartido(TimestampMixin, Base):
    __tablename__ = "sets_partido"
    __table_args__ = (
        UniqueConstraint("partido_id", "numero_set", name="uq_sets_partido_partido_numero_set"),
        CheckConstraint("numero_set >= 1", name="ck_sets_partido_numero_set_positive"),
        CheckConstraint(
            "score_jugador1 >= 0 AND score_jugador2 >= 0",
            name="ck_sets_partido_scores_non_negative",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    partido_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("partidos.id", ondelete="CASCADE"),
        nullable=False,
    )
    numero_set: Mapped[int] = mapped_column(Integer, nullable=False)
    score_jugador1: Mapped[int] = mapped_column(Integer, nullable=False)
    score_jugador2: Mapped[int] = mapped_column(Integer, nullable=False)
    tie_break_j1: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tie_break_j2: Mapped[int | None] = mapped_column(Integer, nullable=True)
