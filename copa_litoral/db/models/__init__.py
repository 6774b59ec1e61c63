from copa_litoral.db.models.base import Base
from copa_litoral.db.models.categorias import Categoria
from copa_litoral.db.models.jugadores import Jugador
from copa_litoral.db.models.partidos import Partido
from copa_litoral.db.models.sets_partido import SetPartido
from copa_litoral.db.models.torneos import Torneo
from copa_litoral.db.models.usuarios import Usuario

__all__ = [
    "Base",
    "Categoria",
    "Jugador",
    "Partido",
    "SetPartido",
    "Torneo",
    "Usuario",
]
