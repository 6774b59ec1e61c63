from copa_litoral.db.repo.categorias_repo import CategoriasRepo
from copa_litoral.db.repo.jugadores_repo import JugadoresRepo
from copa_litoral.db.repo.partidos_repo import PartidosRepo
from copa_litoral.db.repo.sets_partido_repo import SetsPartidoRepo
from copa_litoral.db.repo.torneos_repo import TorneosRepo
from copa_litoral.db.repo.usuarios_repo import UsuariosRepo

__all__ = [
    "CategoriasRepo",
    "JugadoresRepo",
    "PartidosRepo",
    "SetsPartidoRepo",
    "TorneosRepo",
    "UsuariosRepo",
]
