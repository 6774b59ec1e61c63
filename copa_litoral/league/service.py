from copa_litoral.league.categorias import (
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
)
from copa_litoral.league.jugadores import (
    create_player,
    delete_player,
    get_player,
    list_players,
    update_player,
)
from copa_litoral.league.torneos import (
    create_tournament,
    delete_tournament,
    get_tournament,
    list_tournaments,
    update_tournament,
)

__all__ = [
    "create_category",
    "create_player",
    "create_tournament",
    "delete_category",
    "delete_player",
    "delete_tournament",
    "get_category",
    "get_player",
    "get_tournament",
    "list_categories",
    "list_players",
    "list_tournaments",
    "update_category",
    "update_player",
    "update_tournament",
]
