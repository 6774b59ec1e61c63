PARTICIPATION_ACTIVE = "Activo"
PARTICIPATION_ELIMINATED = "Eliminado"
PARTICIPATION_INACTIVE = "Inactivo"

DEFAULT_PAGE_LIMIT = 100
MAX_PAGE_LIMIT = 500

CATEGORY_MUTABLE_FIELDS = frozenset({"nombre"})
PLAYER_MUTABLE_FIELDS = frozenset(
    {
        "nombre",
        "apellido",
        "telefono_wsp",
        "contacto_visible_en_web",
        "categoria_id",
        "club",
        "estado_participacion",
    }
)
TOURNAMENT_MUTABLE_FIELDS = frozenset(
    {
        "nombre",
        "anio",
        "fecha_inicio",
        "fecha_fin",
        "foto_url",
        "frase_destacada",
        "activo",
    }
)
