ROLE_ADMIN = "administrador"
ROLE_PLAYER = "jugador"
ROLES = (ROLE_ADMIN, ROLE_PLAYER)

DEFAULT_TOKEN_LIFETIME_HOURS = 24
