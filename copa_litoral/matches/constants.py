from __future__ import annotations

from enum import Enum


class MatchStatus(str, Enum):
    PENDING = "pendiente"
    SCHEDULED = "agendado"
    FINISHED = "finalizado"
    APPROVED = "aprobado"
    DISPUTED = "disputado"
    CANCELLED = "cancelado"


class MatchAction(str, Enum):
    UPDATE = "update"
    PROPOSE_TIME = "propose_time"
    ACCEPT_TIME = "accept_time"
    REPORT_RESULT = "report_result"
    APPROVE_RESULT = "approve_result"
    DISPUTE_RESULT = "dispute_result"
    CANCEL = "cancel"


MATCH_SLOT_PLAYER_1 = 1
MATCH_SLOT_PLAYER_2 = 2

MATCH_MAX_SETS = 5
