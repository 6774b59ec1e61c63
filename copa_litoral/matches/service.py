from copa_litoral.matches.admin import create_match, delete_match, update_match
from copa_litoral.matches.queries import get_match, list_matches
from copa_litoral.matches.results import (
    approve_result,
    cancel_match,
    dispute_result,
    report_result,
)
from copa_litoral.matches.scheduling import accept_time, propose_time

__all__ = [
    "accept_time",
    "approve_result",
    "cancel_match",
    "create_match",
    "delete_match",
    "dispute_result",
    "get_match",
    "list_matches",
    "propose_time",
    "report_result",
    "update_match",
]
