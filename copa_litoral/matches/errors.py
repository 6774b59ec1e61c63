from __future__ import annotations


class MatchError(Exception):
    pass


class MatchNotFoundError(MatchError):
    pass


class MatchReferenceNotFoundError(MatchError):
    def __init__(self, reference: str) -> None:
        super().__init__(reference)
        self.reference = reference


class MatchSamePlayerError(MatchError):
    pass


class NotParticipantError(MatchError):
    pass


class NoProposalError(MatchError):
    pass


class InvalidWinnerError(MatchError):
    pass


class ResultNotReportedError(MatchError):
    pass


class InvalidMatchTransitionError(MatchError):
    def __init__(self, *, status: str, action: str) -> None:
        super().__init__(f"{action} not allowed while match is {status}")
        self.status = status
        self.action = action


class MatchConcurrentUpdateError(MatchError):
    pass
