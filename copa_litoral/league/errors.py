class LeagueError(Exception):
    pass


class CategoryNotFoundError(LeagueError):
    pass


class CategoryNameTakenError(LeagueError):
    pass


class PlayerNotFoundError(LeagueError):
    pass


class TournamentNotFoundError(LeagueError):
    pass


class TournamentDatesError(LeagueError):
    pass
