class AccountError(Exception):
    pass


class UsernameTakenError(AccountError):
    pass


class EmailTakenError(AccountError):
    pass


class InvalidCredentialsError(AccountError):
    pass


class InvalidTokenError(AccountError):
    pass


class AccountNotFoundError(AccountError):
    pass


class LinkedPlayerNotFoundError(AccountError):
    pass


class PlayerAlreadyLinkedError(AccountError):
    pass
