"""Custom exceptions. Every error raised on purpose by this package derives from GameError."""


class GameError(Exception):
    """Top-level exception for anything going wrong in a game of Go."""


class GameStateError(GameError):
    """The game is not in a state that allows the request (e.g. it is already over)."""


class IllegalMoveError(GameError):
    """The analysis layer rejected the placement."""


class NotYourTurnError(GameError):
    pass


class InvalidRequestError(GameError):
    """Raised by request validators. Not a ValueError, so pydantic lets it through unchanged."""
