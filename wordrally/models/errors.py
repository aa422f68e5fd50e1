"""
Game Errors

Errors raised by the session and game service. All of them are recoverable
by the caller; none should take the server down.
"""


class WordRallyError(Exception):
    """Base class for all game errors."""


class InvalidGuessLength(WordRallyError):
    """Guess does not have the configured word length. History is untouched."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Guess must be exactly {expected} letters, got {actual}")


class SessionNotInProgress(WordRallyError):
    """Guess submitted to a session that is finished or was never started."""

    def __init__(self, message: str = "Game is already over, start a new game"):
        super().__init__(message)


class EmptyWordList(WordRallyError):
    """No words are available for the requested language and word length."""

    def __init__(self, language: str, length: int):
        self.language = language
        self.length = length
        super().__init__(f"No {length}-letter words available for language '{language}'")


class GameNotFound(WordRallyError):
    """No session exists for the given player."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Game not found for player '{player_id}'")
