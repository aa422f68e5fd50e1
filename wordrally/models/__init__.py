"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    Attempt, GameState, HighscoreEntry, LetterResult, LetterStatus,
    Outcome, PuzzleConfig, ScoreRecord
)
from .errors import (
    EmptyWordList, GameNotFound, InvalidGuessLength, SessionNotInProgress, WordRallyError
)

__all__ = [
    'Attempt', 'GameState', 'HighscoreEntry', 'LetterResult', 'LetterStatus',
    'Outcome', 'PuzzleConfig', 'ScoreRecord',
    'EmptyWordList', 'GameNotFound', 'InvalidGuessLength', 'SessionNotInProgress',
    'WordRallyError'
]
