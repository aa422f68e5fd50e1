"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate, is_solved
from .session import Session, SystemClock, compute_score
from .word_source import WordSource
from .highscores import HighscoreTable
from .score_store import (
    ScoreStore, InMemoryScoreStore, JsonFileScoreStore, MongoScoreStore, create_score_store
)
from .game_service import GameService, get_game_service, init_game_service

__all__ = [
    'evaluate', 'is_solved',
    'Session', 'SystemClock', 'compute_score',
    'WordSource',
    'HighscoreTable',
    'ScoreStore', 'InMemoryScoreStore', 'JsonFileScoreStore', 'MongoScoreStore', 'create_score_store',
    'GameService', 'get_game_service', 'init_game_service'
]
