"""
Game Service

Keeps one Session per player and connects finished games to the highscore
table and the score store.
"""

import uuid
from typing import Dict, Optional, Tuple

from flask import current_app, has_app_context

from ..models.errors import GameNotFound
from ..models.game import GameState, Outcome, PuzzleConfig, ScoreRecord
from ..utils.game_logger import game_logger
from .highscores import HighscoreTable
from .score_store import ScoreStore
from .session import Session

MAX_NAME_LENGTH = 20


class GameService:
    """
    Core game service managing one session per player.
    
    This class handles:
    - Session management keyed by player id
    - Secret target storage (never exposed while a game is running)
    - Highscore candidates of won games
    - Best-effort persistence: a failing store never changes in-memory state
    - Dropping the oldest sessions once more than max_games are held
    """
    
    def __init__(self, word_source, score_store: ScoreStore, clock=None,
                 max_games: Optional[int] = None):
        self.word_source = word_source
        self.score_store = score_store
        self.clock = clock
        self.max_games = max_games
        self.games: Dict[str, Session] = {}
        self.pending_highscores: Dict[str, Tuple[ScoreRecord, PuzzleConfig]] = {}
        
        table_entries = self._load(score_store.load_highscore_table, default=[])
        self.highscore_table = HighscoreTable(table_entries)
        self.best_record: Optional[ScoreRecord] = self._load(score_store.load_highscore, default=None)
    
    def create_new_game(self, player_id: Optional[str] = None,
                        language: str = "de", word_length: int = 5) -> str:
        """
        Starts a new game for a player, replacing any previous one.
        
        Args:
            player_id: Existing player id, a new one is generated if omitted
            language: Language tag of the word list
            word_length: Number of letters of the target word
            
        Returns:
            str: The player id owning the new session
            
        Raises:
            ValueError: If language or word length is not supported
            EmptyWordList: If no words exist for the configuration
        """
        config = PuzzleConfig(word_length=word_length, language=language)
        session = Session(self.word_source, self.clock)
        session.start_new_game(config)
        
        player_id = player_id or str(uuid.uuid4())
        self.delete_game(player_id)
        self.games[player_id] = session
        self._evict_oldest()
        return player_id
    
    def get_session(self, player_id: str) -> Session:
        session = self.games.get(player_id)
        if session is None:
            raise GameNotFound(player_id)
        return session
    
    def get_game_state(self, player_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a player (without revealing the answer).
        
        Returns:
            GameState object or None if game not found
        """
        session = self.games.get(player_id)
        if session is None:
            return None
        
        score = session.score
        return GameState(
            player_id=player_id,
            language=session.config.language,
            word_length=session.config.word_length,
            outcome=session.outcome.value,
            attempts_used=session.attempts_used,
            elapsed_seconds=session.elapsed_seconds(),
            history=[[result.to_dict() for result in attempt] for attempt in session.history],
            max_attempts=session.max_attempts,
            score=score.to_dict() if score else None,
            answer=session.revealed_target,
            highscore_candidate=player_id in self.pending_highscores,
        )
    
    def make_guess(self, player_id: str, guess: str) -> GameState:
        """
        Processes a guess and updates game state.
        
        Raises:
            GameNotFound: If the player has no game
            SessionNotInProgress: If the game is already over
            InvalidGuessLength: If the guess has the wrong length
        """
        session = self.get_session(player_id)
        session.submit_guess(guess.strip())
        
        if session.outcome == Outcome.WON:
            self._propose_highscore(player_id, session)
        
        return self.get_game_state(player_id)
    
    def submit_highscore(self, player_id: str, name: Optional[str] = None) -> Optional[int]:
        """
        Admits the player's pending candidate to the highscore table.
        
        Returns:
            Optional[int]: 0-based rank in the table, None if there was no
            qualifying candidate
        """
        pending = self.pending_highscores.pop(player_id, None)
        if pending is None:
            return None
        
        record, config = pending
        name = name.strip()[:MAX_NAME_LENGTH] if isinstance(name, str) else ""
        name = name or None
        rank = self.highscore_table.admit(
            record, name=name, language=config.language, word_length=config.word_length
        )
        if rank is not None:
            self._persist(self.score_store.save_highscore_table, self.highscore_table.entries)
        return rank
    
    def get_highscores(self) -> Dict:
        return {
            "best": self.best_record.to_dict() if self.best_record else None,
            "table": self.highscore_table.to_list(),
        }
    
    def delete_game(self, player_id: str) -> bool:
        """
        Removes a player's session from memory.
        
        Returns:
            bool: True if game was deleted, False if not found
        """
        self.pending_highscores.pop(player_id, None)
        if player_id in self.games:
            del self.games[player_id]
            return True
        return False
    
    def _propose_highscore(self, player_id: str, session: Session) -> None:
        record = session.score
        
        if self.best_record is None or record.ranks_above(self.best_record):
            self.best_record = record
            self._persist(self.score_store.save_highscore, record)
        
        if self.highscore_table.qualifies(record):
            self.pending_highscores[player_id] = (record, session.config)
    
    def _evict_oldest(self) -> None:
        # Games are kept in creation order
        while self.max_games and len(self.games) > self.max_games:
            oldest = next(iter(self.games))
            self.delete_game(oldest)
            game_logger.logger.info(f"Evicted game of player {oldest}")
    
    def _persist(self, write, *args) -> bool:
        try:
            write(*args)
            return True
        except Exception as e:
            game_logger.logger.warning(f"Score store write failed ({write.__name__}): {e}")
            return False
    
    def _load(self, read, default):
        try:
            value = read()
        except Exception as e:
            game_logger.logger.warning(f"Score store read failed ({read.__name__}): {e}")
            return default
        return default if value is None else value


EXTENSION_KEY = 'wordrally.game_service'


def init_game_service(app, game_service: GameService) -> GameService:
    """Attach a game service to a Flask app."""
    app.extensions[EXTENSION_KEY] = game_service
    return game_service


def get_game_service() -> Optional[GameService]:
    """Get the game service of the current Flask app."""
    if not has_app_context():
        return None
    return current_app.extensions.get(EXTENSION_KEY)
