"""
Game Session

Owns one puzzle for one player: the hidden target, the attempt history,
timing and the final score. A session is only ever mutated by
start_new_game() and submit_guess().
"""

import time
from typing import List, Optional

from ..config.game_settings import MAX_ATTEMPTS, STAR_THRESHOLDS
from ..models.errors import InvalidGuessLength, SessionNotInProgress
from ..models.game import Attempt, Outcome, PuzzleConfig, ScoreRecord
from .evaluator import evaluate, is_solved


class SystemClock:
    """Monotonic clock in milliseconds."""

    def now(self) -> int:
        return int(time.monotonic() * 1000)


def _lowercase(word: str) -> str:
    # Letters whose lowercase form is longer (e.g. "İ") are kept as typed
    return "".join(ch.lower() if len(ch.lower()) == 1 else ch for ch in word)


def compute_stars(attempts_used: int) -> int:
    for max_attempts, stars in STAR_THRESHOLDS:
        if attempts_used <= max_attempts:
            return stars
    return 1


def compute_score(attempts_used: int, elapsed_seconds: int) -> ScoreRecord:
    """
    Builds the score record of a won game.
    
    Every unused attempt is worth 10 points and every 10 seconds of play
    cost one point, so slow games can end up with a negative score.
    """
    return ScoreRecord(
        score=(MAX_ATTEMPTS - attempts_used) * 10 - elapsed_seconds // 10,
        attempts_used=attempts_used,
        elapsed_seconds=elapsed_seconds,
        stars=compute_stars(attempts_used),
    )


class Session:
    """
    Single-player puzzle state machine.
    
    States:
    - IN_PROGRESS: accepts guesses
    - WON: last attempt was all correct (terminal)
    - LOST: MAX_ATTEMPTS used without a win (terminal)
    
    The word source and clock are injected so tests can pin the target and
    the elapsed time.
    """

    def __init__(self, word_source, clock=None, max_attempts: int = MAX_ATTEMPTS):
        self._word_source = word_source
        self._clock = clock or SystemClock()
        self._max_attempts = max_attempts

        # Game state (set by start_new_game)
        self._config: Optional[PuzzleConfig] = None
        self._target: Optional[str] = None
        self._history: List[Attempt] = []
        self._start_ms: Optional[int] = None
        self._end_ms: Optional[int] = None
        self._outcome: Optional[Outcome] = None
        self._score: Optional[ScoreRecord] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start_new_game(self, config: PuzzleConfig) -> None:
        """
        Starts a new puzzle, discarding any previous one.
        
        Raises:
            EmptyWordList: If the word source has no words for the config
        """
        target = self._word_source.get_random_word(config.language, config.word_length)
        self._config = config
        self._target = target.lower()
        self._history = []
        self._start_ms = self._clock.now()
        self._end_ms = None
        self._outcome = Outcome.IN_PROGRESS
        self._score = None

    def submit_guess(self, guess: str) -> Attempt:
        """
        Evaluates a guess and advances the state machine.
        
        Raises:
            SessionNotInProgress: If no game was started or the game is over
            InvalidGuessLength: If the guess has the wrong length
        """
        if self._outcome is None:
            raise SessionNotInProgress("No game in progress, start a new game")
        if self._outcome != Outcome.IN_PROGRESS:
            raise SessionNotInProgress()

        if len(guess) != self._config.word_length:
            raise InvalidGuessLength(self._config.word_length, len(guess))
        guess = _lowercase(guess)

        attempt = evaluate(guess, self._target, self._config.word_length)
        self._history.append(attempt)

        if is_solved(attempt):
            self._finish(Outcome.WON)
        elif len(self._history) >= self._max_attempts:
            self._finish(Outcome.LOST)

        return attempt

    def elapsed_seconds(self) -> int:
        """Whole seconds since the game started, frozen once it is over."""
        if self._start_ms is None:
            return 0
        end_ms = self._end_ms if self._end_ms is not None else self._clock.now()
        return max(0, (end_ms - self._start_ms) // 1000)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> Optional[PuzzleConfig]:
        return self._config

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    @property
    def history(self) -> List[Attempt]:
        return list(self._history)

    @property
    def attempts_used(self) -> int:
        return len(self._history)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def is_over(self) -> bool:
        return self._outcome in (Outcome.WON, Outcome.LOST)

    @property
    def score(self) -> Optional[ScoreRecord]:
        """Score record of a won game, None otherwise."""
        return self._score

    @property
    def revealed_target(self) -> Optional[str]:
        """The target word, only once the game is over."""
        return self._target if self.is_over else None

    @property
    def start_ms(self) -> Optional[int]:
        return self._start_ms

    @property
    def end_ms(self) -> Optional[int]:
        return self._end_ms

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _finish(self, outcome: Outcome) -> None:
        self._outcome = outcome
        self._end_ms = self._clock.now()
        if outcome == Outcome.WON:
            elapsed = max(0, (self._end_ms - self._start_ms) // 1000)
            self._score = compute_score(len(self._history), elapsed)
