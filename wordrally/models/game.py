"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import LANGUAGES, MAX_ATTEMPTS, WORD_LENGTHS


class LetterStatus(Enum):
    """Per-letter classification of a guess against the target."""
    CORRECT = "correct"
    MISPLACED = "misplaced"
    WRONG = "wrong"


class Outcome(Enum):
    """Session state machine states."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class LetterResult:
    letter: str
    status: LetterStatus

    def to_dict(self) -> Dict[str, str]:
        return {"letter": self.letter, "status": self.status.value}


# One evaluated guess, in guess order
Attempt = Tuple[LetterResult, ...]


@dataclass(frozen=True)
class PuzzleConfig:
    """Word length and language of a puzzle, fixed for a session's lifetime."""
    word_length: int = 5
    language: str = "de"

    def __post_init__(self):
        if self.word_length not in WORD_LENGTHS:
            raise ValueError(
                f"Word length must be one of {list(WORD_LENGTHS)}, got {self.word_length!r}"
            )
        if self.language not in LANGUAGES:
            raise ValueError(
                f"Language must be one of {list(LANGUAGES)}, got {self.language!r}"
            )


@dataclass(frozen=True)
class ScoreRecord:
    """Score of a won session."""
    score: int
    attempts_used: int
    elapsed_seconds: int
    stars: int

    def ranks_above(self, other: "ScoreRecord") -> bool:
        """True when this record sorts strictly before *other* in a highscore table."""
        if self.score != other.score:
            return self.score > other.score
        return self.elapsed_seconds < other.elapsed_seconds

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "ScoreRecord":
        return cls(
            score=int(data["score"]),
            attempts_used=int(data["attempts_used"]),
            elapsed_seconds=int(data["elapsed_seconds"]),
            stars=int(data["stars"]),
        )


@dataclass(frozen=True)
class HighscoreEntry:
    """A ScoreRecord admitted to the highscore table."""
    record: ScoreRecord
    name: Optional[str] = None
    language: Optional[str] = None
    word_length: Optional[int] = None

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "language": self.language,
            "word_length": self.word_length,
            **self.record.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "HighscoreEntry":
        word_length = data.get("word_length")
        return cls(
            record=ScoreRecord.from_dict(data),
            name=data.get("name"),
            language=data.get("language"),
            word_length=int(word_length) if word_length is not None else None,
        )


@dataclass
class GameState:
    """Server-side game state representation sent to clients."""
    player_id: str
    language: str
    word_length: int
    outcome: str
    attempts_used: int
    elapsed_seconds: int
    history: List[List[Dict[str, str]]]  # Letter status as string for JSON serialization
    max_attempts: int = MAX_ATTEMPTS
    score: Optional[Dict[str, int]] = None  # Only set once the game is won
    answer: Optional[str] = None  # Only included when game is over
    highscore_candidate: bool = False
    game_over: bool = field(init=False)

    def __post_init__(self):
        self.game_over = self.outcome != Outcome.IN_PROGRESS.value
