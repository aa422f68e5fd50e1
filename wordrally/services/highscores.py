"""
Highscore Table

Ordered table of the best won games, sorted by score (descending) and
elapsed time (ascending), holding at most HIGHSCORE_CAPACITY entries.
"""

from typing import Iterable, List, Optional

from ..config.game_settings import HIGHSCORE_CAPACITY
from ..models.game import HighscoreEntry, ScoreRecord


def _sort_key(entry: HighscoreEntry):
    return (-entry.record.score, entry.record.elapsed_seconds)


class HighscoreTable:
    """Capacity-bounded, always sorted highscore table."""

    def __init__(self, entries: Iterable[HighscoreEntry] = (), capacity: int = HIGHSCORE_CAPACITY):
        self.capacity = capacity
        self._entries: List[HighscoreEntry] = sorted(entries, key=_sort_key)[:capacity]

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[HighscoreEntry]:
        return list(self._entries)

    @property
    def best(self) -> Optional[HighscoreEntry]:
        return self._entries[0] if self._entries else None

    @property
    def lowest(self) -> Optional[HighscoreEntry]:
        return self._entries[-1] if self._entries else None

    def qualifies(self, record: ScoreRecord) -> bool:
        """
        True if *record* would make it into the table.
        
        A record qualifies while the table is not full, or when it beats the
        lowest entry on score, or ties it on score with a faster time.
        """
        if len(self._entries) < self.capacity:
            return True
        return record.ranks_above(self._entries[-1].record)

    def admit(self, record: ScoreRecord, name: Optional[str] = None,
              language: Optional[str] = None, word_length: Optional[int] = None) -> Optional[int]:
        """
        Inserts a record if it qualifies.
        
        Returns:
            Optional[int]: 0-based rank of the new entry, None if it did not qualify
        """
        if not self.qualifies(record):
            return None

        entry = HighscoreEntry(record=record, name=name, language=language, word_length=word_length)
        # Stable sort keeps older entries ahead of exact ties
        self._entries = sorted(self._entries + [entry], key=_sort_key)[:self.capacity]
        for rank, existing in enumerate(self._entries):
            if existing is entry:
                return rank
        return None

    def to_list(self) -> List[dict]:
        return [entry.to_dict() for entry in self._entries]
