"""
Word Source

Random target selection over word lists keyed by language and word length.
"""

import random
from typing import Dict, List, Optional

from ..models.errors import EmptyWordList


class WordSource:
    """
    Picks target words uniformly at random.
    
    The random generator is owned by the instance, so a seed makes target
    selection reproducible without touching the global random state.
    """

    def __init__(self, word_lists: Dict[str, Dict[int, List[str]]],
                 seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._word_lists = {
            language: {int(length): [word.lower() for word in words] for length, words in buckets.items()}
            for language, buckets in word_lists.items()
        }
        self._rng = rng if rng is not None else random.Random(seed)

    def get_random_word(self, language: str, length: int) -> str:
        """
        Returns a lowercase word of exactly *length* letters.
        
        Raises:
            EmptyWordList: If no word of that length exists for the language
        """
        words = [w for w in self._word_lists.get(language, {}).get(length, []) if len(w) == length]
        if not words:
            raise EmptyWordList(language, length)
        return self._rng.choice(words)

    def languages(self) -> List[str]:
        return sorted(self._word_lists)

    def available_lengths(self, language: str) -> List[int]:
        return sorted(length for length, words in self._word_lists.get(language, {}).items() if words)
