"""
Guess Evaluator

Implements the Wordle letter evaluation algorithm for any word length.
"""

from typing import List, Optional

from ..models.errors import InvalidGuessLength
from ..models.game import Attempt, LetterResult, LetterStatus


def evaluate(guess: str, target: str, length: int) -> Attempt:
    """
    Classifies every letter of *guess* against *target*.
    
    Exact matches are resolved first and consume their target position, so a
    repeated guess letter is never reported more often than it occurs in the
    target. Misplaced letters then consume the leftmost unconsumed matching
    target position.
    
    Args:
        guess: The guessed word
        target: The hidden word
        length: Configured word length
        
    Returns:
        Attempt: One LetterResult per guess letter, in guess order
        
    Raises:
        InvalidGuessLength: If guess or target does not have the given length
    """
    if len(target) != length:
        raise ValueError(f"Target must be exactly {length} letters, got {len(target)}")
    if len(guess) != length:
        raise InvalidGuessLength(length, len(guess))
    
    statuses: List[Optional[LetterStatus]] = [None] * length
    consumed = [False] * length
    
    # First pass: exact position matches
    for i in range(length):
        if guess[i] == target[i]:
            statuses[i] = LetterStatus.CORRECT
            consumed[i] = True
    
    # Second pass: misplaced letters take the leftmost unconsumed occurrence
    for i in range(length):
        if statuses[i] is not None:
            continue
        statuses[i] = LetterStatus.WRONG
        for j in range(length):
            if not consumed[j] and target[j] == guess[i]:
                statuses[i] = LetterStatus.MISPLACED
                consumed[j] = True
                break
    
    return tuple(LetterResult(letter, status) for letter, status in zip(guess, statuses))


def is_solved(attempt: Attempt) -> bool:
    """True when every letter of the attempt is correct."""
    return bool(attempt) and all(result.status == LetterStatus.CORRECT for result in attempt)
