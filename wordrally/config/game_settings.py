"""
Game Configuration Constants Module

This module defines all game configuration constants and loads the word
lists used for target selection. All game parameters are centralized here
to enable easy modification.

"""

import json
import os
from typing import Dict, List, Final, Tuple

# Core Game Configuration Constants
MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

WORD_LENGTHS: Final[Tuple[int, ...]] = (5, 6, 7, 8)
"""Word lengths a puzzle can be configured with."""

LANGUAGES: Final[Tuple[str, ...]] = ("de", "en")
"""Language tags with a bundled word list."""

HIGHSCORE_CAPACITY: Final[int] = 10

STAR_THRESHOLDS: Final[Tuple[Tuple[int, int], ...]] = ((3, 3), (5, 2))
"""(max attempts used, stars) pairs checked in order; anything slower earns one star."""


# Load word lists from JSON file
def _load_word_lists() -> Dict[str, Dict[int, List[str]]]:
    """
    Load word lists from words.json.
    
    Returns:
        Dict[str, Dict[int, List[str]]]: language -> word length -> lowercase words
        
    Raises:
        FileNotFoundError: If words.json file is not found
        ValueError: If JSON file is malformed or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'words.json')
    
    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            raw_lists = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in words.json: {e}")
    
    if not isinstance(raw_lists, dict):
        raise ValueError("JSON file must contain an object keyed by language")
    
    word_lists: Dict[str, Dict[int, List[str]]] = {}
    for language, buckets in raw_lists.items():
        if not isinstance(buckets, dict):
            raise ValueError(f"Word lists for '{language}' must be keyed by word length")
        word_lists[language] = {
            int(length): [word.lower() for word in words]
            for length, words in buckets.items()
        }
    
    return word_lists

# Curated Word Database loaded from JSON file
WORD_LISTS: Final[Dict[str, Dict[int, List[str]]]] = _load_word_lists()


def validate_word_list_integrity(word_lists: Dict[str, Dict[int, List[str]]] = None) -> bool:
    """
    Validates the integrity and consistency of the word database.
    
    This function performs validation to ensure:
    1. Length validation: Every word matches the length of its bucket
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate entries within a bucket
    4. Format validation: Consistent lowercase formatting
    
    Args:
        word_lists: Word lists to check, defaults to the bundled WORD_LISTS
    
    Returns:
        bool: True if word lists pass all validation checks
        
    Raises:
        ValueError: If any validation check fails with detailed error message
        
    """
    if word_lists is None:
        word_lists = WORD_LISTS
    
    if not word_lists:
        raise ValueError("Word lists cannot be empty")
    
    for language, buckets in word_lists.items():
        for length, words in buckets.items():
            # Validate each word meets game requirements
            for index, word in enumerate(words):
                if len(word) != length:
                    raise ValueError(
                        f"Word at index {index} '{word}' in {language}/{length} "
                        f"is not {length} characters long"
                    )
                
                if not word.isalpha():
                    raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")
                
                if not word.islower():
                    raise ValueError(f"Word at index {index} '{word}' is not in lowercase format")
            
            # Validate uniqueness (no duplicates)
            if len(words) != len(set(words)):
                duplicates = sorted({word for word in words if words.count(word) > 1})
                raise ValueError(f"Duplicate words found in {language}/{length}: {duplicates}")
    
    return True


def get_word_statistics(word_lists: Dict[str, Dict[int, List[str]]] = None) -> dict:
    """
    Analyzes word lists and returns statistical information for game balancing.
    
    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words across all lists
            - words_per_list: Word count per "language/length" bucket
            - most_common_letters: Five most frequent letters overall
    
    """
    if word_lists is None:
        word_lists = WORD_LISTS
    
    if not word_lists:
        return {"error": "Word lists are empty"}
    
    letter_frequency: Dict[str, int] = {}
    words_per_list: Dict[str, int] = {}
    for language, buckets in word_lists.items():
        for length, words in buckets.items():
            words_per_list[f"{language}/{length}"] = len(words)
            for word in words:
                for char in word:
                    letter_frequency[char] = letter_frequency.get(char, 0) + 1
    
    return {
        "total_words": sum(words_per_list.values()),
        "words_per_list": words_per_list,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


validate_word_list_integrity()
