"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, word lists and constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_LISTS, MAX_ATTEMPTS, WORD_LENGTHS, LANGUAGES, HIGHSCORE_CAPACITY,
    validate_word_list_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LISTS', 'MAX_ATTEMPTS', 'WORD_LENGTHS', 'LANGUAGES', 'HIGHSCORE_CAPACITY',
    'validate_word_list_integrity', 'get_word_statistics'
]
