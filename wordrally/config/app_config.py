"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


def _optional_int(name):
    value = os.getenv(name)
    return int(value) if value not in (None, '') else None


class Config:
    """Base configuration class with all settings."""
    
    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False
    
    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))
    
    # Score Storage Settings ("memory", "json" or "mongo")
    SCORE_STORE = os.getenv('SCORE_STORE', 'json')
    SCORE_FILE = os.getenv('SCORE_FILE', 'data/highscores.json')
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'wordrally')
    
    # Game Settings
    WORD_SEED = _optional_int('WORD_SEED')
    DEFAULT_LANGUAGE = os.getenv('DEFAULT_LANGUAGE', 'de')
    DEFAULT_WORD_LENGTH = int(os.getenv('DEFAULT_WORD_LENGTH', 5))
    
    # Oldest sessions are dropped once more players than this have a game
    MAX_ACTIVE_GAMES = int(os.getenv('MAX_ACTIVE_GAMES', 10000))
    
    # Presentation timers (cosmetic only, never touch session state)
    INVALID_GUESS_SIGNAL_MS = int(os.getenv('INVALID_GUESS_SIGNAL_MS', 500))
    TIMER_TICK_SECONDS = float(os.getenv('TIMER_TICK_SECONDS', 1))
    
    # Socket.IO async mode, None lets Flask-SocketIO pick eventlet, gevent or threading
    SOCKETIO_ASYNC_MODE = os.getenv('SOCKETIO_ASYNC_MODE') or None
    
    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    SCORE_STORE = os.getenv('SCORE_STORE', 'mongo')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    SCORE_STORE = 'memory'
    WORD_SEED = 1234
    INVALID_GUESS_SIGNAL_MS = 0
    TIMER_TICK_SECONDS = 0
    SOCKETIO_ASYNC_MODE = 'threading'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
