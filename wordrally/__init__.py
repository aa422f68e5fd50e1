"""
WordRally Game Server Application Package

This package contains the WordRally word-guessing game: the guess evaluator,
the session state machine and the Flask server exposing them.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config, WORD_LISTS


def create_app(config_class=Config, word_source=None, score_store=None, clock=None):
    """
    Application factory pattern for creating Flask app instances.
    
    Args:
        config_class: Configuration class to use
        word_source: Target word source, defaults to the bundled word lists
        score_store: Score store, defaults to the one selected by SCORE_STORE
        clock: Millisecond clock, defaults to the system clock
        
    Returns:
        Flask application instance and its SocketIO server
    """
    from .services.game_service import GameService, init_game_service
    from .services.score_store import create_score_store
    from .services.word_source import WordSource
    
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # Initialize extensions
    CORS(app)
    socketio = SocketIO(
        app, cors_allowed_origins="*", async_mode=app.config.get('SOCKETIO_ASYNC_MODE'),
        logger=False, engineio_logger=False
    )
    
    # Game service owned by this app
    if word_source is None:
        word_source = WordSource(WORD_LISTS, seed=app.config.get('WORD_SEED'))
    if score_store is None:
        score_store = create_score_store(app.config)
    init_game_service(app, GameService(
        word_source, score_store, clock, max_games=app.config.get('MAX_ACTIVE_GAMES')
    ))
    
    # Register blueprints
    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')
    
    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    app.timer_watchers = register_websocket_handlers(socketio)
    
    # Store socketio instance for use in other modules
    app.socketio = socketio
    
    return app, socketio
