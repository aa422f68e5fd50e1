"""
Service Decorators

Contains decorators that resolve the game service for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import jsonify
from flask_socketio import emit


def require_game_service(f):
    """
    Decorator for HTTP endpoints that need the game service.
    
    Passes the service as the ``game_service`` keyword argument, or answers
    with 500 when the app has none.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service
        
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500
        
        kwargs['game_service'] = game_service
        return f(*args, **kwargs)
    
    return decorated_function


def websocket_game_service_required(f):
    """Decorator for WebSocket events that need the game service and a player id."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service
        
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return
        
        if not args or not isinstance(args[0], dict) or not args[0].get('player_id'):
            emit('error', {'error': 'Player ID is required'})
            return
        
        kwargs['game_service'] = game_service
        return f(*args, **kwargs)
    
    return decorated_function
