"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, current_app, request, jsonify
from dataclasses import asdict
from ..config.game_settings import get_word_statistics
from ..models.errors import EmptyWordList, GameNotFound, InvalidGuessLength, SessionNotInProgress
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_word_length

game_bp = Blueprint('game', __name__)


def _error(action, message, status, player_id=None, **extra):
    """Build, log and return an error response."""
    error_response = {
        'success': False,
        'error': message,
        **extra
    }
    game_logger.log_server_response(request, action, False, error_response, player_id)
    return jsonify(error_response), status


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Start a new game, replacing the player's previous one."""
    try:
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return _error('new_game', 'Request body must be a JSON object', 400)
        requested_id = data.get('player_id')
        if requested_id is not None and (not isinstance(requested_id, str) or not requested_id.strip()):
            return _error('new_game', 'Player ID must be a non-empty string', 400)

        language = data.get('language') or current_app.config.get('DEFAULT_LANGUAGE', 'de')
        word_length = parse_word_length(
            data.get('word_length'), current_app.config.get('DEFAULT_WORD_LENGTH', 5)
        )
        
        # Log user action
        game_logger.log_user_action(
            request, 'new_game', requested_id,
            language=language, word_length=word_length
        )
        
        player_id = game_service.create_new_game(requested_id, language, word_length)
        state = game_service.get_game_state(player_id)
        
        response_data = {
            'success': True,
            'player_id': player_id,
            'state': asdict(state)
        }
        
        game_logger.log_server_response(
            request, 'new_game', True, response_data, player_id,
            language=language, word_length=word_length
        )
        
        return jsonify(response_data)
        
    except EmptyWordList as e:
        return _error('new_game', str(e), 400, error_type='EmptyWordList')
    except ValueError as e:
        return _error('new_game', str(e), 400)
    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return _error('new_game', str(e), 500)


@game_bp.route('/game/<player_id>/state', methods=['GET'])
@require_game_service
def get_state(player_id, game_service):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', player_id)
        
        state = game_service.get_game_state(player_id)
        if state is None:
            return _error('get_state', 'Game not found', 404, player_id)
        
        response_data = {
            'success': True,
            'state': asdict(state)
        }
        
        game_logger.log_server_response(
            request, 'get_state', True, response_data, player_id,
            attempts_used=state.attempts_used, game_over=state.game_over
        )
        
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, 'get_state', player_id)
        return _error('get_state', str(e), 500, player_id)


@game_bp.route('/game/<player_id>/guess', methods=['POST'])
@require_game_service
def make_guess(player_id, game_service):
    """Submit a guess for evaluation."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('guess'), str):
            return _error('submit_guess', 'Guess is required', 400, player_id)
        
        guess = data['guess']
        
        game_logger.log_user_action(
            request, 'submit_guess', player_id,
            guess=guess, guess_length=len(guess)
        )
        
        state = game_service.make_guess(player_id, guess)
        
        response_data = {
            'success': True,
            'state': asdict(state)
        }
        
        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, player_id,
            guess=guess, attempts_used=state.attempts_used, game_over=state.game_over
        )
        
        # Log special game events
        if state.game_over:
            event = 'game_won' if state.outcome == 'won' else 'game_lost'
            game_logger.log_game_event(
                player_id, event, request.remote_addr,
                attempts_used=state.attempts_used, target_word=state.answer,
                score=state.score
            )
        
        return jsonify(response_data)
        
    except GameNotFound as e:
        return _error('submit_guess', str(e), 404, player_id)
    except InvalidGuessLength as e:
        return _error(
            'submit_guess', str(e), 400, player_id,
            error_type='InvalidGuessLength',
            clear_after_ms=current_app.config.get('INVALID_GUESS_SIGNAL_MS', 500)
        )
    except SessionNotInProgress as e:
        return _error('submit_guess', str(e), 409, player_id, error_type='SessionNotInProgress')
    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', player_id)
        return _error('submit_guess', str(e), 500, player_id)


@game_bp.route('/game/<player_id>/highscore', methods=['POST'])
@require_game_service
def submit_highscore(player_id, game_service):
    """Enter the player's won game into the highscore table."""
    try:
        data = request.get_json(silent=True)
        name = data.get('name') if isinstance(data, dict) else None
        
        game_logger.log_user_action(request, 'submit_highscore', player_id, name=name)
        
        rank = game_service.submit_highscore(player_id, name)
        if rank is None:
            return _error('submit_highscore', 'No highscore to submit', 400, player_id)
        
        response_data = {
            'success': True,
            'rank': rank,
            **game_service.get_highscores()
        }
        
        game_logger.log_server_response(request, 'submit_highscore', True, response_data, player_id)
        game_logger.log_game_event(player_id, 'highscore_admitted', request.remote_addr, rank=rank, name=name)
        
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, 'submit_highscore', player_id)
        return _error('submit_highscore', str(e), 500, player_id)


@game_bp.route('/game/<player_id>', methods=['DELETE'])
@require_game_service
def delete_game(player_id, game_service):
    """Delete a player's game session."""
    try:
        game_logger.log_user_action(request, 'delete_game', player_id)
        
        success = game_service.delete_game(player_id)
        
        response_data = {
            'success': success
        }
        
        game_logger.log_server_response(request, 'delete_game', success, response_data, player_id)
        
        if success:
            game_logger.log_game_event(player_id, 'game_deleted', request.remote_addr)
        
        return jsonify(response_data), (200 if success else 404)
        
    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', player_id)
        return _error('delete_game', str(e), 500, player_id)


@game_bp.route('/highscores', methods=['GET'])
@require_game_service
def get_highscores(game_service):
    """Get the best score and the highscore table."""
    try:
        game_logger.log_user_action(request, 'get_highscores')
        
        response_data = {
            'success': True,
            **game_service.get_highscores()
        }
        
        game_logger.log_server_response(request, 'get_highscores', True, response_data)
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, 'get_highscores')
        return _error('get_highscores', str(e), 500)


@game_bp.route('/health', methods=['GET'])
@require_game_service
def health_check(game_service):
    """Health check endpoint."""
    try:
        game_logger.log_user_action(request, 'health_check')
        
        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games),
            'languages': game_service.word_source.languages(),
            'word_statistics': get_word_statistics(),
            'log_stats': game_logger.get_log_stats()
        }
        
        game_logger.log_server_response(request, 'health_check', True, response_data)
        
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
