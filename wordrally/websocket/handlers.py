"""
WebSocket Event Handlers

Handles the real-time events of a single-player game: submitting guesses,
the elapsed-time tick and the transient "invalid length" signal. The timers
are presentation only and never change session state.
"""

from dataclasses import asdict
from typing import Dict, Set
from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from ..models.errors import GameNotFound, InvalidGuessLength, SessionNotInProgress
from ..utils.decorators import websocket_game_service_required
from ..utils.game_logger import game_logger


class TimerWatchers:
    """
    Socket ids watching each player's game, and the players with a running ticker.
    
    A ticker keeps running only while at least one socket watches its player.
    """

    def __init__(self):
        self.watchers: Dict[str, Set[str]] = {}
        self.ticking: Set[str] = set()

    def watch(self, player_id: str, sid: str) -> None:
        self.watchers.setdefault(player_id, set()).add(sid)

    def unwatch(self, player_id: str, sid: str) -> None:
        sids = self.watchers.get(player_id)
        if sids is None:
            return
        sids.discard(sid)
        if not sids:
            del self.watchers[player_id]

    def drop_sid(self, sid: str) -> None:
        """Forget a disconnected socket everywhere."""
        for player_id in list(self.watchers):
            self.unwatch(player_id, sid)

    def is_watched(self, player_id: str) -> bool:
        return bool(self.watchers.get(player_id))

    def is_ticking(self, player_id: str) -> bool:
        return player_id in self.ticking


def register_websocket_handlers(socketio) -> TimerWatchers:
    """Register all WebSocket event handlers."""
    
    timers = TimerWatchers()
    
    def run_timer_ticks(game_service, player_id, interval):
        """Emit the elapsed time to the player's room until the game ends or nobody watches."""
        try:
            while True:
                socketio.sleep(interval)
                session = game_service.games.get(player_id)
                if session is None or session.is_over or not timers.is_watched(player_id):
                    break
                socketio.emit('timer_tick', {
                    'player_id': player_id,
                    'elapsed_seconds': session.elapsed_seconds()
                }, to=player_id)
        finally:
            timers.ticking.discard(player_id)
    
    def clear_invalid_signal(sid, player_id, delay_ms):
        socketio.sleep(delay_ms / 1000)
        socketio.emit('invalid_guess_cleared', {'player_id': player_id}, to=sid)
    
    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Stop timers nobody is watching anymore."""
        timers.drop_sid(request.sid)
    
    @socketio.on('watch_game')
    @websocket_game_service_required
    def handle_watch_game(data, game_service=None):
        """Join the player's room and start the elapsed-time ticker."""
        player_id = data['player_id']
        session = game_service.games.get(player_id)
        if session is None:
            emit('error', {'error': 'Game not found', 'error_type': 'GameNotFound'})
            return
        
        join_room(player_id)
        timers.watch(player_id, request.sid)
        emit('timer_tick', {'player_id': player_id, 'elapsed_seconds': session.elapsed_seconds()})
        
        interval = current_app.config.get('TIMER_TICK_SECONDS', 1)
        if interval > 0 and not session.is_over and not timers.is_ticking(player_id):
            timers.ticking.add(player_id)
            socketio.start_background_task(run_timer_ticks, game_service, player_id, interval)
    
    @socketio.on('unwatch_game')
    def handle_unwatch_game(data):
        """Leave the player's room."""
        if isinstance(data, dict) and data.get('player_id'):
            leave_room(data['player_id'])
            timers.unwatch(data['player_id'], request.sid)
    
    @socketio.on('submit_guess')
    @websocket_game_service_required
    def handle_submit_guess(data, game_service=None):
        """Submit a guess and send back the updated state."""
        player_id = data['player_id']
        guess = data.get('guess')
        if not isinstance(guess, str):
            emit('error', {'error': 'Guess is required'})
            return
        
        try:
            state = game_service.make_guess(player_id, guess)
        except InvalidGuessLength as e:
            clear_after_ms = current_app.config.get('INVALID_GUESS_SIGNAL_MS', 500)
            emit('invalid_guess', {
                'player_id': player_id,
                'error': str(e),
                'clear_after_ms': clear_after_ms
            })
            if clear_after_ms > 0:
                socketio.start_background_task(clear_invalid_signal, request.sid, player_id, clear_after_ms)
            return
        except (GameNotFound, SessionNotInProgress) as e:
            emit('error', {'error': str(e), 'error_type': type(e).__name__})
            return
        
        emit('guess_result', {'player_id': player_id, 'state': asdict(state)})
        
        if state.game_over:
            game_logger.log_game_event(
                player_id, 'game_won' if state.outcome == 'won' else 'game_lost',
                request.remote_addr or 'websocket',
                attempts_used=state.attempts_used, target_word=state.answer, score=state.score
            )
    
    return timers
