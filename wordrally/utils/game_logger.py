"""
Game Logger Module for WordRally

Every record is one JSON document written after a ``time | LEVEL |`` prefix,
so a day's log file can be read back line by line. Records carry an
event type:

- USER_ACTION: a request as the player sent it
- SERVER_RESPONSE_SUCCESS / SERVER_RESPONSE_ERROR: what was answered
- GAME_EVENT: wins, losses, highscores, deleted games
- ERROR: unexpected exceptions
"""

import json
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ..config.app_config import Config
from .helpers import get_user_identity

FILE_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'

# State fields worth keeping in a logged response
_STATE_SUMMARY_KEYS = ('outcome', 'attempts_used', 'max_attempts', 'word_length')


class GameLogger:
    """
    Structured logger of the WordRally server.

    The file handler receives everything at the configured level, the
    console only shows warnings and errors.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = _parse_level(level)
        self.logger = self._setup_logger()

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now():%Y-%m-%d}.log"

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger('wordrally')
        logger.setLevel(self.level)
        logger.handlers.clear()

        file_handler = logging.FileHandler(self._log_file(), encoding='utf-8')
        file_handler.setLevel(self.level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
        return logger

    def _emit(self, level: int, event_type: str, action: str,
              user: Dict[str, Optional[str]], details: Dict[str, Any]) -> None:
        record = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user,
            'details': details,
        }
        self.logger.log(level, json.dumps(record, ensure_ascii=False, default=str))

    def log_user_action(self, request, action: str, player_id: Optional[str] = None, **details):
        """Record an incoming request together with its route and method."""
        self._emit(
            logging.INFO, 'USER_ACTION', action, get_user_identity(request, player_id),
            {'endpoint': request.endpoint, 'method': request.method, **details},
        )

    def log_server_response(self, request, action: str, success: bool,
                            response_data: Dict[str, Any], player_id: Optional[str] = None,
                            **details):
        """
        Record a response. Failed responses are logged as warnings so they
        also reach the console.
        """
        if success:
            level, event_type = logging.INFO, 'SERVER_RESPONSE_SUCCESS'
        else:
            level, event_type = logging.WARNING, 'SERVER_RESPONSE_ERROR'
        self._emit(
            level, event_type, action, get_user_identity(request, player_id),
            {'success': success, 'response': summarize_response(response_data), **details},
        )

    def log_game_event(self, player_id: Optional[str], event: str, user_ip: str, **details):
        self._emit(
            logging.INFO, 'GAME_EVENT', event,
            {'user_ip': user_ip, 'player_id': player_id}, details,
        )

    def log_error(self, request, error: Exception, action: str, player_id: Optional[str] = None):
        self._emit(
            logging.ERROR, 'ERROR', action, get_user_identity(request, player_id),
            {'error_type': type(error).__name__, 'error_message': str(error)},
        )

    def get_log_stats(self) -> Dict[str, Any]:
        """
        Count today's records per event type.

        Lines that are not structured records (plain warnings, for example)
        are counted as ``other``.
        """
        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        counts = Counter()
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        counts[_event_type_of(line)] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': sum(counts.values()),
            'by_event_type': dict(counts),
        }


def _parse_level(level) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def _event_type_of(line: str) -> str:
    message = line.split(' | ', 2)[-1]
    try:
        record = json.loads(message)
    except ValueError:
        return 'other'
    if not isinstance(record, dict):
        return 'other'
    return record.get('event_type', 'other')


def summarize_response(data: Any) -> Dict[str, Any]:
    """Shrink a response body to what is useful in a log line."""
    if not isinstance(data, dict):
        return {'data_type': type(data).__name__}

    summary = dict(data)
    state = summary.get('state')
    if isinstance(state, dict):
        summary['state'] = {key: state.get(key) for key in _STATE_SUMMARY_KEYS}
        summary['state']['answer_revealed'] = state.get('answer') is not None
    if isinstance(summary.get('table'), list):
        summary['table'] = {'entries': len(summary['table'])}
    return summary


game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
