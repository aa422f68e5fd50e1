import json
from types import SimpleNamespace

import pytest

from wordrally.utils.game_logger import GameLogger, game_logger, summarize_response


@pytest.fixture
def logger(tmp_path):
    yield GameLogger(tmp_path, "INFO")
    # GameLogger configures the shared 'wordrally' logger; hand it back
    game_logger.logger = game_logger._setup_logger()


def read_records(logger):
    with open(logger._log_file(), encoding='utf-8') as f:
        return [json.loads(line.split(' | ', 2)[2]) for line in f if line.strip()]


def test_records_are_json_with_event_type(logger):
    request = SimpleNamespace(remote_addr="10.0.0.1")
    logger.log_game_event("p1", "game_won", "10.0.0.1", attempts_used=3)
    logger.log_error(request, KeyError("boom"), "submit_guess", "p1")

    won, error = read_records(logger)
    assert won["event_type"] == "GAME_EVENT"
    assert won["action"] == "game_won"
    assert won["details"] == {"attempts_used": 3}
    assert error["event_type"] == "ERROR"
    assert error["user"] == {"user_ip": "10.0.0.1", "player_id": "p1"}
    assert error["details"]["error_type"] == "KeyError"


def test_log_stats_counts_event_types(logger):
    logger.log_game_event("p1", "game_won", "10.0.0.1")
    logger.log_game_event("p2", "game_lost", "10.0.0.1")
    logger.logger.warning("Score store write failed")

    stats = logger.get_log_stats()
    assert stats["total_entries"] == 3
    assert stats["by_event_type"] == {"GAME_EVENT": 2, "other": 1}


def test_summarize_response_hides_answer():
    summary = summarize_response({
        "success": True,
        "state": {"outcome": "won", "attempts_used": 2, "max_attempts": 6,
                  "word_length": 5, "answer": "apfel", "history": [[]]},
        "table": [{}, {}],
    })

    assert summary["state"] == {
        "outcome": "won", "attempts_used": 2, "max_attempts": 6,
        "word_length": 5, "answer_revealed": True,
    }
    assert summary["table"] == {"entries": 2}
    assert summarize_response(["x"]) == {"data_type": "list"}
