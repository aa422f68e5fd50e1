import pytest

from wordrally.models.errors import GameNotFound, InvalidGuessLength, SessionNotInProgress
from wordrally.models.game import ScoreRecord
from wordrally.services.game_service import GameService
from wordrally.services.score_store import InMemoryScoreStore


class BrokenStore(InMemoryScoreStore):
    def _read(self, slot):
        raise ConnectionError("store offline")

    def _write(self, slot, value):
        raise ConnectionError("store offline")


def test_new_game_hides_answer(game_service):
    player_id = game_service.create_new_game(language="de", word_length=5)
    state = game_service.get_game_state(player_id)

    assert state.outcome == "in_progress"
    assert state.answer is None
    assert state.game_over is False
    assert state.max_attempts == 6


def test_winning_game_proposes_highscore(game_service, score_store, clock):
    player_id = game_service.create_new_game("player-1", "de", 5)
    game_service.make_guess(player_id, "blume")
    clock.advance(25)
    state = game_service.make_guess(player_id, " apfel ")

    assert state.outcome == "won"
    assert state.answer == "apfel"
    assert state.score == {"score": 38, "attempts_used": 2, "elapsed_seconds": 25, "stars": 3}
    assert state.highscore_candidate is True
    assert score_store.load_highscore().score == 38

    assert game_service.submit_highscore(player_id, "  Ana  ") == 0
    assert game_service.get_game_state(player_id).highscore_candidate is False
    assert game_service.submit_highscore(player_id, "again") is None

    table = score_store.load_highscore_table()
    assert [(e.name, e.language, e.word_length) for e in table] == [("Ana", "de", 5)]


def test_lost_game_has_no_score(game_service):
    player_id = game_service.create_new_game(language="de", word_length=5)
    for _ in range(6):
        state = game_service.make_guess(player_id, "blume")

    assert state.outcome == "lost"
    assert state.score is None
    assert state.answer == "apfel"
    assert state.highscore_candidate is False
    assert game_service.submit_highscore(player_id, "nobody") is None


def test_best_record_only_improves(game_service, score_store):
    better = ScoreRecord(score=60, attempts_used=1, elapsed_seconds=0, stars=3)
    game_service.best_record = better

    player_id = game_service.create_new_game(language="de", word_length=5)
    game_service.make_guess(player_id, "blume")
    game_service.make_guess(player_id, "apfel")

    assert game_service.best_record == better
    assert score_store.load_highscore() is None


def test_errors_propagate(game_service):
    with pytest.raises(GameNotFound):
        game_service.make_guess("nobody", "apfel")

    player_id = game_service.create_new_game(language="de", word_length=5)
    with pytest.raises(InvalidGuessLength):
        game_service.make_guess(player_id, "apf")
    game_service.make_guess(player_id, "apfel")
    with pytest.raises(SessionNotInProgress):
        game_service.make_guess(player_id, "apfel")


def test_new_game_replaces_previous_session(game_service):
    player_id = game_service.create_new_game("p", "de", 5)
    game_service.make_guess(player_id, "apfel")
    assert game_service.create_new_game("p", "de", 6) == "p"

    state = game_service.get_game_state("p")
    assert state.word_length == 6
    assert state.attempts_used == 0
    assert state.highscore_candidate is False
    assert len(game_service.games) == 1


def test_broken_store_does_not_affect_games(word_source, clock):
    service = GameService(word_source, BrokenStore(), clock)
    assert service.get_highscores() == {"best": None, "table": []}

    player_id = service.create_new_game(language="de", word_length=5)
    state = service.make_guess(player_id, "apfel")

    assert state.outcome == "won"
    assert service.best_record.score == 50
    assert service.submit_highscore(player_id, "ana") == 0
    assert service.get_highscores()["table"][0]["name"] == "ana"


def test_delete_game(game_service):
    player_id = game_service.create_new_game(language="de", word_length=5)
    assert game_service.delete_game(player_id) is True
    assert game_service.delete_game(player_id) is False
    assert game_service.get_game_state(player_id) is None


def test_oldest_games_are_evicted(word_source, score_store, clock):
    service = GameService(word_source, score_store, clock, max_games=2)
    service.create_new_game("first")
    service.create_new_game("second")
    service.create_new_game("first")
    service.create_new_game("third")

    assert list(service.games) == ["first", "third"]
    with pytest.raises(GameNotFound):
        service.get_session("second")
