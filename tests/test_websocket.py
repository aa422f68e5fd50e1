import time

import pytest

from wordrally import create_app
from wordrally.config import TestingConfig


def events(socket_client, name):
    return [event["args"][0] for event in socket_client.get_received() if event["name"] == name]


def test_submit_guess_over_websocket(client, socket_client):
    player_id = client.post('/api/new_game', json={}).get_json()["player_id"]

    socket_client.emit('submit_guess', {"player_id": player_id, "guess": "apfel"})
    results = events(socket_client, 'guess_result')

    assert len(results) == 1
    assert results[0]["state"]["outcome"] == "won"


def test_invalid_guess_signal(client, socket_client):
    player_id = client.post('/api/new_game', json={}).get_json()["player_id"]

    socket_client.emit('submit_guess', {"player_id": player_id, "guess": "toolong"})
    signals = events(socket_client, 'invalid_guess')

    assert len(signals) == 1
    assert signals[0]["clear_after_ms"] == 0
    assert client.get(f'/api/game/{player_id}/state').get_json()["state"]["attempts_used"] == 0


def test_errors_over_websocket(socket_client):
    socket_client.emit('submit_guess', {"guess": "apfel"})
    assert events(socket_client, 'error')[0]["error"] == "Player ID is required"

    socket_client.emit('submit_guess', {"player_id": "nobody", "guess": "apfel"})
    assert events(socket_client, 'error')[0]["error_type"] == "GameNotFound"


def test_watch_game_sends_elapsed_time(client, socket_client, clock):
    player_id = client.post('/api/new_game', json={}).get_json()["player_id"]
    clock.advance(4)

    socket_client.emit('watch_game', {"player_id": player_id})
    ticks = events(socket_client, 'timer_tick')

    assert ticks == [{"player_id": player_id, "elapsed_seconds": 4}]


class TimerConfig(TestingConfig):
    TIMER_TICK_SECONDS = 0.05
    INVALID_GUESS_SIGNAL_MS = 50


@pytest.fixture
def timer_app(word_source, score_store, clock):
    app, _ = create_app(TimerConfig, word_source=word_source, score_store=score_store, clock=clock)
    return app


def wait_for(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.02)
    return condition()


def collect_until(socket_client, name, timeout=2.0):
    """Gather received events until one called *name* shows up."""
    received = []

    def seen():
        received.extend(socket_client.get_received())
        return any(event["name"] == name for event in received)

    wait_for(seen, timeout)
    return received


def test_ticker_emits_until_game_is_won(timer_app, clock):
    client = timer_app.test_client()
    socket_client = timer_app.socketio.test_client(timer_app)
    player_id = client.post('/api/new_game', json={}).get_json()["player_id"]

    socket_client.emit('watch_game', {"player_id": player_id})
    socket_client.get_received()
    clock.advance(7)

    received = []

    def ticked_after_advance():
        received.extend(socket_client.get_received())
        return any(
            event["name"] == 'timer_tick' and event["args"][0]["elapsed_seconds"] == 7
            for event in received
        )

    assert wait_for(ticked_after_advance)
    assert timer_app.timer_watchers.is_ticking(player_id)

    client.post(f'/api/game/{player_id}/guess', json={"guess": "apfel"})
    assert wait_for(lambda: not timer_app.timer_watchers.is_ticking(player_id))

    socket_client.get_received()
    time.sleep(0.2)
    assert not any(event["name"] == 'timer_tick' for event in socket_client.get_received())
    socket_client.disconnect()


def test_ticker_stops_when_watcher_disconnects(timer_app):
    client = timer_app.test_client()
    socket_client = timer_app.socketio.test_client(timer_app)
    player_id = client.post('/api/new_game', json={}).get_json()["player_id"]

    socket_client.emit('watch_game', {"player_id": player_id})
    assert timer_app.timer_watchers.is_ticking(player_id)

    socket_client.disconnect()
    assert not timer_app.timer_watchers.is_watched(player_id)
    assert wait_for(lambda: not timer_app.timer_watchers.is_ticking(player_id))


def test_ticker_stops_on_unwatch(timer_app):
    client = timer_app.test_client()
    socket_client = timer_app.socketio.test_client(timer_app)
    player_id = client.post('/api/new_game', json={}).get_json()["player_id"]

    socket_client.emit('watch_game', {"player_id": player_id})
    socket_client.emit('unwatch_game', {"player_id": player_id})

    assert wait_for(lambda: not timer_app.timer_watchers.is_ticking(player_id))
    socket_client.disconnect()


def test_invalid_guess_signal_clears(timer_app):
    client = timer_app.test_client()
    socket_client = timer_app.socketio.test_client(timer_app)
    player_id = client.post('/api/new_game', json={}).get_json()["player_id"]

    socket_client.emit('submit_guess', {"player_id": player_id, "guess": "apf"})
    received = collect_until(socket_client, 'invalid_guess_cleared')
    names = [event["name"] for event in received]

    assert names.index('invalid_guess') < names.index('invalid_guess_cleared')
    assert received[names.index('invalid_guess')]["args"][0]["clear_after_ms"] == 50
    socket_client.disconnect()
