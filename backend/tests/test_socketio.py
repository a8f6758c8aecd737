def _events(sio, name):
    return [pkt['args'] for pkt in sio.get_received() if pkt['name'] == name]


def _match(sio_factory, game_type):
    alice = sio_factory()
    bob = sio_factory()
    alice.emit('find-match', {'username': 'Alice', 'gameType': game_type})
    bob.emit('find-match', {'username': 'Bob', 'gameType': game_type})
    return alice, bob


def test_socket_connect_registers_connection(flask_app, sio_factory):
    sio = sio_factory()
    assert sio.is_connected()
    assert flask_app.extensions['lobby'].stats()['connections'] == 1


def test_find_match_waits_then_pairs(sio_factory):
    alice = sio_factory()
    alice.emit('find-match', {'username': 'Alice', 'gameType': 'maze'})
    received = alice.get_received()
    assert [pkt['name'] for pkt in received] == ['waiting-for-match']

    bob = sio_factory()
    bob.emit('find-match', {'username': 'Bob', 'gameType': 'maze'})

    (found_a,) = _events(alice, 'match-found')
    (found_b,) = _events(bob, 'match-found')
    assert found_a[0]['playerNumber'] == 1
    assert found_b[0]['playerNumber'] == 2
    assert found_a[0]['opponent']['username'] == 'Bob'
    assert found_b[0]['opponent']['username'] == 'Alice'
    assert found_a[0]['seed'] == found_b[0]['seed']
    assert found_a[0]['sessionId'] == found_b[0]['sessionId']


def test_maze_moves_and_win_over_socket(sio_factory):
    alice, bob = _match(sio_factory, 'maze')
    alice.get_received()
    bob.get_received()

    alice.emit('player-move', {'row': 1, 'col': 0})
    assert _events(bob, 'opponent-move') == [[{'row': 1, 'col': 0}]]
    assert alice.get_received() == []

    bob.emit('player-finished')
    (over_a,) = _events(alice, 'game-over')
    (over_b,) = _events(bob, 'game-over')
    assert over_a[0]['winner'] == 'Bob'
    assert over_a == over_b
    assert over_a[0]['time'] >= 0


def test_pong_relay_over_socket(sio_factory):
    alice, bob = _match(sio_factory, 'pong')
    alice.get_received()
    bob.get_received()

    bob.emit('pong-paddle-move', 120)
    assert _events(alice, 'pong-opponent-paddle') == [[120]]

    state = {'ballX': 10, 'ballY': 20, 'player1Score': 0, 'player2Score': 0}
    alice.emit('pong-update-state', state)
    bob.emit('pong-update-state', state)
    assert _events(bob, 'pong-game-state') == [[state]]
    assert _events(alice, 'pong-game-state') == []

    alice.emit('pong-game-over', 'Alice')
    assert _events(bob, 'game-over') == [[{'winner': 'Alice', 'time': 0}]]


def test_snake_resolution_over_socket(sio_factory):
    alice, bob = _match(sio_factory, 'snake')
    alice.get_received()
    bob.get_received()

    alice.emit('snake-game-over', {'username': 'Alice', 'score': 120})
    assert _events(bob, 'game-over') == []
    bob.emit('snake-game-over', {'username': 'Bob', 'score': 90})
    assert _events(alice, 'game-over') == [[{'winner': 'Alice', 'time': 0}]]
    assert _events(bob, 'game-over') == [[{'winner': 'Alice', 'time': 0}]]


def test_disconnect_notifies_opponent(flask_app, sio_factory):
    alice, bob = _match(sio_factory, 'snake')
    alice.get_received()
    bob.get_received()

    alice.disconnect()
    received = bob.get_received()
    assert [pkt['name'] for pkt in received] == ['opponent-disconnected']

    bob.emit('snake-update-state', {'score': 0})
    assert flask_app.extensions['lobby'].stats()['active_sessions'] == 0
