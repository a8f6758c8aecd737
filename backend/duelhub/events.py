"""Socket event names, one enum per direction.

Values are the wire names the browser client uses.
"""

from enum import Enum


class ClientEvent(str, Enum):
    FIND_MATCH = 'find-match'
    PLAYER_MOVE = 'player-move'
    PLAYER_FINISHED = 'player-finished'
    PONG_PADDLE_MOVE = 'pong-paddle-move'
    PONG_UPDATE_STATE = 'pong-update-state'
    PONG_GAME_OVER = 'pong-game-over'
    SNAKE_UPDATE_STATE = 'snake-update-state'
    SNAKE_GAME_OVER = 'snake-game-over'


# Everything a paired client may send once its session exists
RELAY_EVENTS = tuple(e for e in ClientEvent if e is not ClientEvent.FIND_MATCH)


class ServerEvent(str, Enum):
    WAITING_FOR_MATCH = 'waiting-for-match'
    MATCH_FOUND = 'match-found'
    OPPONENT_MOVE = 'opponent-move'
    PONG_OPPONENT_PADDLE = 'pong-opponent-paddle'
    PONG_GAME_STATE = 'pong-game-state'
    SNAKE_OPPONENT_STATE = 'snake-opponent-state'
    GAME_OVER = 'game-over'
    OPPONENT_DISCONNECTED = 'opponent-disconnected'
    MATCH_TIMEOUT = 'match-timeout'
    SESSION_EXPIRED = 'session-expired'
