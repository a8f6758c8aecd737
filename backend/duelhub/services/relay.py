"""Per-game message routing inside a session.

Each game type has a table of the client events it understands. A rule
either forwards the payload verbatim to the opponent, resolves the end of
the game, or both, and may be restricted to the session's authority (the
pong player running the physics). Anything not in the table is dropped.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional

from duelhub.events import ClientEvent, ServerEvent
from duelhub.models import GameType, Member, Session, TerminationReason
from .registry import SessionRegistry
from .sessions import SessionManager


class Outcome(NamedTuple):
    winner: str
    time: float = 0


@dataclass(frozen=True)
class RelayRule:
    forward: Optional[ServerEvent] = None
    resolve: Optional[Callable[['EventRelay', Session, Member, object], Optional[Outcome]]] = None
    authority_only: bool = False


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _maze_finished(relay, session, sender, payload):
    return Outcome(sender.username, round(relay.sessions.elapsed(session), 3))


def _pong_game_over(relay, session, sender, payload):
    if isinstance(payload, str):
        return Outcome(payload) if payload else None
    if not isinstance(payload, dict):
        return None
    if payload.get('winner'):
        return Outcome(str(payload['winner']))
    p1, p2 = payload.get('player1Score'), payload.get('player2Score')
    if not (_is_number(p1) and _is_number(p2)) or p1 == p2:
        return None
    leader = session.player(1 if p1 > p2 else 2)
    return Outcome(leader.username)


def _snake_game_over(relay, session, sender, payload):
    score = payload.get('score') if isinstance(payload, dict) else None
    if not _is_number(score):
        relay.logger.info(f"[snake-score-drop] session={session.session_id} from={sender.sid} payload={payload!r}")
        return None
    session.scores[sender.sid] = {'username': sender.username, 'score': score}
    if len(session.scores) < len(session.members):
        return None
    # Report order decides a tie: the second reporter wins it.
    first, second = list(session.scores.values())
    winner = first if first['score'] > second['score'] else second
    return Outcome(winner['username'])


RELAY_RULES: Dict[GameType, Dict[ClientEvent, RelayRule]] = {
    GameType.MAZE: {
        ClientEvent.PLAYER_MOVE: RelayRule(forward=ServerEvent.OPPONENT_MOVE),
        ClientEvent.PLAYER_FINISHED: RelayRule(resolve=_maze_finished),
    },
    GameType.PONG: {
        ClientEvent.PONG_PADDLE_MOVE: RelayRule(forward=ServerEvent.PONG_OPPONENT_PADDLE),
        ClientEvent.PONG_UPDATE_STATE: RelayRule(forward=ServerEvent.PONG_GAME_STATE, authority_only=True),
        ClientEvent.PONG_GAME_OVER: RelayRule(resolve=_pong_game_over, authority_only=True),
    },
    GameType.SNAKE: {
        ClientEvent.SNAKE_UPDATE_STATE: RelayRule(forward=ServerEvent.SNAKE_OPPONENT_STATE),
        ClientEvent.SNAKE_GAME_OVER: RelayRule(resolve=_snake_game_over),
    },
}


class EventRelay:
    def __init__(
        self,
        registry: SessionRegistry,
        sessions: SessionManager,
        logger: Optional[logging.Logger] = None,
        rules: Optional[Dict[GameType, Dict[ClientEvent, RelayRule]]] = None,
    ):
        self.registry = registry
        self.sessions = sessions
        self.logger = logger or logging.getLogger(__name__)
        self.rules = rules if rules is not None else RELAY_RULES

    def relay(self, sid: str, event: ClientEvent, payload=None) -> bool:
        """Route one gameplay event. Returns True if it was accepted."""
        session = self.registry.get(sid)
        if session is None:
            self.logger.debug(f"[relay-drop] sid={sid} event={event.value} no session")
            return False
        rule = self.rules.get(session.game_type, {}).get(event)
        if rule is None:
            self.logger.debug(f"[relay-drop] session={session.session_id} event={event.value} not a {session.game_type.value} event")
            return False
        if rule.authority_only and session.authority_sid != sid:
            self.logger.info(f"[relay-drop] session={session.session_id} event={event.value} sid={sid} is not the authority")
            return False

        session.last_activity = self.sessions.clock()
        sender = session.member(sid)

        if rule.forward is not None:
            opponent = session.opponent_of(sid)
            self.sessions.emit(rule.forward, payload, opponent.sid)

        if rule.resolve is not None:
            outcome = rule.resolve(self, session, sender, payload)
            if outcome is not None:
                self.sessions.terminate(
                    session, TerminationReason.WIN, winner=outcome.winner, time_sec=outcome.time
                )
        return True
