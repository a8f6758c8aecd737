import itertools
import logging
import random
import time
from typing import Callable, Optional

from duelhub.events import ServerEvent
from duelhub.models import GameType, MatchRequest, Member, Session, TerminationReason
from .registry import SessionRegistry

SEED_RANGE = 1_000_000


def new_seed() -> int:
    return random.randrange(SEED_RANGE)


class SessionManager:
    """Creates sessions on pairing and tears them down.

    ``emit(event, payload, to)`` is the only way out of here; the transport
    decides what a recipient id means.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        emit: Callable,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
        seed_factory: Callable[[], int] = new_seed,
    ):
        self.registry = registry
        self.emit = emit
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self.seed_factory = seed_factory
        self._ids = itertools.count(1)

    def create_session(self, first: MatchRequest, second: MatchRequest) -> Session:
        """Pair two seekers. ``first`` waited longest and becomes player 1."""
        game_type = first.game_type
        now = self.clock()
        p1 = Member(sid=first.sid, username=first.username, player_number=1)
        p2 = Member(sid=second.sid, username=second.username, player_number=2)
        session = Session(
            session_id=f"game-{second.sid}-{first.sid}-{next(self._ids)}",
            game_type=game_type,
            seed=self.seed_factory(),
            members=[p1, p2],
            start_time=now,
            last_activity=now,
            authority_sid=p1.sid if game_type is GameType.PONG else None,
        )
        self.registry.add(session)

        for me, other in ((p1, p2), (p2, p1)):
            self.emit(ServerEvent.MATCH_FOUND, {
                'sessionId': session.session_id,
                'seed': session.seed,
                'gameType': game_type.value,
                'opponent': {'id': other.sid, 'username': other.username},
                'playerNumber': me.player_number,
            }, me.sid)

        self.logger.info(
            f"[match-found] session={session.session_id} type={game_type.value} "
            f"p1={p1.username} p2={p2.username} seed={session.seed}"
        )
        return session

    def elapsed(self, session: Session) -> float:
        return self.clock() - session.start_time

    def terminate(
        self,
        session: Session,
        reason: TerminationReason,
        winner: Optional[str] = None,
        time_sec: float = 0,
        leaver: Optional[str] = None,
    ) -> bool:
        """Remove ``session`` from the registry and tell its members why.

        Returns False when the session was already gone.
        """
        if self.registry.get(session.members[0].sid) is not session and \
                self.registry.get(session.members[1].sid) is not session:
            return False
        self.registry.remove(session)

        if reason is TerminationReason.WIN:
            for sid in session.member_sids:
                self.emit(ServerEvent.GAME_OVER, {'winner': winner, 'time': time_sec}, sid)
        elif reason is TerminationReason.DISCONNECT:
            for sid in session.member_sids:
                if sid != leaver:
                    self.emit(ServerEvent.OPPONENT_DISCONNECTED, None, sid)
        elif reason is TerminationReason.IDLE:
            for sid in session.member_sids:
                self.emit(ServerEvent.SESSION_EXPIRED, {'sessionId': session.session_id}, sid)

        self.logger.info(
            f"[terminate] session={session.session_id} reason={reason.value} winner={winner}"
        )
        return True
