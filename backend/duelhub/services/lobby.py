import logging
import threading
import time
from typing import Callable, Dict, Optional

from duelhub.events import ClientEvent, ServerEvent
from duelhub.models import Connection, GameType, MatchRequest, Session, TerminationReason
from .matchmaking import MatchmakingQueues
from .registry import SessionRegistry
from .relay import EventRelay
from .sessions import SessionManager, new_seed

DEFAULT_USERNAME = 'Anonymous'


class Lobby:
    """All matchmaking and session state for one server process.

    Every public method runs to completion under a single lock, so the
    transport may call in from any thread.
    """

    def __init__(
        self,
        emit: Callable,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
        seed_factory: Callable[[], int] = new_seed,
        queue_timeout: float = 0,
        session_idle_timeout: float = 0,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self.queue_timeout = queue_timeout
        self.session_idle_timeout = session_idle_timeout
        self.emit = emit
        self.connections: Dict[str, Connection] = {}
        self.queues = MatchmakingQueues()
        self.registry = SessionRegistry()
        self.sessions = SessionManager(
            self.registry, emit, logger=self.logger, clock=clock, seed_factory=seed_factory,
        )
        self.relay_events = EventRelay(self.registry, self.sessions, logger=self.logger)
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config, emit: Callable, logger: Optional[logging.Logger] = None) -> 'Lobby':
        return cls(
            emit,
            logger=logger,
            queue_timeout=int(config.get('QUEUE_TIMEOUT_SEC', 0)),
            session_idle_timeout=int(config.get('SESSION_IDLE_TIMEOUT_SEC', 0)),
        )

    def connect(self, sid: str) -> Connection:
        with self._lock:
            conn = self.connections.setdefault(sid, Connection(sid=sid))
            self.logger.info(f"[connect] sid={sid}")
            return conn

    def find_match(self, sid: str, payload=None) -> Optional[Session]:
        """Pair ``sid`` with the longest-waiting seeker or queue it.

        Returns the new session when a pairing happened. Requests from a
        connection that is already queued or playing are ignored.
        """
        if isinstance(payload, str):
            username, raw_type = payload, GameType.MAZE.value
        elif isinstance(payload, dict):
            username, raw_type = payload.get('username'), payload.get('gameType', GameType.MAZE.value)
        else:
            username, raw_type = None, None

        game_type = GameType.parse(raw_type)
        if game_type is None:
            self.logger.warning(f"[find-match-drop] sid={sid} unknown game type {raw_type!r}")
            return None

        with self._lock:
            if self.queues.is_queued(sid) or sid in self.registry:
                self.logger.info(f"[find-match-dup] sid={sid} already queued or playing, ignored")
                return None

            conn = self.connections.setdefault(sid, Connection(sid=sid))
            if conn.username is None:
                conn.username = str(username) if username else DEFAULT_USERNAME
            conn.game_type = game_type
            request = MatchRequest(sid=sid, username=conn.username, game_type=game_type, enqueued_at=self.clock())

            opponent = self.queues.pop_opponent(game_type)
            if opponent is not None:
                return self.sessions.create_session(opponent, request)

            self.queues.enqueue(request)
            self.emit(ServerEvent.WAITING_FOR_MATCH, None, sid)
            self.logger.info(f"[queued] {conn.username} ({sid}) waiting for {game_type.value}")
            return None

    def relay(self, sid: str, event, payload=None) -> bool:
        try:
            event = ClientEvent(event)
        except ValueError:
            self.logger.debug(f"[relay-drop] sid={sid} unknown event {event!r}")
            return False
        with self._lock:
            return self.relay_events.relay(sid, event, payload)

    def disconnect(self, sid: str) -> None:
        with self._lock:
            conn = self.connections.pop(sid, None)
            name = conn.username if conn else None
            request = self.queues.remove(sid)
            if request is not None:
                self.logger.info(f"[dequeued] {name} ({sid}) left the {request.game_type.value} queue")
            session = self.registry.get(sid)
            if session is not None:
                self.sessions.terminate(session, TerminationReason.DISCONNECT, leaver=sid)
            self.logger.info(f"[disconnect] sid={sid}")

    def reap_idle(self) -> int:
        """Evict stale queue entries and idle sessions. Returns how many."""
        reaped = 0
        with self._lock:
            now = self.clock()
            if self.queue_timeout > 0:
                for request in self.queues.expired(now - self.queue_timeout):
                    self.queues.remove(request.sid)
                    self.emit(ServerEvent.MATCH_TIMEOUT, {'gameType': request.game_type.value}, request.sid)
                    self.logger.info(f"[queue-timeout] {request.username} ({request.sid}) {request.game_type.value}")
                    reaped += 1
            if self.session_idle_timeout > 0:
                cutoff = now - self.session_idle_timeout
                for session in list(self.registry.sessions()):
                    if session.last_activity <= cutoff:
                        self.sessions.terminate(session, TerminationReason.IDLE)
                        reaped += 1
        return reaped

    def session_for(self, sid: str) -> Optional[Session]:
        with self._lock:
            return self.registry.get(sid)

    def stats(self) -> dict:
        with self._lock:
            return {
                'queues': self.queues.sizes(),
                'active_sessions': len(self.registry),
                'connections': len(self.connections),
            }
