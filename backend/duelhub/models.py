from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class GameType(str, Enum):
    MAZE = 'maze'
    SNAKE = 'snake'
    PONG = 'pong'

    @classmethod
    def parse(cls, value) -> Optional['GameType']:
        try:
            return cls(value)
        except ValueError:
            return None


class TerminationReason(str, Enum):
    WIN = 'win'
    DISCONNECT = 'disconnect'
    IDLE = 'idle'


@dataclass
class Connection:
    """A live socket. The display name is fixed by the first find-match."""
    sid: str
    username: Optional[str] = None
    game_type: Optional[GameType] = None


@dataclass
class MatchRequest:
    sid: str
    username: str
    game_type: GameType
    enqueued_at: float = 0.0


@dataclass
class Member:
    sid: str
    username: str
    player_number: int


@dataclass
class Session:
    session_id: str
    game_type: GameType
    seed: int
    members: List[Member]
    start_time: float
    last_activity: float
    authority_sid: Optional[str] = None
    # connection id -> {'username': ..., 'score': ...}; snake only
    scores: Dict[str, dict] = field(default_factory=dict)

    def member(self, sid: str) -> Optional[Member]:
        for m in self.members:
            if m.sid == sid:
                return m
        return None

    def opponent_of(self, sid: str) -> Optional[Member]:
        for m in self.members:
            if m.sid != sid:
                return m
        return None

    def player(self, number: int) -> Optional[Member]:
        for m in self.members:
            if m.player_number == number:
                return m
        return None

    @property
    def member_sids(self) -> List[str]:
        return [m.sid for m in self.members]
