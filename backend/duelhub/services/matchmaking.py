from collections import deque
from typing import Deque, Dict, List, Optional

from duelhub.models import GameType, MatchRequest


class MatchmakingQueues:
    """One FIFO of waiting seekers per game type."""

    def __init__(self):
        self._queues: Dict[GameType, Deque[MatchRequest]] = {gt: deque() for gt in GameType}

    def pop_opponent(self, game_type: GameType) -> Optional[MatchRequest]:
        """Take the longest-waiting seeker for ``game_type``, if any."""
        queue = self._queues[game_type]
        if queue:
            return queue.popleft()
        return None

    def enqueue(self, request: MatchRequest) -> None:
        self._queues[request.game_type].append(request)

    def remove(self, sid: str) -> Optional[MatchRequest]:
        for queue in self._queues.values():
            for request in queue:
                if request.sid == sid:
                    queue.remove(request)
                    return request
        return None

    def is_queued(self, sid: str) -> bool:
        return any(r.sid == sid for q in self._queues.values() for r in q)

    def waiting(self, game_type: GameType) -> List[MatchRequest]:
        return list(self._queues[game_type])

    def expired(self, cutoff: float) -> List[MatchRequest]:
        return [r for q in self._queues.values() for r in q if r.enqueued_at <= cutoff]

    def sizes(self) -> Dict[str, int]:
        return {gt.value: len(q) for gt, q in self._queues.items()}
