from typing import Dict, Iterator, Optional

from duelhub.models import Session


class SessionRegistry:
    """Live sessions keyed by every member's connection id.

    Both keys of a pair point at the same record; a session only disappears
    once it has been removed under both.
    """

    def __init__(self):
        self._by_sid: Dict[str, Session] = {}

    def get(self, sid: str) -> Optional[Session]:
        return self._by_sid.get(sid)

    def add(self, session: Session) -> None:
        for sid in session.member_sids:
            self._by_sid[sid] = session

    def remove(self, session: Session) -> None:
        for sid in session.member_sids:
            if self._by_sid.get(sid) is session:
                del self._by_sid[sid]

    def __contains__(self, sid: str) -> bool:
        return sid in self._by_sid

    def sessions(self) -> Iterator[Session]:
        seen = set()
        for session in list(self._by_sid.values()):
            if session.session_id not in seen:
                seen.add(session.session_id)
                yield session

    def __len__(self) -> int:
        return sum(1 for _ in self.sessions())
