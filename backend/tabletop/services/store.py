"""In-process registry of active rooms.

Sessions live in a dict guarded by a re-entrant lock. Creation and
eviction happen under that lock, so a room id maps to at most one
session at a time. Lock order is always store lock, then session lock.
"""

import logging
import random
import threading
from typing import Dict, List, Optional, Tuple

from tabletop.services.session import GameSession


class SessionStore:

    def __init__(self, max_players: int = 4, card_count: int = 36,
                 rng: Optional[random.Random] = None, logger: Optional[logging.Logger] = None):
        self.max_players = max_players
        self.card_count = card_count
        self.rng = rng
        self.logger = logger or logging.getLogger(__name__)
        self.lock = threading.RLock()
        self._sessions: Dict[str, GameSession] = {}
        self._sid_to_room: Dict[str, str] = {}

    def __len__(self):
        with self.lock:
            return len(self._sessions)

    def __contains__(self, room_id):
        with self.lock:
            return room_id in self._sessions

    def get(self, room_id: str) -> Optional[GameSession]:
        with self.lock:
            return self._sessions.get(room_id)

    def get_or_create(self, room_id: str) -> GameSession:
        with self.lock:
            session = self._sessions.get(room_id)
            if session is None:
                session = GameSession(
                    room_id,
                    max_players=self.max_players,
                    card_count=self.card_count,
                    rng=self.rng,
                )
                self._sessions[room_id] = session
                self.logger.info(f"[room-create] room={room_id}")
            return session

    def remove(self, room_id: str) -> None:
        with self.lock:
            if self._sessions.pop(room_id, None) is not None:
                self.logger.info(f"[room-evict] room={room_id}")

    def evict_if_empty(self, room_id: str, session: GameSession) -> bool:
        with self.lock:
            if not session.is_empty or self._sessions.get(room_id) is not session:
                return False
            self.remove(room_id)
            return True

    # ---- connection context ----

    def bind(self, sid: str, room_id: str) -> None:
        with self.lock:
            self._sid_to_room[sid] = room_id

    def unbind(self, sid: str) -> Optional[str]:
        with self.lock:
            return self._sid_to_room.pop(sid, None)

    def room_of(self, sid: str) -> Optional[str]:
        with self.lock:
            return self._sid_to_room.get(sid)

    def session_of(self, sid: str) -> Optional[GameSession]:
        with self.lock:
            room_id = self._sid_to_room.get(sid)
            return self._sessions.get(room_id) if room_id is not None else None

    def rooms(self) -> List[Tuple[str, int]]:
        with self.lock:
            return [(room_id, len(s.players)) for room_id, s in self._sessions.items()]
