"""Room domain services: layout seeding, per-room state and the registry.

This package holds the tabletop state machine. It knows nothing about
Socket.IO; socket handlers import it and decide what to broadcast.
"""

from .session import GameSession, RoomFull
from .store import SessionStore

__all__ = ['GameSession', 'RoomFull', 'SessionStore']
