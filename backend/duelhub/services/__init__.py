"""Matchmaking and session services.

Pure(ish) domain logic: maze generation, matchmaking queues, the session
registry and lifecycle, and per-game event relay. Socket handlers and HTTP
routes talk to the ``Lobby``; nothing in here imports Flask except the
idle reaper.
"""

from .lobby import Lobby

__all__ = ['Lobby']
