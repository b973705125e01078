"""Manages bomb party sessions, one per guild channel."""

import asyncio
import copy
import logging
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from game.objectives import validate_weights
from game.session import GameState, Player, SessionKey
import config

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Outcome of a registry operation."""
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    JOINED = "joined"
    ALREADY_JOINED = "already_joined"
    NO_SESSION = "no_session"
    ALREADY_RUNNING = "already_running"
    CONFIG_UPDATED = "config_updated"
    TIMEOUT_TOO_LONG = "timeout_too_long"
    INVALID_WEIGHTS = "invalid_weights"
    STARTED = "started"
    INFO = "info"


class SessionRegistry:
    """Lock-guarded mapping from channel key to game state.

    Every operation holds the lock only for its own lookup and mutation.
    Once ``try_start`` succeeds the state belongs to the session task, and
    configuration calls are refused with ``ALREADY_RUNNING``.
    """

    def __init__(self):
        self._sessions: Dict[SessionKey, GameState] = {}
        self._lock = asyncio.Lock()

    async def create(self, key: SessionKey, player: Player) -> SessionStatus:
        """Create a new session with the requester as its only player."""
        async with self._lock:
            if key in self._sessions:
                return SessionStatus.ALREADY_EXISTS
            self._sessions[key] = GameState(players=[player])
        logger.debug("Session created for %s by %s", key, player.user_id)
        return SessionStatus.CREATED

    async def join(self, key: SessionKey, player: Player) -> SessionStatus:
        """Add a player to a session that has not started yet."""
        async with self._lock:
            state = self._sessions.get(key)
            if state is None:
                return SessionStatus.NO_SESSION
            if state.running:
                return SessionStatus.ALREADY_RUNNING
            if player in state.players:
                return SessionStatus.ALREADY_JOINED
            state.players.append(player)
            return SessionStatus.JOINED

    async def set_target(self, key: SessionKey, target: int) -> SessionStatus:
        async with self._lock:
            state = self._sessions.get(key)
            if state is None:
                return SessionStatus.NO_SESSION
            if state.running:
                return SessionStatus.ALREADY_RUNNING
            state.target = target
            return SessionStatus.CONFIG_UPDATED

    async def set_timeout(
        self,
        key: SessionKey,
        timeout: int,
        max_timeout: int = config.MAX_TIMEOUT
    ) -> SessionStatus:
        if timeout > max_timeout:
            return SessionStatus.TIMEOUT_TOO_LONG
        async with self._lock:
            state = self._sessions.get(key)
            if state is None:
                return SessionStatus.NO_SESSION
            if state.running:
                return SessionStatus.ALREADY_RUNNING
            state.timeout = timeout
            return SessionStatus.CONFIG_UPDATED

    async def set_weights(self, key: SessionKey, weights: Sequence[int]) -> SessionStatus:
        try:
            validate_weights(weights)
        except ValueError:
            return SessionStatus.INVALID_WEIGHTS
        async with self._lock:
            state = self._sessions.get(key)
            if state is None:
                return SessionStatus.NO_SESSION
            if state.running:
                return SessionStatus.ALREADY_RUNNING
            state.weights = tuple(weights)
            return SessionStatus.CONFIG_UPDATED

    async def try_start(self, key: SessionKey) -> Tuple[SessionStatus, Optional[GameState]]:
        """Mark a session as running and hand its state to the caller.

        Only the first caller for a session gets ``STARTED``; the returned
        state is owned by that caller until it calls ``remove``.
        """
        async with self._lock:
            state = self._sessions.get(key)
            if state is None:
                return SessionStatus.NO_SESSION, None
            if state.running:
                return SessionStatus.ALREADY_RUNNING, None
            state.running = True
        logger.debug("Session %s started with %d player(s)", key, len(state.players))
        return SessionStatus.STARTED, state

    async def get_info(self, key: SessionKey) -> Tuple[SessionStatus, Optional[GameState]]:
        """Return a snapshot of a session's state."""
        async with self._lock:
            state = self._sessions.get(key)
            if state is None:
                return SessionStatus.NO_SESSION, None
            return SessionStatus.INFO, copy.deepcopy(state)

    async def remove(self, key: SessionKey) -> Optional[GameState]:
        """Delete a session entry."""
        async with self._lock:
            state = self._sessions.pop(key, None)
        if state is not None:
            logger.debug("Session %s removed", key)
        return state

    async def exists(self, key: SessionKey) -> bool:
        async with self._lock:
            return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


# Global session registry instance
session_registry = SessionRegistry()
