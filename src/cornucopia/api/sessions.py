"""
In-memory session manager for running games.

Each session owns exactly one current snapshot plus the random generator
that drives it. Every mutation replaces the snapshot with the one the
engine returns and is serialized by a per-session lock, so concurrent
requests against the same game cannot interleave steps.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field

import numpy as np

from cornucopia.core.config import GameConfig
from cornucopia.core.engine import (
    acknowledge_deceased,
    advance_game_phase,
    initialize_game,
    manual_interaction,
)
from cornucopia.core.state import GamePhase, GameState

logger = logging.getLogger(__name__)


class SessionLimitError(RuntimeError):
    """Raised when creating a session would exceed the configured cap."""


@dataclass
class GameSession:
    """A game in progress (or finished) held by the driver."""

    id: str
    name: str
    config: GameConfig
    state: GameState
    rng: np.random.Generator
    steps: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def status(self) -> str:
        if self.state.phase == GamePhase.SETUP:
            return "created"
        if self.state.phase == GamePhase.GAME_OVER:
            return "completed"
        return "running"


class SessionManager:
    """Manages multiple game sessions in memory.

    Parameters
    ----------
    max_sessions : int | None
        Upper bound on live sessions.  ``None`` means unlimited.
    """

    def __init__(self, max_sessions: int | None = None):
        self.sessions: dict[str, GameSession] = {}
        self.max_sessions = max_sessions
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_session(
        self,
        config: GameConfig | None = None,
        name: str | None = None,
    ) -> GameSession:
        """Create a new game from ``config`` (defaults to standard rules)."""
        if config is None:
            config = GameConfig()

        with self._lock:
            if self.max_sessions is not None and len(self.sessions) >= self.max_sessions:
                raise SessionLimitError(
                    f"Session limit reached ({self.max_sessions})"
                )
            session_id = uuid.uuid4().hex[:8]
            rng = np.random.default_rng(config.random_seed)
            session = GameSession(
                id=session_id,
                name=name or f"game-{session_id}",
                config=config,
                state=initialize_game(config, rng),
                rng=rng,
            )
            self.sessions[session_id] = session

        logger.info(
            "Created session %s: %d tributes, radius %d, seed %s",
            session_id, config.tribute_count, config.map_size, config.random_seed,
        )
        return session

    def get_session(self, session_id: str) -> GameSession:
        """Get a session by ID.

        Raises KeyError if not found.
        """
        try:
            return self.sessions[session_id]
        except KeyError:
            raise KeyError(f"Session '{session_id}' not found") from None

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            if session_id not in self.sessions:
                raise KeyError(f"Session '{session_id}' not found")
            del self.sessions[session_id]
        logger.info("Deleted session %s", session_id)

    def list_sessions(self) -> list[GameSession]:
        return list(self.sessions.values())

    # ------------------------------------------------------------------
    # Engine calls
    # ------------------------------------------------------------------

    def advance(
        self,
        session_id: str,
        n: int = 1,
        auto_continue: bool | None = None,
    ) -> tuple[GameSession, int, bool]:
        """Advance a session by up to ``n`` steps.

        Stops early at GAME_OVER. When deaths are left pending after a
        step, the queue is drained if auto-continue is on; otherwise the
        run pauses so the driver can show the fallen.

        Returns:
            (session, steps taken, paused for pending deceased)
        """
        session = self.get_session(session_id)
        if auto_continue is None:
            auto_continue = session.config.auto_continue_on_death

        taken = 0
        paused = False
        with session.lock:
            for _ in range(n):
                if session.state.phase == GamePhase.GAME_OVER:
                    break
                session.state = advance_game_phase(session.state, session.rng)
                session.steps += 1
                taken += 1
                if session.state.deceased_queue:
                    if auto_continue:
                        session.state = acknowledge_deceased(session.state)
                    else:
                        paused = True
                        break

            if session.state.phase == GamePhase.GAME_OVER and taken:
                winner = session.state.winner
                logger.info(
                    "Session %s finished on day %d: %s",
                    session_id, session.state.day,
                    f"{winner.name} wins" if winner else "no survivors",
                )
        return session, taken, paused

    def interact(
        self,
        session_id: str,
        action: str,
        actor_id: str,
        target_id: str,
    ) -> GameSession:
        """Force a manual interaction. Unknown actions raise ValueError."""
        session = self.get_session(session_id)
        with session.lock:
            session.state = manual_interaction(
                action, actor_id, target_id, session.state, session.rng,
            )
        return session

    def acknowledge(self, session_id: str) -> GameSession:
        session = self.get_session(session_id)
        with session.lock:
            session.state = acknowledge_deceased(session.state)
        return session
