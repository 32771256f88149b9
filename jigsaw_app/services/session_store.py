"""In-memory registry of live puzzle engines."""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from jigsaw_app.services.engine import PuzzleEngine, PuzzleOptions

logger = logging.getLogger(__name__)


@dataclass
class PuzzleSession:
    """One live puzzle and the lock that makes its handlers run one at a time."""

    puzzle_id: str
    engine: PuzzleEngine
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore:
    """Keeps puzzles in memory for the lifetime of the process."""

    def __init__(self) -> None:
        self._sessions: Dict[str, PuzzleSession] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, options: Optional[PuzzleOptions] = None) -> PuzzleSession:
        """Build a new engine and register it under a fresh id."""
        session = PuzzleSession(puzzle_id=str(uuid.uuid4()), engine=PuzzleEngine(options))
        with self._registry_lock:
            self._sessions[session.puzzle_id] = session
        logger.info("Created puzzle %s", session.puzzle_id)
        return session

    def get(self, puzzle_id: str) -> Optional[PuzzleSession]:
        with self._registry_lock:
            return self._sessions.get(puzzle_id)

    def delete(self, puzzle_id: str) -> bool:
        with self._registry_lock:
            removed = self._sessions.pop(puzzle_id, None)
        if removed is not None:
            logger.info("Deleted puzzle %s", puzzle_id)
        return removed is not None

    def clear(self) -> None:
        with self._registry_lock:
            self._sessions.clear()


# Singleton instance
_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Get the singleton SessionStore instance."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
