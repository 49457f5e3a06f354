# backend/emailcheck/services/storage.py
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..models.validation import BatchSummary

logger = logging.getLogger("emailcheck.storage")

DEFAULT_SESSION = "default"


@dataclass
class SessionState:
    filename: Optional[str] = None
    summary: Optional[BatchSummary] = None
    workbook: Optional[bytes] = None
    running: bool = False


class BatchInProgress(Exception):
    pass


@dataclass
class ArtifactStore:
    """
    In-memory per-session batch state.

    Holds at most one output workbook per session; it is released before the
    next batch starts.
    """

    sessions: Dict[str, SessionState] = field(default_factory=dict)

    def get(self, session_id: str) -> SessionState:
        # read-only lookups never create an entry
        return self.sessions.get(session_id) or SessionState()

    def _drop_if_idle(self, session_id: str) -> None:
        state = self.sessions.get(session_id)
        if state is not None and not state.running and state.workbook is None:
            del self.sessions[session_id]

    def release(self, session_id: str) -> bool:
        state = self.sessions.get(session_id)
        if state is None:
            return False
        had_artifact = state.workbook is not None
        state.workbook = None
        state.summary = None
        if had_artifact:
            logger.debug("Released artifact for session %s", session_id)
        self._drop_if_idle(session_id)
        return had_artifact

    def begin(self, session_id: str, filename: Optional[str]) -> SessionState:
        if self.get(session_id).running:
            raise BatchInProgress(session_id)
        self.release(session_id)
        state = self.sessions.setdefault(session_id, SessionState())
        state.filename = filename
        state.running = True
        return state

    def finish(
        self,
        session_id: str,
        summary: Optional[BatchSummary] = None,
        workbook: Optional[bytes] = None,
    ) -> SessionState:
        state = self.sessions.get(session_id) or SessionState()
        state.running = False
        if workbook is not None:
            state.summary = summary
            state.workbook = workbook
            self.sessions[session_id] = state
        else:
            self._drop_if_idle(session_id)
        return state


store = ArtifactStore()


def get_store() -> ArtifactStore:
    return store
