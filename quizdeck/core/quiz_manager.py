"""Business logic shared by the desktop UI and the HTTP API."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Any
from uuid import uuid4

from quizdeck.core.models import QuizSet
from quizdeck.core.quiz_exporter import save_quiz_set_to_file
from quizdeck.core.quiz_importer import load_quiz_set_from_file, quiz_set_from_definition
from quizdeck.core.scoring import SetSummary, completion_ratio, summarize_set
from quizdeck.core.services.quiz_session import QuizSession, SessionAction, SessionState
from quizdeck.core.services.set_store import SetStore
from quizdeck.core.set_editor import SetEditor

logger = logging.getLogger(__name__)


class UnknownSessionError(LookupError):
    """Raised when a session id does not refer to an open session."""


class QuizManager:
    """Facade over the set store and the open quiz sessions.

    At most one session is open per set. Starting a new session for a set, or
    changing the set's definition, closes the previous one so two working
    copies never write over each other.
    """

    def __init__(self, store: SetStore) -> None:
        self._lock = RLock()
        self._store = store
        self._sessions: dict[str, QuizSession] = {}
        self._session_by_set: dict[str, str] = {}

    @property
    def store(self) -> SetStore:
        return self._store

    # --- Set Store Delegation ---

    def list_sets(self) -> list[QuizSet]:
        with self._lock:
            return self._store.list_sets()

    def get_set(self, set_id: str) -> QuizSet:
        with self._lock:
            return self._store.get_set(set_id)

    def get_set_summary(self, set_id: str) -> SetSummary:
        with self._lock:
            return summarize_set(self._store.get_set(set_id))

    def get_completion_ratio(self, set_id: str) -> float:
        with self._lock:
            return completion_ratio(self._store.get_set(set_id))

    def delete_set(self, set_id: str) -> None:
        with self._lock:
            self._close_session_for_set(set_id)
            self._store.remove_set(set_id)

    # --- Editing, Import & Export ---

    def create_editor(self, set_id: str | None = None) -> SetEditor:
        with self._lock:
            editing = self._store.get_set(set_id) if set_id is not None else None
            return SetEditor(self._store, editing=editing)

    def save_editor(self, editor: SetEditor) -> QuizSet:
        with self._lock:
            quiz_set = editor.save_quiz_set()
            self._close_session_for_set(quiz_set.id)
            return quiz_set

    def import_set_from_json(self, text: str) -> QuizSet:
        with self._lock:
            quiz_set = self._store.import_from_json(text)
            self._close_session_for_set(quiz_set.id)
            return quiz_set

    def import_set_definition(self, data: dict[str, Any]) -> QuizSet:
        incoming = quiz_set_from_definition(data)
        with self._lock:
            quiz_set = self._store.import_definition(incoming)
            self._close_session_for_set(quiz_set.id)
            return quiz_set

    def import_set_from_file(self, file_path: Path) -> QuizSet:
        imported = load_quiz_set_from_file(file_path)
        with self._lock:
            quiz_set = self._store.import_definition(imported.quiz_set)
            self._close_session_for_set(quiz_set.id)
            return quiz_set

    def export_set_json(self, set_id: str) -> str:
        with self._lock:
            return self._store.export_to_json(set_id)

    def export_set_to_file(self, set_id: str, file_path: Path) -> None:
        with self._lock:
            quiz_set = self._store.get_set(set_id)
        save_quiz_set_to_file(file_path, quiz_set.definition())

    # --- Session Delegation ---

    def start_session(self, set_id: str) -> str:
        """Open a session over the stored copy of a set and return its id."""
        with self._lock:
            quiz_set = self._store.get_set(set_id)
            self._close_session_for_set(set_id)
            session_id = uuid4().hex
            self._sessions[session_id] = QuizSession(quiz_set, self._store)
            self._session_by_set[set_id] = session_id
            logger.info("Opened session %s for set %s", session_id, set_id)
            return session_id

    def get_session_state(self, session_id: str) -> SessionState:
        with self._lock:
            return self._get_session(session_id).state

    def get_session_summary(self, session_id: str) -> SetSummary:
        with self._lock:
            return self._get_session(session_id).summary()

    def dispatch(self, session_id: str, action: SessionAction, answer_id: str | None = None) -> SessionState:
        with self._lock:
            return self._get_session(session_id).dispatch(action, answer_id)

    def close_session(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
            if session is None:
                return
            set_id = session.state.set_id
            if self._session_by_set.get(set_id) == session_id:
                del self._session_by_set[set_id]

    def get_session_for_set(self, set_id: str) -> str | None:
        with self._lock:
            return self._session_by_set.get(set_id)

    def _get_session(self, session_id: str) -> QuizSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSessionError(f"Session {session_id} is not open.")
        return session

    def _close_session_for_set(self, set_id: str) -> None:
        session_id = self._session_by_set.pop(set_id, None)
        if session_id is not None:
            self._sessions.pop(session_id, None)
            logger.info("Closed session %s for set %s", session_id, set_id)
