"""Service that persists every quiz set, including its progress, in one JSON file."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
import json
import logging
import os
from pathlib import Path
from threading import RLock
from typing import Any

from quizdeck.constants.storage_constants import STORE_FORMAT_VERSION
from quizdeck.core.models import Answer, Question, QuizSet
from quizdeck.core.quiz_exporter import definition_to_dict, export_quiz_set_to_json
from quizdeck.core.quiz_importer import QuizImportError, parse_quiz_set_json, quiz_set_from_definition
from quizdeck.core.services.progress_store import PersistenceError

logger = logging.getLogger(__name__)


class StoreEvent(Enum):
    """Kinds of change reported to store subscribers."""

    CREATED = auto()
    UPDATED = auto()
    DELETED = auto()


StoreListener = Callable[[StoreEvent, str], None]


class UnknownSetError(LookupError):
    """Raised when a quiz set id is not present in the store."""


class SetStore:
    """Single source of truth for persisted quiz sets.

    Sets are kept in memory in insertion order and the whole collection is
    rewritten on every change. When ``storage_path`` is ``None`` the store is
    memory-only, which is what the tests use.
    """

    def __init__(self, storage_path: Path | None = None, *, create_demo_set: bool = True) -> None:
        self._lock = RLock()
        self._storage_path = storage_path
        self._sets: dict[str, QuizSet] = {}
        self._listeners: list[StoreListener] = []
        self._load()
        if not self._sets and create_demo_set:
            demo = build_demo_set()
            self._sets[demo.id] = demo
            try:
                self._write()
            except PersistenceError as exc:
                logger.warning("Demo set could not be saved: %s", exc)

    # --- Queries ---

    def list_sets(self) -> list[QuizSet]:
        with self._lock:
            return [quiz_set.copy() for quiz_set in self._sets.values()]

    def get_set(self, set_id: str) -> QuizSet:
        with self._lock:
            quiz_set = self._sets.get(set_id)
            if quiz_set is None:
                raise UnknownSetError(f"Quiz set {set_id} does not exist.")
            return quiz_set.copy()

    def has_set(self, set_id: str) -> bool:
        with self._lock:
            return set_id in self._sets

    # --- Mutations ---

    def save(self, quiz_set: QuizSet) -> None:
        """Progress store contract: upsert the complete set by identity."""
        self.update_set(quiz_set)

    def update_set(self, quiz_set: QuizSet) -> None:
        stored = quiz_set.copy()
        stored.prune_progress()
        with self._lock:
            event = StoreEvent.UPDATED if stored.id in self._sets else StoreEvent.CREATED
            self._sets[stored.id] = stored
            try:
                self._write()
            finally:
                self._notify(event, stored.id)

    def remove_set(self, set_id: str) -> None:
        with self._lock:
            if self._sets.pop(set_id, None) is None:
                return
            try:
                self._write()
            finally:
                self._notify(StoreEvent.DELETED, set_id)

    # --- Import / export ---

    def import_definition(self, incoming: QuizSet) -> QuizSet:
        """Add a set definition, or replace the definition of an existing id.

        Existing progress survives a re-import; entries for questions that the
        new definition no longer contains are dropped.
        """
        with self._lock:
            existing = self._sets.get(incoming.id)
            if existing is None:
                merged = incoming.definition()
            else:
                merged = existing.copy()
                merged.name = incoming.name
                merged.questions = list(incoming.questions)
            self.update_set(merged)
            return self.get_set(merged.id)

    def import_from_json(self, text: str) -> QuizSet:
        return self.import_definition(parse_quiz_set_json(text))

    def export_to_json(self, set_id: str) -> str:
        return export_quiz_set_to_json(self.get_set(set_id).definition())

    # --- Subscribers ---

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener and return a callable that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent, set_id: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, set_id)
            except Exception:  # listeners are UI glue; persistence already happened
                logger.exception("Store listener failed for %s %s", event.name, set_id)

    # --- File persistence ---

    def _load(self) -> None:
        if self._storage_path is None or not self._storage_path.exists():
            return
        try:
            document = json.loads(self._storage_path.read_text(encoding="utf-8"))
            for raw_set in document.get("sets", []):
                quiz_set = _stored_set_from_dict(raw_set)
                self._sets[quiz_set.id] = quiz_set
        except (OSError, ValueError, AttributeError, QuizImportError) as exc:
            logger.error("Could not load quiz sets from %s: %s", self._storage_path, exc)
            self._sets = {}
        else:
            logger.info("Loaded %d quiz set(s) from %s", len(self._sets), self._storage_path)

    def _write(self) -> None:
        if self._storage_path is None:
            return
        document = {
            "version": STORE_FORMAT_VERSION,
            "sets": [_stored_set_to_dict(quiz_set) for quiz_set in self._sets.values()],
        }
        temp_path = self._storage_path.with_suffix(self._storage_path.suffix + ".tmp")
        try:
            self._storage_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(temp_path, self._storage_path)
        except OSError as exc:
            raise PersistenceError(f"Could not write {self._storage_path}: {exc}") from exc


def _stored_set_to_dict(quiz_set: QuizSet) -> dict[str, Any]:
    data = definition_to_dict(quiz_set)
    data["progress"] = {qid: sorted(selection) for qid, selection in quiz_set.progress.items()}
    data["isCompleted"] = quiz_set.is_completed
    return data


def _stored_set_from_dict(data: dict[str, Any]) -> QuizSet:
    quiz_set = quiz_set_from_definition(data)
    raw_progress = data.get("progress") or {}
    quiz_set.progress = {str(qid): {str(aid) for aid in selection} for qid, selection in raw_progress.items()}
    quiz_set.is_completed = bool(data.get("isCompleted", False))
    quiz_set.prune_progress()
    return quiz_set


def build_demo_set() -> QuizSet:
    """Sample set created on first launch so the list is never empty."""
    return QuizSet(
        name="Python Essentials (Demo)",
        questions=[
            Question(
                text="Which keyword defines a function in Python?",
                answers=(
                    Answer(text="`def`", is_correct=True),
                    Answer(text="`func`"),
                    Answer(text="`lambda def`"),
                ),
            ),
            Question(
                text="Which of these are built-in immutable types?",
                answers=(
                    Answer(text="`tuple`", is_correct=True),
                    Answer(text="`frozenset`", is_correct=True),
                    Answer(text="`list`"),
                    Answer(text="`str`", is_correct=True),
                ),
            ),
            Question(
                text="What does `len({})` return?",
                answers=(
                    Answer(text="`0`", is_correct=True),
                    Answer(text="`None`"),
                    Answer(text="It raises `TypeError`."),
                ),
            ),
        ],
    )
