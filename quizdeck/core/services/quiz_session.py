"""Service that drives one pass through a quiz set and tracks its progress."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging

from quizdeck.core.models import Answer, Question, QuizSet
from quizdeck.core.scoring import (
    SetSummary,
    all_answered_correctly,
    select_incorrect_questions,
    summarize_set,
)
from quizdeck.core.services.progress_store import PersistenceError, ProgressStore

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    """Whether the session is showing questions or the set summary."""

    REVIEWING = auto()
    SUMMARY = auto()


class SessionAction(Enum):
    """Commands accepted by ``QuizSession.dispatch``."""

    SELECT_ANSWER = "select_answer"
    SUBMIT_ANSWER = "submit_answer"
    NEXT_QUESTION = "next_question"
    PREVIOUS_QUESTION = "previous_question"
    FINISH_SET = "finish_set"
    RESET_PROGRESS = "reset_progress"
    REVIEW_INCORRECT = "filter_incorrectly_answered"
    SHOW_ALL_QUESTIONS = "show_all_questions"


@dataclass(frozen=True, slots=True)
class SessionState:
    """Immutable snapshot of everything a view needs to render the session."""

    set_id: str
    set_name: str
    phase: SessionPhase
    questions_to_display: tuple[Question, ...]
    current_index: int
    pending_selection: frozenset[str]
    answer_checked: bool
    all_perfect_in_session: bool
    completed_with_errors: bool
    is_completed: bool
    save_error: str | None = None

    @property
    def showing_summary(self) -> bool:
        return self.phase is SessionPhase.SUMMARY

    @property
    def current_question(self) -> Question | None:
        if self.showing_summary or not self.questions_to_display:
            return None
        return self.questions_to_display[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions_to_display) - 1

    @property
    def progress_text(self) -> str:
        if self.showing_summary:
            return ""
        return f"Question {self.current_index + 1} of {len(self.questions_to_display)}"

    @property
    def can_submit(self) -> bool:
        return not self.showing_summary and not self.answer_checked and bool(self.pending_selection)

    @property
    def can_go_next(self) -> bool:
        return not self.showing_summary and not self.is_last_question

    @property
    def can_go_previous(self) -> bool:
        return not self.showing_summary and self.current_index > 0

    @property
    def can_finish(self) -> bool:
        return not self.showing_summary and self.is_last_question and self.answer_checked

    def is_selected(self, answer: Answer) -> bool:
        return answer.id in self.pending_selection


class QuizSession:
    """State machine over a working copy of one quiz set.

    The session owns its copy for as long as it is open and pushes the whole
    copy to the progress store on every state-changing step. Operations whose
    preconditions fail are no-ops and simply return the unchanged state.
    """

    def __init__(self, quiz_set: QuizSet, progress_store: ProgressStore) -> None:
        self._quiz_set = quiz_set.copy()
        self._store = progress_store
        self._phase = SessionPhase.REVIEWING
        self._questions_to_display: list[Question] = []
        self._current_index: int = 0
        self._pending_selection: set[str] = set()
        self._answer_checked: bool = False
        self._all_perfect_in_session: bool = False
        self._completed_with_errors: bool = False
        self._save_error: str | None = None
        self._restore_state()

    # --- Read access ---

    @property
    def state(self) -> SessionState:
        return SessionState(
            set_id=self._quiz_set.id,
            set_name=self._quiz_set.name,
            phase=self._phase,
            questions_to_display=tuple(self._questions_to_display),
            current_index=self._current_index,
            pending_selection=frozenset(self._pending_selection),
            answer_checked=self._answer_checked,
            all_perfect_in_session=self._all_perfect_in_session,
            completed_with_errors=self._completed_with_errors,
            is_completed=self._quiz_set.is_completed,
            save_error=self._save_error,
        )

    @property
    def quiz_set(self) -> QuizSet:
        return self._quiz_set.copy()

    def summary(self) -> SetSummary:
        return summarize_set(self._quiz_set)

    # --- Answering ---

    def select_answer(self, answer: Answer | str) -> SessionState:
        question = self._current_question()
        if question is None or self._answer_checked:
            return self.state

        answer_id = answer.id if isinstance(answer, Answer) else answer
        if not question.has_answer(answer_id):
            logger.debug("Ignoring answer %s not offered by question %s", answer_id, question.id)
            return self.state

        if question.allows_multiple_selection:
            if answer_id in self._pending_selection:
                self._pending_selection.remove(answer_id)
            else:
                self._pending_selection.add(answer_id)
        else:
            self._pending_selection = {answer_id}
        return self.state

    def submit_answer(self) -> SessionState:
        question = self._current_question()
        if question is None or self._answer_checked or not self._pending_selection:
            return self.state

        self._quiz_set.progress[question.id] = set(self._pending_selection)
        self._answer_checked = True
        return self.state

    # --- Navigation ---

    def next_question(self) -> SessionState:
        if self._phase is SessionPhase.SUMMARY:
            return self.state
        if self._current_index >= len(self._questions_to_display) - 1:
            return self.state

        self._persist()
        self._current_index += 1
        self._pending_selection = set()
        self._answer_checked = False
        return self.state

    def previous_question(self) -> SessionState:
        if self._phase is SessionPhase.SUMMARY or self._current_index <= 0:
            return self.state

        self._current_index -= 1
        question = self._questions_to_display[self._current_index]
        previous_selection = self._quiz_set.progress.get(question.id)
        self._pending_selection = set(previous_selection or ())
        self._answer_checked = previous_selection is not None
        return self.state

    # --- Completion, review and reset ---

    def finish_set(self) -> SessionState:
        if self._phase is SessionPhase.SUMMARY:
            return self.state

        all_perfect = all_answered_correctly(self._questions_to_display, self._quiz_set.progress)
        # Unanswered questions count as answered with nothing selected.
        for question in self._quiz_set.questions:
            self._quiz_set.progress.setdefault(question.id, set())
        self._quiz_set.is_completed = True
        self._persist()
        self._enter_summary(all_perfect)
        return self.state

    def reset_progress(self) -> SessionState:
        self._quiz_set.progress = {}
        self._quiz_set.is_completed = False
        self._persist()
        self._restore_state()
        return self.state

    def filter_incorrectly_answered(self) -> SessionState:
        incorrect = select_incorrect_questions(self._quiz_set.questions, self._quiz_set.progress)
        if not incorrect:
            self._quiz_set.is_completed = True
            self._persist()
            self._enter_summary(all_perfect=True)
            return self.state

        for question in incorrect:
            self._quiz_set.progress.pop(question.id, None)
        self._quiz_set.is_completed = False
        self._persist()

        self._phase = SessionPhase.REVIEWING
        self._questions_to_display = incorrect
        self._all_perfect_in_session = False
        self._completed_with_errors = False
        self._reset_question_state(0)
        logger.info(
            "Reviewing %d incorrect question(s) of set %s", len(incorrect), self._quiz_set.id
        )
        return self.state

    def show_all_questions(self) -> SessionState:
        if not self._quiz_set.questions:
            return self.state
        self._phase = SessionPhase.REVIEWING
        self._all_perfect_in_session = False
        self._completed_with_errors = False
        self._questions_to_display = list(self._quiz_set.questions)
        self._reset_question_state(self._first_unanswered_index())
        return self.state

    def dispatch(self, action: SessionAction, answer_id: str | None = None) -> SessionState:
        """Apply a command by name; the imperative methods remain the primary API."""
        if action is SessionAction.SELECT_ANSWER:
            if answer_id is None:
                raise ValueError("select_answer requires an answer id.")
            return self.select_answer(answer_id)
        handlers = {
            SessionAction.SUBMIT_ANSWER: self.submit_answer,
            SessionAction.NEXT_QUESTION: self.next_question,
            SessionAction.PREVIOUS_QUESTION: self.previous_question,
            SessionAction.FINISH_SET: self.finish_set,
            SessionAction.RESET_PROGRESS: self.reset_progress,
            SessionAction.REVIEW_INCORRECT: self.filter_incorrectly_answered,
            SessionAction.SHOW_ALL_QUESTIONS: self.show_all_questions,
        }
        return handlers[action]()

    # --- Internals ---

    def _restore_state(self) -> None:
        if self._quiz_set.is_completed or self._quiz_set.all_questions_answered():
            questions = self._quiz_set.questions
            all_perfect = all_answered_correctly(questions, self._quiz_set.progress)
            self._enter_summary(all_perfect)
            return

        self._phase = SessionPhase.REVIEWING
        self._all_perfect_in_session = False
        self._completed_with_errors = False
        self._questions_to_display = list(self._quiz_set.questions)
        self._reset_question_state(self._first_unanswered_index())

    def _enter_summary(self, all_perfect: bool) -> None:
        self._phase = SessionPhase.SUMMARY
        self._all_perfect_in_session = all_perfect
        self._completed_with_errors = not all_perfect
        self._questions_to_display = []
        self._reset_question_state(0)

    def _reset_question_state(self, index: int) -> None:
        self._current_index = index
        self._pending_selection = set()
        self._answer_checked = False

    def _first_unanswered_index(self) -> int:
        progress = self._quiz_set.progress
        return next(
            (i for i, q in enumerate(self._questions_to_display) if q.id not in progress),
            0,
        )

    def _current_question(self) -> Question | None:
        if self._phase is SessionPhase.SUMMARY or not self._questions_to_display:
            return None
        return self._questions_to_display[self._current_index]

    def _persist(self) -> bool:
        try:
            self._store.save(self._quiz_set.copy())
        except PersistenceError as exc:
            logger.warning("Could not save progress for set %s: %s", self._quiz_set.id, exc)
            self._save_error = str(exc)
            return False
        self._save_error = None
        return True
