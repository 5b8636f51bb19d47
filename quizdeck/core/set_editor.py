"""Draft model behind the create/edit set screen."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from quizdeck.core.models import Answer, Question, QuizSet, new_identifier
from quizdeck.core.services.set_store import SetStore

logger = logging.getLogger(__name__)

MIN_DRAFT_ANSWERS = 2


class SetEditorError(ValueError):
    """Raised when a draft question or set fails validation."""


@dataclass(slots=True)
class AnswerDraft:
    """Editable answer row; empty rows are dropped when the question is saved."""

    text: str = ""
    is_correct: bool = False
    id: str | None = None


class SetEditor:
    """Builds or edits the definition of one quiz set.

    The editor never touches progress itself: when an existing set is saved,
    the progress currently held by the store is carried over and pruned to the
    questions that still exist.
    """

    def __init__(self, store: SetStore, editing: QuizSet | None = None) -> None:
        self._store = store
        self._editing_set_id: str | None = None
        self.set_name: str = ""
        self.questions: list[Question] = []
        self.question_text: str = ""
        self.answers: list[AnswerDraft] = []
        self._editing_question_index: int | None = None
        self.reset_question_draft()

        if editing is not None:
            self._editing_set_id = editing.id
            self.set_name = editing.name
            self.questions = list(editing.questions)

    @property
    def is_editing_existing_set(self) -> bool:
        return self._editing_set_id is not None

    @property
    def editing_question_index(self) -> int | None:
        return self._editing_question_index

    # --- Answer rows ---

    def add_answer(self) -> None:
        self.answers.append(AnswerDraft())

    def remove_answers(self, indexes: set[int]) -> bool:
        """Remove answer rows, refusing when fewer than two rows would remain."""
        valid = {i for i in indexes if 0 <= i < len(self.answers)}
        if len(self.answers) - len(valid) < MIN_DRAFT_ANSWERS:
            return False
        self.answers = [draft for i, draft in enumerate(self.answers) if i not in valid]
        return True

    # --- Questions ---

    def load_question(self, index: int) -> None:
        """Copy an existing question into the draft so it can be edited."""
        if not 0 <= index < len(self.questions):
            raise IndexError(f"Question index {index} out of range")
        question = self.questions[index]
        self.question_text = question.text
        self.answers = [AnswerDraft(text=a.text, is_correct=a.is_correct, id=a.id) for a in question.answers]
        self._editing_question_index = index

    def save_question(self) -> Question:
        text = self.question_text.strip()
        valid_answers = [draft for draft in self.answers if draft.text.strip()]
        if not text or not valid_answers:
            raise SetEditorError("Question and answers cannot be empty.")
        if not any(draft.is_correct for draft in valid_answers):
            raise SetEditorError("Mark at least one answer as correct.")

        answers = tuple(
            Answer(text=draft.text.strip(), is_correct=draft.is_correct, id=draft.id or new_identifier())
            for draft in valid_answers
        )
        if self._editing_question_index is None:
            question = Question(text=text, answers=answers)
            self.questions.append(question)
        else:
            # Keep the question id so progress for it survives the edit.
            original = self.questions[self._editing_question_index]
            question = Question(id=original.id, text=text, answers=answers)
            self.questions[self._editing_question_index] = question

        self.reset_question_draft()
        return question

    def remove_questions(self, indexes: set[int]) -> None:
        self.questions = [q for i, q in enumerate(self.questions) if i not in indexes]
        if self._editing_question_index in indexes:
            self.reset_question_draft()

    def move_question(self, index: int, offset: int) -> None:
        target = index + offset
        if not (0 <= index < len(self.questions) and 0 <= target < len(self.questions)):
            return
        self.questions[index], self.questions[target] = self.questions[target], self.questions[index]

    def reset_question_draft(self) -> None:
        self.question_text = ""
        self.answers = [AnswerDraft() for _ in range(MIN_DRAFT_ANSWERS)]
        self._editing_question_index = None

    # --- Whole set ---

    def save_quiz_set(self) -> QuizSet:
        name = self.set_name.strip()
        if not name:
            raise SetEditorError("Set name cannot be empty.")
        if not self.questions:
            raise SetEditorError("A set must contain at least one question.")

        if self._editing_set_id is None:
            quiz_set = QuizSet(name=name, questions=list(self.questions))
            self._editing_set_id = quiz_set.id
        else:
            quiz_set = QuizSet(id=self._editing_set_id, name=name, questions=list(self.questions))
            if self._store.has_set(self._editing_set_id):
                existing = self._store.get_set(self._editing_set_id)
                quiz_set.progress = existing.progress
                quiz_set.is_completed = existing.is_completed
            quiz_set.prune_progress()

        self._store.update_set(quiz_set)
        logger.info("Saved set '%s' with %d question(s)", name, len(quiz_set.questions))
        return quiz_set
