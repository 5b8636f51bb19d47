"""Domain models for quiz sets and their per-question progress."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4


def new_identifier() -> str:
    """Return a fresh stable identifier for answers, questions, and sets."""
    return str(uuid4()).upper()


@dataclass(frozen=True, slots=True)
class Answer:
    """A single selectable option of a question."""

    text: str
    is_correct: bool = False
    id: str = field(default_factory=new_identifier)


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question with one or more correct answers."""

    text: str
    answers: tuple[Answer, ...]
    id: str = field(default_factory=new_identifier)

    @property
    def correct_answer_ids(self) -> frozenset[str]:
        return frozenset(answer.id for answer in self.answers if answer.is_correct)

    @property
    def allows_multiple_selection(self) -> bool:
        return len(self.correct_answer_ids) > 1

    def has_answer(self, answer_id: str) -> bool:
        return any(answer.id == answer_id for answer in self.answers)


@dataclass(slots=True)
class QuizSet:
    """Named question set plus the session-local progress layered over it.

    ``progress`` maps question ids to the answer ids last submitted for them.
    Only ``id``, ``name`` and ``questions`` form the set definition; progress
    and ``is_completed`` never leave the local store.
    """

    name: str
    questions: list[Question] = field(default_factory=list)
    id: str = field(default_factory=new_identifier)
    progress: dict[str, set[str]] = field(default_factory=dict)
    is_completed: bool = False

    def question_ids(self) -> list[str]:
        return [question.id for question in self.questions]

    def find_question(self, question_id: str) -> Question | None:
        return next((q for q in self.questions if q.id == question_id), None)

    def definition(self) -> QuizSet:
        """Return a progress-free copy suitable for export."""
        return QuizSet(id=self.id, name=self.name, questions=list(self.questions))

    def copy(self) -> QuizSet:
        """Return a working copy whose progress can be mutated independently."""
        return QuizSet(
            id=self.id,
            name=self.name,
            questions=list(self.questions),
            progress={qid: set(selection) for qid, selection in self.progress.items()},
            is_completed=self.is_completed,
        )

    def all_questions_answered(self) -> bool:
        return all(question.id in self.progress for question in self.questions)

    def prune_progress(self) -> None:
        """Drop progress entries for questions no longer in the set."""
        known = set(self.question_ids())
        for question_id in [qid for qid in self.progress if qid not in known]:
            del self.progress[question_id]
        if self.is_completed and not self.all_questions_answered():
            self.is_completed = False
