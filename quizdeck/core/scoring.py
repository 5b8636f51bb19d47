"""Correctness rule, set summaries, and the incorrect-question selector.

Every place that judges an answer goes through ``is_answered_correctly`` so the
summary screen, the review pass, and the session's "all perfect" flag always
agree.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass

from quizdeck.core.models import Question, QuizSet


@dataclass(frozen=True, slots=True)
class SetSummary:
    """Aggregated result of one pass over a question sequence."""

    correct_count: int
    incorrect_count: int
    total_count: int
    percentage: int

    @property
    def all_correct(self) -> bool:
        return self.total_count > 0 and self.incorrect_count == 0


def is_answered_correctly(question: Question, selection: Collection[str] | None) -> bool:
    """Exact-match rule: the selection must equal the correct-answer id set.

    A question without any correct answer can never be answered correctly.
    """
    if selection is None:
        return False
    correct_ids = question.correct_answer_ids
    if not correct_ids:
        return False
    return frozenset(selection) == correct_ids


def summarize(questions: Iterable[Question], progress: Mapping[str, Collection[str]]) -> SetSummary:
    question_list = list(questions)
    total = len(question_list)
    correct = sum(
        1 for question in question_list if is_answered_correctly(question, progress.get(question.id))
    )
    return SetSummary(
        correct_count=correct,
        incorrect_count=total - correct,
        total_count=total,
        percentage=_percentage(correct, total),
    )


def summarize_set(quiz_set: QuizSet) -> SetSummary:
    return summarize(quiz_set.questions, quiz_set.progress)


def all_answered_correctly(
    questions: Iterable[Question], progress: Mapping[str, Collection[str]]
) -> bool:
    return all(is_answered_correctly(question, progress.get(question.id)) for question in questions)


def select_incorrect_questions(
    questions: Iterable[Question], progress: Mapping[str, Collection[str]]
) -> list[Question]:
    """Return the questions, in order, whose committed selection is not an exact match."""
    return [
        question
        for question in questions
        if not is_answered_correctly(question, progress.get(question.id))
    ]


def completion_ratio(quiz_set: QuizSet) -> float:
    """Fraction of questions that have any committed answer, for progress cards."""
    if not quiz_set.questions:
        return 0.0
    answered = sum(1 for question in quiz_set.questions if question.id in quiz_set.progress)
    return answered / len(quiz_set.questions)


def _percentage(correct: int, total: int) -> int:
    if total <= 0:
        return 0
    # Half-up rounding; round() would send 12.5 to 12.
    return int(correct * 100 / total + 0.5)
