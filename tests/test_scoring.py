"""Tests for the exact-match rule, summaries and the incorrect-question selector."""
import pytest

from quizdeck.core.models import Answer, Question, QuizSet
from quizdeck.core.scoring import (
    SetSummary,
    all_answered_correctly,
    completion_ratio,
    is_answered_correctly,
    select_incorrect_questions,
    summarize,
    summarize_set,
)


class TestIsAnsweredCorrectly:
    def test_exact_match_is_correct(self, sample_set):
        q1, q2 = sample_set.questions
        assert is_answered_correctly(q1, {"A1"})
        assert is_answered_correctly(q2, {"A4", "A3"})

    @pytest.mark.parametrize(
        "selection",
        [{"A3"}, {"A3", "A4", "A5"}, {"A5"}, set()],
        ids=["missing-correct", "extra-incorrect", "wrong", "empty"],
    )
    def test_anything_but_exact_match_is_incorrect(self, sample_set, selection):
        assert not is_answered_correctly(sample_set.questions[1], selection)

    def test_unanswered_is_incorrect(self, sample_set):
        assert not is_answered_correctly(sample_set.questions[0], None)

    def test_question_without_correct_answers_is_never_correct(self):
        question = Question(text="?", answers=(Answer(id="X", text="x"), Answer(id="Y", text="y")))
        assert not is_answered_correctly(question, set())
        assert not is_answered_correctly(question, {"X"})


class TestSummarize:
    def test_counts_and_percentage(self, sample_set):
        summary = summarize(sample_set.questions, {"Q1": {"A1"}, "Q2": {"A3"}})
        assert summary == SetSummary(correct_count=1, incorrect_count=1, total_count=2, percentage=50)
        assert not summary.all_correct

    def test_unanswered_questions_count_as_incorrect(self, sample_set):
        summary = summarize_set(sample_set)
        assert summary.correct_count == 0
        assert summary.incorrect_count == 2

    def test_empty_set_has_zero_percentage(self):
        summary = summarize_set(QuizSet(name="Empty"))
        assert summary.percentage == 0
        assert summary.total_count == 0
        assert not summary.all_correct

    @pytest.mark.parametrize(
        ("correct", "total", "expected"),
        [(1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 8, 38), (8, 8, 100)],
    )
    def test_percentage_rounds_half_up(self, correct, total, expected):
        questions = [
            Question(id=f"Q{i}", text="?", answers=(Answer(id=f"A{i}", text="a", is_correct=True),))
            for i in range(total)
        ]
        progress = {f"Q{i}": {f"A{i}"} for i in range(correct)}
        assert summarize(questions, progress).percentage == expected

    def test_all_correct(self, sample_set):
        summary = summarize(sample_set.questions, {"Q1": {"A1"}, "Q2": {"A3", "A4"}})
        assert summary.all_correct
        assert summary.percentage == 100


def test_select_incorrect_questions_keeps_order(sample_set):
    incorrect = select_incorrect_questions(sample_set.questions, {"Q2": {"A3", "A4"}})
    assert [q.id for q in incorrect] == ["Q1"]
    assert [q.id for q in select_incorrect_questions(sample_set.questions, {})] == ["Q1", "Q2"]


def test_all_answered_correctly(sample_set):
    assert all_answered_correctly(sample_set.questions, {"Q1": {"A1"}, "Q2": {"A3", "A4"}})
    assert not all_answered_correctly(sample_set.questions, {"Q1": {"A1"}})
    assert all_answered_correctly([], {})


def test_completion_ratio(sample_set):
    assert completion_ratio(sample_set) == 0.0
    sample_set.progress = {"Q1": {"A2"}}
    assert completion_ratio(sample_set) == 0.5
    assert completion_ratio(QuizSet(name="Empty")) == 0.0
