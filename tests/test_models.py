"""Tests for the quiz set data model."""
from quizdeck.core.models import Answer, Question, QuizSet, new_identifier


def test_new_identifier_is_unique_uppercase():
    first, second = new_identifier(), new_identifier()
    assert first != second
    assert first == first.upper()


def test_question_correct_answer_ids(sample_set):
    q1, q2 = sample_set.questions
    assert q1.correct_answer_ids == frozenset({"A1"})
    assert q2.correct_answer_ids == frozenset({"A3", "A4"})


def test_allows_multiple_selection_only_with_several_correct_answers(sample_set):
    q1, q2 = sample_set.questions
    assert not q1.allows_multiple_selection
    assert q2.allows_multiple_selection


def test_question_without_correct_answer_is_single_select():
    question = Question(text="?", answers=(Answer(text="x"), Answer(text="y")))
    assert question.correct_answer_ids == frozenset()
    assert not question.allows_multiple_selection


def test_has_answer(sample_set):
    q1 = sample_set.questions[0]
    assert q1.has_answer("A1")
    assert not q1.has_answer("A3")


class TestQuizSet:
    def test_copy_is_independent(self, sample_set):
        sample_set.progress["Q1"] = {"A1"}
        clone = sample_set.copy()
        clone.progress["Q1"].add("A2")
        clone.progress["Q2"] = {"A3"}

        assert sample_set.progress == {"Q1": {"A1"}}
        assert clone.id == sample_set.id

    def test_definition_drops_progress(self, sample_set):
        sample_set.progress["Q1"] = {"A1"}
        sample_set.is_completed = True
        definition = sample_set.definition()

        assert definition.progress == {}
        assert definition.is_completed is False
        assert definition.question_ids() == ["Q1", "Q2"]

    def test_find_question(self, sample_set):
        assert sample_set.find_question("Q2").text == "Pick A3 and A4"
        assert sample_set.find_question("missing") is None

    def test_all_questions_answered(self, sample_set):
        assert not sample_set.all_questions_answered()
        sample_set.progress = {"Q1": {"A2"}, "Q2": set()}
        assert sample_set.all_questions_answered()

    def test_empty_set_counts_as_fully_answered(self):
        assert QuizSet(name="Empty").all_questions_answered()

    def test_prune_progress_drops_unknown_questions(self, sample_set):
        sample_set.progress = {"Q1": {"A1"}, "GONE": {"X"}}
        sample_set.prune_progress()
        assert sample_set.progress == {"Q1": {"A1"}}

    def test_prune_progress_clears_completion_when_questions_unanswered(self, sample_set):
        sample_set.progress = {"Q1": {"A1"}}
        sample_set.is_completed = True
        sample_set.prune_progress()
        assert sample_set.is_completed is False

    def test_prune_progress_keeps_completion_when_all_answered(self, sample_set):
        sample_set.progress = {"Q1": {"A1"}, "Q2": {"A3"}}
        sample_set.is_completed = True
        sample_set.prune_progress()
        assert sample_set.is_completed is True
