"""
Pytest configuration and shared fixtures.

The sample set mirrors the smallest interesting case: one single-correct
question and one question with two correct answers.
"""
import pytest

from quizdeck.core.models import Answer, Question, QuizSet
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.core.services.progress_store import PersistenceError
from quizdeck.core.services.set_store import SetStore


class RecordingStore:
    """Progress store double that keeps every saved copy."""

    def __init__(self):
        self.saved = []

    def save(self, quiz_set):
        self.saved.append(quiz_set.copy())

    @property
    def last(self):
        return self.saved[-1]


class FailingStore(RecordingStore):
    """Progress store double whose writes fail until ``fail`` is cleared."""

    def __init__(self):
        super().__init__()
        self.fail = True
        self.attempts = 0

    def save(self, quiz_set):
        self.attempts += 1
        if self.fail:
            raise PersistenceError("disk full")
        super().save(quiz_set)


@pytest.fixture
def sample_set():
    """Two questions: Q1 single-correct {A1*, A2}, Q2 multi-correct {A3*, A4*, A5}."""
    return QuizSet(
        id="SET-1",
        name="Sample",
        questions=[
            Question(
                id="Q1",
                text="Pick A1",
                answers=(Answer(id="A1", text="one", is_correct=True), Answer(id="A2", text="two")),
            ),
            Question(
                id="Q2",
                text="Pick A3 and A4",
                answers=(
                    Answer(id="A3", text="three", is_correct=True),
                    Answer(id="A4", text="four", is_correct=True),
                    Answer(id="A5", text="five"),
                ),
            ),
        ],
    )


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def memory_store():
    """In-memory set store without the demo set."""
    return SetStore(create_demo_set=False)


@pytest.fixture
def manager(memory_store, sample_set):
    memory_store.update_set(sample_set)
    return QuizManager(memory_store)
