"""Tests for the JSON-file set store."""
import json

import pytest

from quizdeck.core.models import Answer, Question, QuizSet
from quizdeck.core.quiz_importer import parse_quiz_set_json
from quizdeck.core.services.progress_store import PersistenceError
from quizdeck.core.services.set_store import SetStore, StoreEvent, UnknownSetError


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "quiz_sets.json"


def test_demo_set_created_for_empty_store():
    store = SetStore()
    sets = store.list_sets()
    assert len(sets) == 1
    assert sets[0].name == "Python Essentials (Demo)"
    assert any(q.allows_multiple_selection for q in sets[0].questions)


def test_demo_set_can_be_disabled(memory_store):
    assert memory_store.list_sets() == []


def test_get_unknown_set_raises(memory_store):
    with pytest.raises(UnknownSetError):
        memory_store.get_set("missing")


def test_returned_sets_are_copies(memory_store, sample_set):
    memory_store.update_set(sample_set)
    copy = memory_store.get_set("SET-1")
    copy.progress["Q1"] = {"A1"}
    assert memory_store.get_set("SET-1").progress == {}


def test_save_overwrites_by_identity(memory_store, sample_set):
    memory_store.save(sample_set)
    sample_set.progress = {"Q1": {"A2"}}
    memory_store.save(sample_set)

    assert len(memory_store.list_sets()) == 1
    assert memory_store.get_set("SET-1").progress == {"Q1": {"A2"}}


def test_file_round_trip(store_path, sample_set):
    store = SetStore(store_path, create_demo_set=False)
    sample_set.progress = {"Q1": {"A1"}, "Q2": {"A4", "A3"}}
    sample_set.is_completed = True
    store.update_set(sample_set)

    document = json.loads(store_path.read_text(encoding="utf-8"))
    assert document["version"] == 1
    assert document["sets"][0]["progress"]["Q2"] == ["A3", "A4"]
    assert document["sets"][0]["isCompleted"] is True

    reloaded = SetStore(store_path, create_demo_set=False).get_set("SET-1")
    assert reloaded.name == "Sample"
    assert reloaded.questions == sample_set.questions
    assert reloaded.progress == {"Q1": {"A1"}, "Q2": {"A3", "A4"}}
    assert reloaded.is_completed


def test_corrupt_file_starts_empty(store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_text("{not json", encoding="utf-8")
    store = SetStore(store_path, create_demo_set=False)
    assert store.list_sets() == []


def test_write_failure_raises_persistence_error(tmp_path, sample_set):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    store = SetStore(blocker / "quiz_sets.json", create_demo_set=False)
    with pytest.raises(PersistenceError):
        store.update_set(sample_set)


def test_remove_set(memory_store, sample_set):
    memory_store.update_set(sample_set)
    memory_store.remove_set("SET-1")
    assert not memory_store.has_set("SET-1")
    memory_store.remove_set("SET-1")


class TestImport:
    def test_import_new_set(self, memory_store, sample_set):
        imported = memory_store.import_definition(sample_set)
        assert imported.id == "SET-1"
        assert imported.progress == {}

    def test_reimport_preserves_progress(self, memory_store, sample_set):
        sample_set.progress = {"Q1": {"A1"}, "Q2": {"A3"}}
        sample_set.is_completed = True
        memory_store.update_set(sample_set)

        exported = memory_store.export_to_json("SET-1")
        assert "progress" not in exported
        imported = memory_store.import_from_json(exported)

        assert imported.name == "Sample"
        assert imported.questions == sample_set.questions
        assert imported.progress == {"Q1": {"A1"}, "Q2": {"A3"}}
        assert imported.is_completed

    def test_reimport_replaces_definition_and_prunes_progress(self, memory_store, sample_set):
        sample_set.progress = {"Q1": {"A1"}, "Q2": {"A3"}}
        sample_set.is_completed = True
        memory_store.update_set(sample_set)

        renamed = QuizSet(
            id="SET-1",
            name="Renamed",
            questions=[
                sample_set.questions[0],
                Question(id="Q3", text="New", answers=(Answer(id="A6", text="six", is_correct=True),)),
            ],
        )
        imported = memory_store.import_definition(renamed)

        assert imported.name == "Renamed"
        assert imported.question_ids() == ["Q1", "Q3"]
        assert imported.progress == {"Q1": {"A1"}}
        assert not imported.is_completed

    def test_reimport_with_numeric_id_replaces_the_set(self, memory_store):
        document = {
            "id": 42,
            "name": "Numbered",
            "questions": [{"id": 1, "text": "Q", "answers": [{"id": 2, "text": "a", "isCorrect": True}]}],
        }
        first = memory_store.import_from_json(json.dumps(document))
        document["name"] = "Numbered again"
        second = memory_store.import_from_json(json.dumps(document))

        assert first.id == second.id == "42"
        assert [s.name for s in memory_store.list_sets()] == ["Numbered again"]

    def test_export_is_progress_free_interchange(self, memory_store, sample_set):
        sample_set.progress = {"Q1": {"A1"}}
        memory_store.update_set(sample_set)
        document = json.loads(memory_store.export_to_json("SET-1"))

        assert set(document) == {"id", "name", "questions"}
        assert document["questions"][1]["answers"][0] == {"id": "A3", "text": "three", "isCorrect": True}
        assert parse_quiz_set_json(json.dumps(document)).questions == sample_set.questions


class TestSubscribers:
    def test_events_are_reported(self, memory_store, sample_set):
        events = []
        memory_store.subscribe(lambda event, set_id: events.append((event, set_id)))

        memory_store.update_set(sample_set)
        memory_store.update_set(sample_set)
        memory_store.remove_set("SET-1")

        assert events == [
            (StoreEvent.CREATED, "SET-1"),
            (StoreEvent.UPDATED, "SET-1"),
            (StoreEvent.DELETED, "SET-1"),
        ]

    def test_unsubscribe(self, memory_store, sample_set):
        events = []
        unsubscribe = memory_store.subscribe(lambda event, set_id: events.append(event))
        unsubscribe()
        memory_store.update_set(sample_set)
        assert events == []

    def test_failing_listener_does_not_break_saves(self, memory_store, sample_set):
        def broken(event, set_id):
            raise RuntimeError("boom")

        memory_store.subscribe(broken)
        memory_store.update_set(sample_set)
        assert memory_store.has_set("SET-1")
