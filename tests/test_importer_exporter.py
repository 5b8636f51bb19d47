"""Tests for the JSON and plain-text interchange formats."""
import json

import pytest

from quizdeck.core.models import Answer, Question, QuizSet
from quizdeck.core.quiz_exporter import (
    definition_to_dict,
    export_quiz_set_to_text,
    save_quiz_set_to_file,
)
from quizdeck.core.quiz_importer import (
    QuizImportError,
    load_quiz_set_from_file,
    parse_quiz_set_json,
    parse_quiz_set_text,
    quiz_set_from_definition,
)

SAMPLE_TEXT = """NAME: Geometry

Q: What is $30^o$ in radians?
A: \\frac{\\pi}{2}
B: \\frac{\\pi}{6}
C: \\frac{\\pi}{3}
CORRECT: B

---

Q: Which angles are acute?
They are smaller than a right angle.
A: $30^o$
B: $89^o$
C: $90^o$
CORRECT: A, B
"""


class TestJsonImport:
    def test_missing_ids_are_generated(self):
        quiz_set = quiz_set_from_definition(
            {"name": "Set", "questions": [{"text": "Q", "answers": [{"text": "a", "isCorrect": True}]}]}
        )
        question = quiz_set.questions[0]
        assert quiz_set.id and question.id and question.answers[0].id
        assert quiz_set.progress == {}

    def test_progress_in_document_is_ignored(self, sample_set):
        data = definition_to_dict(sample_set)
        data["progress"] = {"Q1": ["A1"]}
        data["isCompleted"] = True
        quiz_set = quiz_set_from_definition(data)
        assert quiz_set.progress == {}
        assert not quiz_set.is_completed

    def test_invalid_json(self):
        with pytest.raises(QuizImportError, match="Invalid JSON"):
            parse_quiz_set_json("{")

    @pytest.mark.parametrize(
        ("document", "message"),
        [
            ([], "JSON object"),
            ({"questions": []}, "name"),
            ({"name": "Set"}, "questions"),
            ({"name": "Set", "questions": [{"text": "", "answers": []}]}, "no text"),
            ({"name": "Set", "questions": [{"text": "Q", "answers": []}]}, "at least one answer"),
            ({"name": "Set", "questions": [{"text": "Q", "answers": [{"text": "a"}]}]}, "no correct answer"),
            (
                {"name": "Set", "questions": [{"text": "Q", "answers": [{"text": "a", "isCorrect": "yes"}]}]},
                "isCorrect",
            ),
            (
                {
                    "name": "Set",
                    "questions": [
                        {"id": "Q", "text": "One", "answers": [{"text": "a", "isCorrect": True}]},
                        {"id": "Q", "text": "Two", "answers": [{"text": "b", "isCorrect": True}]},
                    ],
                },
                "Question id 'Q' is used more than once",
            ),
            (
                {
                    "name": "Set",
                    "questions": [
                        {
                            "text": "One",
                            "answers": [
                                {"id": "A", "text": "a", "isCorrect": True},
                                {"id": "A", "text": "b"},
                            ],
                        }
                    ],
                },
                "answer id 'A' is used more than once",
            ),
            ({"id": ["SET"], "name": "Set", "questions": []}, "id must be a string"),
            (
                {"name": "Set", "questions": [{"id": 1.5, "text": "Q", "answers": [{"text": "a", "isCorrect": True}]}]},
                "id must be a string",
            ),
        ],
    )
    def test_invalid_documents(self, document, message):
        with pytest.raises(QuizImportError, match=message):
            quiz_set_from_definition(document)

    def test_numeric_ids_are_read_as_strings(self):
        quiz_set = quiz_set_from_definition(
            {
                "id": 5,
                "name": "Set",
                "questions": [{"id": 7, "text": "Q", "answers": [{"id": 9, "text": "a", "isCorrect": True}]}],
            }
        )
        assert quiz_set.id == "5"
        assert quiz_set.questions[0].id == "7"
        assert quiz_set.questions[0].answers[0].id == "9"

    def test_duplicate_question_ids_never_share_progress(self):
        document = {
            "name": "Set",
            "questions": [
                {"id": "Q", "text": "One", "answers": [{"id": "A", "text": "a", "isCorrect": True}]},
                {"id": "Q", "text": "Two", "answers": [{"id": "C", "text": "c", "isCorrect": True}]},
            ],
        }
        with pytest.raises(QuizImportError):
            parse_quiz_set_json(json.dumps(document))


class TestTextFormat:
    def test_parse_sample(self):
        quiz_set = parse_quiz_set_text(SAMPLE_TEXT)
        assert quiz_set.name == "Geometry"
        assert len(quiz_set.questions) == 2

        first, second = quiz_set.questions
        assert [a.is_correct for a in first.answers] == [False, True, False]
        assert second.text == "Which angles are acute?\nThey are smaller than a right angle."
        assert second.allows_multiple_selection

    def test_default_name(self):
        quiz_set = parse_quiz_set_text("Q: One?\nA: yes\nB: no\nCORRECT: A", default_name="notes")
        assert quiz_set.name == "notes"

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("", "any questions"),
            ("A: yes\nB: no\nCORRECT: A", "Question text missing"),
            ("Q: One?\nCORRECT: A", "at least one option"),
            ("Q: One?\nA: yes\nC: no\nCORRECT: A", "consecutively"),
            ("Q: One?\nA: yes\nB: no", "CORRECT"),
            ("Q: One?\nA: yes\nB: no\nCORRECT: D", "undefined option"),
            ("stray text\nQ: One?\nA: yes\nB: no\nCORRECT: A", "outside of a known section"),
        ],
    )
    def test_invalid_text(self, text, message):
        with pytest.raises(QuizImportError, match=message):
            parse_quiz_set_text(text)

    def test_export_text_can_be_parsed_back(self, sample_set):
        text = export_quiz_set_to_text(sample_set)
        assert text.startswith("NAME: Sample\n")
        assert "CORRECT: A, B" in text

        parsed = parse_quiz_set_text(text)
        assert parsed.name == "Sample"
        assert [q.text for q in parsed.questions] == ["Pick A1", "Pick A3 and A4"]
        assert [len(q.correct_answer_ids) for q in parsed.questions] == [1, 2]

    @pytest.mark.parametrize(
        ("question_text", "answer_texts"),
        [
            ("Only one option here", ["The only answer"]),
            ("Given:\nB: a constant\nwhich holds?", ["x", "y"]),
            ("Para one.\n\nPara two.", ["first\n\nsecond", "other"]),
            ("Markers inside:\nQ: not a question\nCORRECT: Z\nNAME: no\n---\nend", ["a", "b"]),
            ("LaTeX stays:\n\\frac{\\pi}{2}\n\\\nA literal backslash line above", ["\\sqrt{2}", "line\n\\B: kept"]),
        ],
        ids=["single-answer", "option-like-line", "blank-lines", "section-markers", "backslashes"],
    )
    def test_text_export_round_trips_question_content(self, question_text, answer_texts):
        quiz_set = QuizSet(
            name="Round trip",
            questions=[
                Question(
                    text=question_text,
                    answers=tuple(
                        Answer(text=text, is_correct=index == 0) for index, text in enumerate(answer_texts)
                    ),
                )
            ],
        )

        parsed = parse_quiz_set_text(export_quiz_set_to_text(quiz_set))

        assert len(parsed.questions) == 1
        question = parsed.questions[0]
        assert question.text == question_text
        assert [a.text for a in question.answers] == answer_texts
        assert [a.is_correct for a in question.answers] == [i == 0 for i in range(len(answer_texts))]


class TestFiles:
    def test_json_file_round_trip(self, tmp_path, sample_set):
        path = tmp_path / "out" / "sample.json"
        save_quiz_set_to_file(path, sample_set)

        assert json.loads(path.read_text(encoding="utf-8"))["id"] == "SET-1"
        imported = load_quiz_set_from_file(path)
        assert imported.source_path == path
        assert imported.quiz_set.questions == sample_set.questions

    def test_text_file_uses_stem_as_fallback_name(self, tmp_path):
        path = tmp_path / "chemistry.txt"
        path.write_text("Q: H2O is?\nA: water\nB: salt\nCORRECT: A\n", encoding="utf-8")
        assert load_quiz_set_from_file(path).quiz_set.name == "chemistry"

    def test_empty_set_cannot_be_exported(self, tmp_path):
        with pytest.raises(ValueError):
            save_quiz_set_to_file(tmp_path / "empty.json", QuizSet(name="Empty"))
