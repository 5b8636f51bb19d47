"""Utilities for exporting quiz set definitions (never progress)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from quizdeck.core.models import Question, QuizSet
from quizdeck.core.quiz_importer import ESCAPE_PREFIX, OPTION_LETTERS, is_marker_line


def definition_to_dict(quiz_set: QuizSet) -> dict[str, Any]:
    """Return the interchange representation: id, name and questions only."""
    return {
        "id": quiz_set.id,
        "name": quiz_set.name,
        "questions": [
            {
                "id": question.id,
                "text": question.text,
                "answers": [
                    {"id": answer.id, "text": answer.text, "isCorrect": answer.is_correct}
                    for answer in question.answers
                ],
            }
            for question in quiz_set.questions
        ],
    }


def export_quiz_set_to_json(quiz_set: QuizSet) -> str:
    return json.dumps(definition_to_dict(quiz_set), indent=2, ensure_ascii=False)


def save_quiz_set_to_file(file_path: Path, quiz_set: QuizSet) -> None:
    """Write the set definition to disk; ``.txt`` selects the plain-text format."""

    if not quiz_set.questions:
        raise ValueError("Cannot export an empty quiz set.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if file_path.suffix.lower() == ".txt":
        document = export_quiz_set_to_text(quiz_set)
    else:
        document = export_quiz_set_to_json(quiz_set) + "\n"
    file_path.write_text(document, encoding="utf-8")


def export_quiz_set_to_text(quiz_set: QuizSet) -> str:
    """Serialize to the plain-text format read by ``parse_quiz_set_text``.

    Lines after the first of a question or option are escaped when they are
    blank or look like a marker, so the text reads back unchanged.
    """
    if any(len(question.answers) > len(OPTION_LETTERS) for question in quiz_set.questions):
        raise ValueError(f"The text format supports at most {len(OPTION_LETTERS)} answers per question.")
    blocks = [f"NAME: {quiz_set.name}"]
    blocks.extend(_serialize_question(question) for question in quiz_set.questions)
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_question(question: Question) -> str:
    lines: list[str] = []
    lines.extend(_text_lines("Q", question.text))

    correct_letters: list[str] = []
    for letter, answer in zip(OPTION_LETTERS, question.answers):
        lines.extend(_text_lines(letter, answer.text))
        if answer.is_correct:
            correct_letters.append(letter)

    if correct_letters:
        lines.append(f"CORRECT: {', '.join(correct_letters)}")

    return "\n".join(lines)


def _text_lines(marker: str, text: str) -> list[str]:
    first, *rest = text.strip().splitlines() or [""]
    lines = [f"{marker}: {first.strip()}"]
    for line in rest:
        if is_marker_line(line) or not line.strip():
            lines.append(ESCAPE_PREFIX + line.strip())
        else:
            lines.append(line)
    return lines
