"""Utilities for importing quiz set definitions.

Two formats are understood. The JSON interchange format mirrors the export
produced by ``quiz_exporter``::

    {
      "id": "5F0C...",
      "name": "Set name",
      "questions": [
        {"id": "...", "text": "...",
         "answers": [{"id": "...", "text": "...", "isCorrect": true}]}
      ]
    }

Missing ids are generated and numeric ids are read as strings. Question ids
must be unique within a set and answer ids unique within a question. Any
progress that a document carries is ignored: progress belongs to the local
store, never to the interchange file.

The plain-text format (repeat blocks separated by blank lines or '---')::

    NAME: Set name            (optional, first block only)

    Q: Question text (supports markdown + LaTeX). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text
    C: Third option text      (one to sixteen options, lettered A-P)
    CORRECT: A, C             (one or more letters)

Inside question and option text a line holding a single backslash stands for
a blank line, and a backslash in front of a line that would otherwise read as
a marker (``B: ...``, ``CORRECT: ...``, ``---``) keeps it as plain text.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import string
from typing import Any

from quizdeck.core.models import Answer, Question, QuizSet, new_identifier

logger = logging.getLogger(__name__)


class QuizImportError(Exception):
    """Raised when a quiz set definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuizSet:
    """Container for an imported set definition and where it came from."""

    source_path: Path | None
    quiz_set: QuizSet


OPTION_LETTERS = string.ascii_uppercase[:16]  # "Q:" marks the question text
ESCAPE_PREFIX = "\\"
_SECTION_MARKERS = ("Q:", "CORRECT:", "NAME:")
_BLOCK_SEPARATOR = "---"


def load_quiz_set_from_file(file_path: Path) -> ImportedQuizSet:
    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".txt":
        quiz_set = parse_quiz_set_text(text, default_name=file_path.stem)
    else:
        quiz_set = parse_quiz_set_json(text)
    logger.info("Imported set '%s' (%d questions) from %s", quiz_set.name, len(quiz_set.questions), file_path)
    return ImportedQuizSet(source_path=file_path, quiz_set=quiz_set)


# --- JSON interchange ---


def parse_quiz_set_json(text: str) -> QuizSet:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise QuizImportError(f"Invalid JSON: {exc.msg} (line {exc.lineno}).") from exc
    return quiz_set_from_definition(data)


def quiz_set_from_definition(data: Any) -> QuizSet:
    """Build a fresh, progress-free quiz set from a decoded interchange document."""
    if not isinstance(data, dict):
        raise QuizImportError("Quiz set document must be a JSON object.")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise QuizImportError("Quiz set name is missing.")

    raw_questions = data.get("questions")
    if not isinstance(raw_questions, list):
        raise QuizImportError("Quiz set must contain a 'questions' list.")

    questions = [_question_from_definition(item, position) for position, item in enumerate(raw_questions, 1)]
    _reject_duplicates([question.id for question in questions], "Question id")
    return QuizSet(id=_identifier(data.get("id"), "Quiz set"), name=name.strip(), questions=questions)


def _question_from_definition(data: Any, position: int) -> Question:
    if not isinstance(data, dict):
        raise QuizImportError(f"Question {position} must be a JSON object.")

    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        raise QuizImportError(f"Question {position} has no text.")

    raw_answers = data.get("answers")
    if not isinstance(raw_answers, list) or not raw_answers:
        raise QuizImportError(f"Question {position} must have at least one answer.")

    answers: list[Answer] = []
    for item in raw_answers:
        if not isinstance(item, dict) or not isinstance(item.get("text"), str):
            raise QuizImportError(f"Question {position} contains a malformed answer.")
        is_correct = item.get("isCorrect", False)
        if not isinstance(is_correct, bool):
            raise QuizImportError(f"Question {position}: 'isCorrect' must be true or false.")
        answer_id = _identifier(item.get("id"), f"Question {position}: answer")
        answers.append(Answer(id=answer_id, text=item["text"], is_correct=is_correct))

    if not any(answer.is_correct for answer in answers):
        raise QuizImportError(f"Question {position} has no correct answer.")
    _reject_duplicates([answer.id for answer in answers], f"Question {position}: answer id")

    return Question(id=_identifier(data.get("id"), f"Question {position}"), text=text.strip(), answers=tuple(answers))


def _identifier(value: Any, owner: str) -> str:
    if value is None:
        return new_identifier()
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise QuizImportError(f"{owner} id must be a string.")
    return value.strip() or new_identifier()


def _reject_duplicates(identifiers: list[str], label: str) -> None:
    seen: set[str] = set()
    for identifier in identifiers:
        if identifier in seen:
            raise QuizImportError(f"{label} '{identifier}' is used more than once.")
        seen.add(identifier)


# --- Plain text ---


def is_marker_line(line: str) -> bool:
    """Return True when a text line would be read as structure rather than content."""
    stripped = line.strip()
    if stripped == _BLOCK_SEPARATOR:
        return True
    if stripped.startswith(ESCAPE_PREFIX):
        rest = stripped[len(ESCAPE_PREFIX):]
        return not rest or is_marker_line(rest)
    upper = stripped.upper()
    if upper.startswith(_SECTION_MARKERS):
        return True
    return len(stripped) > 2 and upper[0] in OPTION_LETTERS and stripped[1] == ":"


def _unescape(line: str) -> str:
    if line.startswith(ESCAPE_PREFIX):
        rest = line[len(ESCAPE_PREFIX):]
        if not rest or is_marker_line(rest):
            return rest
    return line


def parse_quiz_set_text(text: str, default_name: str = "Imported set") -> QuizSet:
    blocks = _split_blocks(text)
    name = default_name
    if blocks and blocks[0].upper().startswith("NAME:"):
        header, _, rest = blocks[0].partition("\n")
        name = header.split(":", 1)[1].strip() or default_name
        blocks[0] = rest.strip()

    questions = [_parse_block(block) for block in blocks if block]
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return QuizSet(name=name, questions=questions)


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == _BLOCK_SEPARATOR:
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return blocks


def _parse_block(block: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letters: set[str] = set()
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            raw_letters = line.split(":", 1)[1].replace(",", " ").split()
            correct_letters = {letter.upper() for letter in raw_letters}
            current_section = None
            continue

        if len(line) > 2 and upper[0] in OPTION_LETTERS and line[1] == ":":
            letter = upper[0]
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        content = _unescape(line)
        if current_section == "Q":
            question_lines.append(content)
        elif current_section in options:
            options[current_section] = options[current_section] + f"\n{content}"
        else:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    letters = sorted(options)
    if not letters:
        raise QuizImportError("Each question must define at least one option.")
    if letters != list(OPTION_LETTERS[: len(letters)]):
        raise QuizImportError("Options must be lettered consecutively starting at A.")
    if any(not options[letter].strip() for letter in letters):
        raise QuizImportError("Option text cannot be empty.")

    if not correct_letters:
        raise QuizImportError("CORRECT must name at least one option.")
    unknown = correct_letters - set(letters)
    if unknown:
        raise QuizImportError(f"CORRECT refers to undefined option(s): {', '.join(sorted(unknown))}.")

    answers = tuple(
        Answer(text=options[letter].strip(), is_correct=letter in correct_letters) for letter in letters
    )
    return Question(text=question_text, answers=answers)
