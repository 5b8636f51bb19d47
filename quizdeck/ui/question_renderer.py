"""Question rendering utilities for the session view."""

from __future__ import annotations

from quizdeck.core.markdown_math_renderer import renderer
from quizdeck.core.models import Question


def render_question(question: Question, font_size: int = 14) -> str:
    """Render a question's text as a full HTML document for QWebEngineView.

    Answers are rendered as buttons by the session panel, so only the question
    body goes into the document.
    """
    markdown = question.text.strip() or "(No question text)"
    return renderer.render_full_document(markdown, font_size=font_size)
