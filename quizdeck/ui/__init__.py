"""Qt UI components for the QuizDeck desktop application."""

from .dialog_helpers import (
    confirm_delete_set,
    confirm_discard_draft,
    confirm_reset_progress,
    show_error,
    show_info,
    show_warning,
)
from .main_window import QuizDeckMainWindow
from .question_renderer import render_question

__all__ = [
    "QuizDeckMainWindow",
    "confirm_delete_set",
    "confirm_discard_draft",
    "confirm_reset_progress",
    "show_error",
    "show_info",
    "show_warning",
    "render_question",
]
