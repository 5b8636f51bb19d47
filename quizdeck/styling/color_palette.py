"""Color palette for QuizDeck supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


class AnswerState(Enum):
    """How an answer button should look in the session view."""
    IDLE = auto()
    SELECTED = auto()
    CORRECT = auto()
    INCORRECT = auto()
    MISSED = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#000000", dark="#F5F5F5")
    TEXT_SECONDARY = ThemeColors(light="#666666", dark="#AAAAAA")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_SECONDARY = ThemeColors(light="#F5F5F5", dark="#2D2D2D")

    BORDER_PRIMARY = ThemeColors(light="#D1D1D1", dark="#555555")

    BUTTON_PRIMARY_BG = ThemeColors(light="#0078D4", dark="#4A9EFF")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F5F5F5", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E8E8E8", dark="#505050")

    # Answer feedback
    SUCCESS = ThemeColors(light="#107C10", dark="#6FCF6F")
    WARNING = ThemeColors(light="#FFB900", dark="#FFC83D")
    ERROR = ThemeColors(light="#D13438", dark="#FF6B6B")

    @classmethod
    def for_answer_state(cls, state: AnswerState) -> ThemeColors:
        return {
            AnswerState.IDLE: cls.BORDER_PRIMARY,
            AnswerState.SELECTED: cls.BUTTON_PRIMARY_BG,
            AnswerState.CORRECT: cls.SUCCESS,
            AnswerState.INCORRECT: cls.ERROR,
            AnswerState.MISSED: cls.WARNING,
        }[state]

    @classmethod
    def for_score(cls, percentage: int, threshold: int) -> ThemeColors:
        return cls.SUCCESS if percentage >= threshold else cls.ERROR
