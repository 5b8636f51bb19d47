"""Styling module for QuizDeck."""

from .color_palette import AnswerState, ColorPalette, Theme

__all__ = ["AnswerState", "ColorPalette", "Theme"]
